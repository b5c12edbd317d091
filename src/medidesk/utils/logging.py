"""Logging setup and configuration using structlog."""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import structlog

from medidesk.config.settings import Settings

_LEVEL_MAP = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

# Keys whose values must never reach a log sink
_REDACTED_KEYS = frozenset({"password", "confirm_password", "password_hash"})


def _json_serializer(obj: Any, **kwargs: Any) -> str:
    return json.dumps(obj, default=_json_default, **kwargs)


def _json_default(obj: Any) -> Any:
    """Default handler for JSON serialization of special types."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, set):
        return sorted(obj, key=str)
    return str(obj)


def _redact_secrets(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor that masks credential fields."""
    for key in _REDACTED_KEYS & event_dict.keys():
        event_dict[key] = "***"
    return event_dict


# Context variable for the signed-in session
_session_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "session_context", default=None
)


def _get_context() -> dict[str, Any]:
    ctx = _session_context.get()
    if ctx is None:
        ctx = {}
        _session_context.set(ctx)
    return ctx


def bind_session_context(
    user_id: int | None = None,
    username: str | None = None,
    **extra: Any,
) -> None:
    """Attach the signed-in user to every subsequent log line.

    Parameters
    ----------
    user_id : Optional[int]
        Row id of the authenticated user.
    username : Optional[str]
        Login name of the authenticated user.
    **extra : Any
        Additional context key-value pairs.
    """
    ctx = _get_context().copy()
    if user_id is not None:
        ctx["user_id"] = user_id
    if username:
        ctx["username"] = username
    ctx.update(extra)
    _session_context.set(ctx)


def clear_session_context() -> None:
    """Clear the current session context (on logout)."""
    _session_context.set({})


def _add_session_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor to inject session context."""
    for key, value in _get_context().items():
        event_dict.setdefault(key, value)
    return event_dict


def _resolve_level(level: str) -> int:
    return _LEVEL_MAP.get(level.lower(), logging.INFO)


def configure_logging(
    *,
    level: str = "info",
    output_format: str = "text",
    color: bool = True,
    log_file: Path | None = None,
    console: bool = True,
) -> None:
    """Configure structlog + stdlib logging.

    Parameters
    ----------
    level: str
            Minimum level (debug, info, warning, error, critical).
    output_format: str
            "text" for console-friendly rendering, "json" for machine parsing.
    color: bool
            Enable colored console output when using text mode.
    log_file: Optional[Path]
            If provided, also write logs to this file.
    console: bool
            Write to stderr. Disabled while the full-screen UI owns the terminal.
    """

    log_level = _resolve_level(level)
    is_json = output_format.lower() == "json"

    if is_json:
        renderer = structlog.processors.JSONRenderer(
            serializer=_json_serializer,
            sort_keys=True,
        )
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=color)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            _add_session_context,  # type: ignore[list-item]
            _redact_secrets,  # type: ignore[list-item]
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    if not handlers:
        handlers.append(logging.NullHandler())

    root = logging.getLogger()
    root.handlers = []
    root.setLevel(log_level)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)

    # Silence verbose third-party loggers
    logging.getLogger("transitions").setLevel(logging.WARNING)


def configure_from_settings(
    settings: Settings,
    *,
    log_file: Path | None = None,
    console: bool = False,
) -> None:
    """Configure logging using Settings values.

    The UI draws over the whole terminal, so by default only the log file
    receives records.
    """

    target = log_file
    if target is None and settings.general.log_file:
        target = Path(settings.general.log_file).expanduser()

    configure_logging(
        level=settings.general.verbosity,
        output_format=settings.general.output_format,
        color=settings.general.color_enabled,
        log_file=target,
        console=console,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a configured structlog logger."""

    return structlog.get_logger(name) if name else structlog.get_logger()
