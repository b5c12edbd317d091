"""
Shared utilities module.
"""

from medidesk.utils.logging import (
    bind_session_context,
    clear_session_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)

__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_session_context",
    "clear_session_context",
]
