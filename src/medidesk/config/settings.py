"""Configuration system for MediDesk.

Implements layered configuration with the following priority (high → low):
1) CLI overrides (explicit flags)
2) Environment variables (prefix: MEDIDESK_)
3) User config file (~/.medidesk/config.yaml)
4) Project config file (./medidesk.yaml)
5) Built-in defaults (fallback)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from medidesk.config.defaults import (
    DEFAULT_CONFIG,
    ENV_PREFIX,
    PROJECT_CONFIG_FILENAME,
    USER_CONFIG_PATH,
)


class GeneralSettings(BaseModel):
    verbosity: str = Field(default="info")
    output_format: str = Field(default="text")
    color_enabled: bool = Field(default=True)
    log_file: str = Field(default="")


class UISettings(BaseModel):
    message_ttl_seconds: float = Field(default=5.0, gt=0)
    tick_rate_hz: float = Field(default=30.0, gt=0)
    min_width: int = Field(default=95, ge=1)
    min_height: int = Field(default=35, ge=1)

    @property
    def tick_interval(self) -> float:
        return 1.0 / self.tick_rate_hz


class StorageSettings(BaseModel):
    backend: str = Field(default="sqlite")
    db_path: str = Field(default="medidesk.db")
    seed_root_user: bool = Field(default=True)

    @field_validator("backend")
    @classmethod
    def _known_backend(cls, value: str) -> str:
        lowered = value.lower()
        if lowered not in {"sqlite", "memory"}:
            raise ValueError(f"Unknown storage backend: {value}")
        return lowered


class Settings(BaseModel):
    general: GeneralSettings
    ui: UISettings
    storage: StorageSettings

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        return cls.model_validate(data)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base, returning a new dict."""

    result = {**base}
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - unlikely with safe_load
        raise ValueError(f"Failed to parse YAML config at {path}: {exc}") from exc


def _ensure_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _parse_scalar(value: str) -> Any:
    """Best-effort parsing for CLI/env string values."""

    trimmed = value.strip()
    # Try JSON (covers numbers, booleans, null, quoted strings)
    try:
        return json.loads(trimmed)
    except json.JSONDecodeError:
        pass

    lowered = trimmed.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"none", "null"}:
        return None
    return trimmed


def _set_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    current = target
    for key in path[:-1]:
        current = current.setdefault(key, {})
    current[path[-1]] = value


def _get_nested(data: dict[str, Any], path: list[str]) -> Any:
    current: Any = data
    for key in path:
        if not isinstance(current, dict) or key not in current:
            raise KeyError(".".join(path))
        current = current[key]
    return current


class ConfigService:
    """Loads, merges, and persists MediDesk configuration."""

    def __init__(
        self,
        env_prefix: str = ENV_PREFIX,
        project_dir: Path | None = None,
        user_config_path: Path | None = None,
    ):
        self.env_prefix = env_prefix
        self.project_config_path = (project_dir or Path.cwd()) / PROJECT_CONFIG_FILENAME
        self.user_config_path = user_config_path or USER_CONFIG_PATH

    def load(self, cli_overrides: dict[str, Any] | None = None) -> Settings:
        data = DEFAULT_CONFIG

        for path in (self.project_config_path, self.user_config_path):
            data = _deep_merge(data, _load_yaml(path))

        data = _deep_merge(data, self._env_overrides())
        if cli_overrides:
            data = _deep_merge(data, cli_overrides)

        try:
            return Settings.from_dict(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid configuration: {exc}") from exc

    def set_value(
        self, key_path: str, value: Any, scope: Literal["user", "project"] = "user"
    ) -> Path:
        """Write one key into the scoped file; nothing is written if it fails validation."""

        parts = self._normalize_key_path(key_path)
        _get_nested(DEFAULT_CONFIG, parts)
        target = self.user_config_path if scope == "user" else self.project_config_path
        current_data = _load_yaml(target)
        _set_nested(current_data, parts, value)
        try:
            Settings.from_dict(_deep_merge(DEFAULT_CONFIG, current_data))
        except ValidationError as exc:
            raise ValueError(f"Invalid configuration: {exc}") from exc
        _ensure_dir(target)
        with target.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(current_data, handle, sort_keys=False)
        return target

    def get_value(self, key_path: str, cli_overrides: dict[str, Any] | None = None) -> Any:
        data = self.load(cli_overrides=cli_overrides).model_dump()
        parts = self._normalize_key_path(key_path)
        return _get_nested(data, parts)

    def _env_overrides(self) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        prefix = f"{self.env_prefix}_"
        for key, raw_value in os.environ.items():
            if not key.startswith(prefix):
                continue
            path_part = key[len(prefix) :]
            path_segments = self._normalize_env_key(path_part)
            if not path_segments:
                continue
            _set_nested(overrides, path_segments, _parse_scalar(raw_value))
        return overrides

    def _normalize_env_key(self, key: str) -> list[str]:
        # MEDIDESK_UI__MESSAGE_TTL_SECONDS -> ["ui", "message_ttl_seconds"]
        if "__" in key:
            segments = key.split("__")
        else:
            segments = key.split("_", 1)
        return [segment.lower() for segment in segments if segment]

    def _normalize_key_path(self, key_path: str) -> list[str]:
        if not key_path:
            raise ValueError("Key path cannot be empty")
        return [segment.strip() for segment in key_path.split(".") if segment.strip()]


config_service = ConfigService()


# Convenience singleton for global settings access
_cached_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _cached_settings
    if _cached_settings is None:
        _cached_settings = config_service.load()
    return _cached_settings


def reload_settings(cli_overrides: dict[str, Any] | None = None) -> Settings:
    """Reload settings from configuration sources."""
    global _cached_settings
    _cached_settings = config_service.load(cli_overrides=cli_overrides)
    return _cached_settings
