"""Configuration package."""

from .settings import (
    ConfigService,
    GeneralSettings,
    Settings,
    StorageSettings,
    UISettings,
    config_service,
    get_settings,
    reload_settings,
)

__all__ = [
    "ConfigService",
    "Settings",
    "GeneralSettings",
    "UISettings",
    "StorageSettings",
    "config_service",
    "get_settings",
    "reload_settings",
]
