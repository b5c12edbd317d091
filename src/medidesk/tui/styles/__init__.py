"""TUI styles."""

from .theme import MediDeskTheme, get_theme

__all__ = ["MediDeskTheme", "get_theme"]
