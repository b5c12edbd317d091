"""MediDesk TUI theme: a dark navy palette with cyan and yellow accents."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MediDeskTheme:
    """Fixed colour palette shared by every screen."""

    name: str = "medidesk-dark"

    # Accents
    primary: str = "cyan"             # Focused fields and links
    highlight: str = "#FAFA6E"        # Selected rows (yellow)
    heading: str = "#E6E6FA"          # Panel titles (lavender)
    link: str = "#81C7F5"             # Sky blue
    icon: str = "#8CDB8C"             # Feature icons (green)

    # Backgrounds
    bg_base: str = "#10101C"
    bg_panel: str = "#161623"
    bg_selected: str = "#282841"
    bg_dialog: str = "#1E1E2E"

    # Foregrounds
    fg_base: str = "white"
    fg_item: str = "#C8C8DC"
    fg_muted: str = "grey50"
    fg_help: str = "#8C8CAA"

    # Borders
    border: str = "#4B4B78"
    border_active: str = "#FAFA6E"
    border_idle: str = "#8C8CC8"

    # Status
    success: str = "green"
    error: str = "red"
    danger: str = "#FF6464"           # Logout link

    def focus(self, focused: bool) -> str:
        return self.primary if focused else self.fg_base


# Global theme instance
_current_theme = MediDeskTheme()


def get_theme() -> MediDeskTheme:
    """Get the current theme."""
    return _current_theme
