"""MediDesk TUI.

Screens, the dispatcher and Rich rendering helpers. The Textual host lives
in ``medidesk.tui.app`` and is imported on demand.
"""

from .dispatcher import REGISTRATION_SUCCESS_TEXT, ScreenDispatcher
from .render import Area

__all__ = [
    "Area",
    "ScreenDispatcher",
    "REGISTRATION_SUCCESS_TEXT",
]
