"""Navigation core: keys, routing, focus, menus, dialogs and messages."""

from .dialog import DialogChoice, DialogResult, ModalDialog
from .focus import FocusCursor
from .keys import Key, KeyEvent, from_textual, text_events
from .menu import HOME_FEATURES, Feature, MenuOption, MenuPanel, TwoLevelMenu, build_home_menu
from .messages import MESSAGE_TTL_SECONDS, MessageKind, StatusMessage, TransientMessage
from .routing import NO_TRANSITION, RoutingDecision, RoutingKind, ScreenId

__all__ = [
    # Keys
    "Key",
    "KeyEvent",
    "from_textual",
    "text_events",
    # Routing
    "ScreenId",
    "RoutingKind",
    "RoutingDecision",
    "NO_TRANSITION",
    # Focus
    "FocusCursor",
    # Menu
    "MenuPanel",
    "MenuOption",
    "Feature",
    "TwoLevelMenu",
    "HOME_FEATURES",
    "build_home_menu",
    # Dialog
    "DialogChoice",
    "DialogResult",
    "ModalDialog",
    # Messages
    "MESSAGE_TTL_SECONDS",
    "MessageKind",
    "StatusMessage",
    "TransientMessage",
]
