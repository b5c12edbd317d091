"""Home dashboard: feature list, submenu panel and a logout link."""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Any

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from transitions import Machine

from medidesk.core.dialog import DialogResult, ModalDialog
from medidesk.core.keys import Key, KeyEvent
from medidesk.core.menu import TwoLevelMenu, build_home_menu
from medidesk.core.routing import NO_TRANSITION, RoutingDecision, ScreenId
from medidesk.data.store import UserStore
from medidesk.tui import render
from medidesk.tui.render import Area
from medidesk.tui.screens.base import HISTORY_LIMIT, Screen
from medidesk.tui.styles.theme import get_theme

HELP_TEXT = "←→: Switch panels | ↑↓: Navigate | Enter: Select | Tab: Logout | Esc: Back"
DEFAULT_DISPLAY_NAME = "User"


class HomeState(str, Enum):
    BROWSING = "browsing"
    LOGOUT_CONFIRM = "logout_confirm"


class SelectionMode(str, Enum):
    """What Enter acts on: the menus or the logout link."""

    MENU = "menu"
    LOGOUT_LINK = "logout_link"


HOME_TRANSITIONS: list[dict[str, Any]] = [
    {
        "trigger": "request_logout",
        "source": HomeState.BROWSING.value,
        "dest": HomeState.LOGOUT_CONFIRM.value,
        "after": "_open_logout_dialog",
    },
    {
        "trigger": "close_logout_dialog",
        "source": HomeState.LOGOUT_CONFIRM.value,
        "dest": HomeState.BROWSING.value,
        "after": "_hide_logout_dialog",
    },
]


class HomeScreen(Screen):
    """Two-panel dashboard shown after a successful login."""

    screen_id = ScreenId.HOME

    def __init__(self, menu: TwoLevelMenu | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.menu = menu or build_home_menu()
        self.selection_mode = SelectionMode.MENU
        self.logout_dialog = ModalDialog("Confirm Logout", "Are you sure you want to logout?")
        self.display_name: str | None = None
        self.history: deque[str] = deque(maxlen=HISTORY_LIMIT)

        self.state: str = HomeState.BROWSING.value
        self._machine = Machine(
            model=self,
            states=[state.value for state in HomeState],
            transitions=HOME_TRANSITIONS,
            initial=HomeState.BROWSING.value,
            auto_transitions=False,
            ignore_invalid_triggers=True,
            after_state_change=self._record_transition,
        )

    def _record_transition(self) -> None:
        self.history.append(self.state)
        self.logger.debug("screen.transition", state=self.state)

    def _open_logout_dialog(self) -> None:
        self.logout_dialog.open()

    def _hide_logout_dialog(self) -> None:
        self.logout_dialog.dismiss()

    def load_display_name(self, user_id: int, store: UserStore) -> None:
        """Fetch the greeting name. Store errors propagate to the caller."""
        self.display_name = store.lookup_display_name(user_id)

    @property
    def welcome_name(self) -> str:
        return self.display_name or DEFAULT_DISPLAY_NAME

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_key(self, event: KeyEvent) -> RoutingDecision:
        if self.is_logout_confirm():
            return self._on_dialog_key(event)

        key = event.key
        if key == Key.TAB:
            self.selection_mode = (
                SelectionMode.LOGOUT_LINK
                if self.selection_mode == SelectionMode.MENU
                else SelectionMode.MENU
            )
        elif key == Key.ESC:
            self._back()
        elif self.selection_mode == SelectionMode.LOGOUT_LINK:
            if key == Key.ENTER:
                self.request_logout()
        else:
            return self._on_menu_key(key)
        return NO_TRANSITION

    def _on_dialog_key(self, event: KeyEvent) -> RoutingDecision:
        result = self.logout_dialog.handle_input(event)
        if result is None:
            return NO_TRANSITION
        self.close_logout_dialog()
        if result == DialogResult.CONFIRMED:
            self.logger.info("home.logout_confirmed")
            return RoutingDecision.switch_to(ScreenId.LOGIN)
        return NO_TRANSITION

    def _on_menu_key(self, key: Key) -> RoutingDecision:
        menu = self.menu
        if key == Key.LEFT:
            menu.leave_panel()
        elif key == Key.RIGHT:
            menu.enter_panel()
        elif key == Key.UP:
            menu.move_up()
        elif key == Key.DOWN:
            menu.move_down()
        elif key == Key.ENTER:
            if not menu.in_submenu:
                menu.enter_panel()
                return NO_TRANSITION
            feature_index, option_index = menu.selected_action()
            action = menu.action_for(feature_index, option_index)
            if action is None:
                self.logger.debug(
                    "home.unmapped_action", feature=feature_index, option=option_index
                )
                return RoutingDecision.switch_to(ScreenId.HOME)
            return RoutingDecision.switch_to(action)
        return NO_TRANSITION

    def _back(self) -> None:
        """Esc: leave the submenu first, then offer to log out."""
        if self.menu.in_submenu:
            self.menu.leave_panel()
        else:
            self.request_logout()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _feature_panel(self) -> Panel:
        theme = get_theme()
        menu = self.menu
        active = not menu.in_submenu and self.selection_mode == SelectionMode.MENU
        lines = Text()
        for index, feature in enumerate(menu.features):
            selected = index == menu.selected_feature_index
            style = f"bold {theme.highlight}" if selected else theme.fg_item
            if selected and active:
                style += f" on {theme.bg_selected}"
            lines.append(render.POINTER if selected else "  ", style=style)
            lines.append(f"{feature.icon} ", style=theme.icon)
            lines.append(feature.label, style=style)
            if index < len(menu.features) - 1:
                lines.append("\n")
        return Panel(
            lines,
            title=" Hospital Management ",
            border_style=theme.border_active if active else theme.border_idle,
            style=f"on {theme.bg_panel}",
            box=box.ROUNDED,
        )

    def _submenu_panel(self) -> Panel:
        theme = get_theme()
        menu = self.menu
        active = menu.in_submenu and self.selection_mode == SelectionMode.MENU
        feature = menu.selected_feature
        cursor = menu.current_submenu_cursor
        lines = Text()
        for index, option in enumerate(feature.options):
            selected = cursor.is_at(index)
            style = f"bold {theme.highlight}" if selected and active else theme.fg_item
            if selected and active:
                style += f" on {theme.bg_selected}"
            lines.append(render.POINTER if selected else "  ", style=style)
            lines.append(option.label, style=style if option.action else f"{style} dim")
            if index < len(feature.options) - 1:
                lines.append("\n")
        return Panel(
            lines,
            title=" Sub menu ",
            border_style=theme.border_active if active else theme.border_idle,
            style=f"on {theme.bg_panel}",
            box=box.ROUNDED,
        )

    def render(self, area: Area) -> RenderableType:
        theme = get_theme()
        panels = Table.grid(expand=True, padding=(0, 1))
        panels.add_column(ratio=1)
        panels.add_column(ratio=1)
        panels.add_row(self._feature_panel(), self._submenu_panel())

        logout_focused = self.selection_mode == SelectionMode.LOGOUT_LINK
        logout = Text(
            "[ Logout ]",
            style=f"bold {theme.danger}" if logout_focused else theme.fg_muted,
        )

        parts: list[RenderableType] = [
            render.centered(
                Text(f"Welcome to MediDesk, {self.welcome_name}", style=f"bold {theme.link}")
            ),
            render.centered(Text("Please select a task:", style=theme.fg_item)),
            Text(""),
            panels,
            Text(""),
            render.centered(logout),
            render.message_line(self.message),
            render.help_line(HELP_TEXT),
        ]
        if self.logout_dialog.visible:
            parts.extend([Text(""), render.dialog_panel(self.logout_dialog)])
        return Group(*parts)

    def __repr__(self) -> str:
        return (
            f"HomeScreen(state={self.state!r}, mode={self.selection_mode.value}, "
            f"panel={self.menu.active_panel.value})"
        )
