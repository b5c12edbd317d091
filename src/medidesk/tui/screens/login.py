"""Login screen: credentials form plus an exit confirmation dialog."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from enum import Enum, IntEnum
from typing import Any

from rich.console import Group, RenderableType
from rich.text import Text
from transitions import Machine

from medidesk.core.dialog import DialogResult, ModalDialog
from medidesk.core.focus import FocusCursor
from medidesk.core.keys import Key, KeyEvent
from medidesk.core.routing import NO_TRANSITION, RoutingDecision, ScreenId
from medidesk.tui import render
from medidesk.tui.render import Area
from medidesk.tui.screens.base import HISTORY_LIMIT, Screen

HELP_TEXT = "TAB/Arrow Keys: Navigate | ENTER: Select | ESC: Toggle Exit Dialog"
TITLE = "M E D I D E S K"
SLOGAN = "Seamless Hospital & Pharmacy Operations"


class LoginState(str, Enum):
    IDLE = "idle"
    EXIT_CONFIRM = "exit_confirm"


class LoginControl(IntEnum):
    """Focusable controls, in Tab order."""

    USERNAME = 0
    PASSWORD = 1
    CREATE_ACCOUNT = 2
    EXIT = 3


LOGIN_TRANSITIONS: list[dict[str, Any]] = [
    {
        "trigger": "request_exit",
        "source": LoginState.IDLE.value,
        "dest": LoginState.EXIT_CONFIRM.value,
        "after": "_open_exit_dialog",
    },
    {
        "trigger": "close_exit_dialog",
        "source": LoginState.EXIT_CONFIRM.value,
        "dest": LoginState.IDLE.value,
        "after": "_hide_exit_dialog",
    },
]


class LoginScreen(Screen):
    """Username/password form.

    Enter on a field validates locally and asks the dispatcher to switch to
    Home; the dispatcher performs the actual credential check.
    """

    screen_id = ScreenId.LOGIN

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.username = ""
        self.password = ""
        self.focus = FocusCursor(len(LoginControl))
        self.exit_dialog = ModalDialog("Confirm Exit", "Are you sure you want to exit?")
        self.history: deque[str] = deque(maxlen=HISTORY_LIMIT)

        self.state: str = LoginState.IDLE.value
        self._machine = Machine(
            model=self,
            states=[state.value for state in LoginState],
            transitions=LOGIN_TRANSITIONS,
            initial=LoginState.IDLE.value,
            auto_transitions=False,
            ignore_invalid_triggers=True,
            after_state_change=self._record_transition,
        )

    def _record_transition(self) -> None:
        self.history.append(self.state)
        self.logger.debug("screen.transition", state=self.state)

    def _open_exit_dialog(self) -> None:
        self.exit_dialog.open()

    def _hide_exit_dialog(self) -> None:
        self.exit_dialog.dismiss()

    # ------------------------------------------------------------------
    # Dispatcher-facing helpers
    # ------------------------------------------------------------------

    @property
    def focused(self) -> LoginControl:
        return LoginControl(self.focus.current())

    @property
    def credentials(self) -> tuple[str, str]:
        return self.username, self.password

    def clear_password(self) -> None:
        self.password = ""

    def reset_credentials(self) -> None:
        """Empty both fields and put focus back on the username."""
        self.username = ""
        self.password = ""
        self.focus = FocusCursor(len(LoginControl))

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_key(self, event: KeyEvent) -> RoutingDecision:
        if self.is_exit_confirm():
            return self._on_dialog_key(event)
        return self._on_form_key(event)

    def _on_dialog_key(self, event: KeyEvent) -> RoutingDecision:
        result = self.exit_dialog.handle_input(event)
        if result is None:
            return NO_TRANSITION
        self.close_exit_dialog()
        if result == DialogResult.CONFIRMED:
            self.logger.info("login.exit_confirmed")
            return RoutingDecision.switch_to(ScreenId.QUIT)
        return NO_TRANSITION

    def _on_form_key(self, event: KeyEvent) -> RoutingDecision:
        key = event.key
        if key == Key.CHAR:
            self._edit(lambda value: value + (event.char or ""))
        elif key == Key.BACKSPACE:
            self._edit(lambda value: value[:-1])
        elif key in (Key.TAB, Key.DOWN):
            self.focus.advance()
        elif key == Key.UP:
            self.focus.retreat()
        elif key == Key.ENTER:
            return self._activate()
        elif key == Key.ESC:
            self.request_exit()
        return NO_TRANSITION

    def _edit(self, change: Callable[[str], str]) -> None:
        if self.focused == LoginControl.USERNAME:
            self.username = change(self.username)
        elif self.focused == LoginControl.PASSWORD:
            self.password = change(self.password)
        else:
            return
        self.message.clear_error()

    def _activate(self) -> RoutingDecision:
        control = self.focused
        if control == LoginControl.CREATE_ACCOUNT:
            return RoutingDecision.switch_to(ScreenId.REGISTER)
        if control == LoginControl.EXIT:
            self.request_exit()
            return NO_TRANSITION

        if not self.username:
            self.set_error_message("Username cannot be empty.")
            return NO_TRANSITION
        if not self.password:
            self.set_error_message("Password cannot be empty.")
            return NO_TRANSITION
        return RoutingDecision.switch_to(ScreenId.HOME)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, area: Area) -> RenderableType:
        focused = self.focused
        parts: list[RenderableType] = [
            render.heading(TITLE, SLOGAN),
            Text(""),
            render.centered(Text("Login to MediDesk", style="bold")),
            Text(""),
            render.field_panel(
                "Username", self.username, focused == LoginControl.USERNAME, area
            ),
            render.field_panel(
                "Password",
                self.password,
                focused == LoginControl.PASSWORD,
                area,
                secret=True,
            ),
            render.message_line(self.message),
            Text(""),
            render.link_line("Create Account", focused == LoginControl.CREATE_ACCOUNT),
            Text(""),
            render.link_line("Exit", focused == LoginControl.EXIT),
            Text(""),
            render.help_line(HELP_TEXT),
        ]
        if self.exit_dialog.visible:
            parts.extend([Text(""), render.dialog_panel(self.exit_dialog)])
        return Group(*parts)

    def __repr__(self) -> str:
        return (
            f"LoginScreen(state={self.state!r}, username={self.username!r}, "
            f"focus={self.focused.name})"
        )
