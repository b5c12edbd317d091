"""Registration screen: create an account, then go back to Login."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from rich.console import Group, RenderableType
from rich.text import Text

from medidesk.core.focus import FocusCursor
from medidesk.core.keys import Key, KeyEvent
from medidesk.core.routing import NO_TRANSITION, RoutingDecision, ScreenId
from medidesk.data.exceptions import StoreError
from medidesk.data.store import UserStore
from medidesk.tui import render
from medidesk.tui.render import Area
from medidesk.tui.screens.base import Screen

HELP_TEXT = "TAB/Arrow Keys: Navigate | ENTER: Select | ESC: Back to Login"


class RegisterControl(IntEnum):
    USERNAME = 0
    PASSWORD = 1
    CONFIRM_PASSWORD = 2
    BACK = 3


class RegisterScreen(Screen):
    """Three-field account form backed by a ``UserStore``."""

    screen_id = ScreenId.REGISTER

    def __init__(self, store: UserStore, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.store = store
        self.username = ""
        self.password = ""
        self.confirm_password = ""
        self.focus = FocusCursor(len(RegisterControl))
        self.registration_success = False

    @property
    def focused(self) -> RegisterControl:
        return RegisterControl(self.focus.current())

    def on_key(self, event: KeyEvent) -> RoutingDecision:
        key = event.key
        if key == Key.CHAR:
            self._edit(event.char or "")
        elif key == Key.BACKSPACE:
            self._edit(None)
        elif key in (Key.TAB, Key.DOWN):
            self.focus.advance()
        elif key == Key.UP:
            self.focus.retreat()
        elif key == Key.ESC or (key == Key.ENTER and self.focused == RegisterControl.BACK):
            return RoutingDecision.switch_to(ScreenId.LOGIN)
        elif key == Key.ENTER:
            return self._submit()
        return NO_TRANSITION

    def _edit(self, char: str | None) -> None:
        """Append ``char`` to the focused field, or pop when it is None."""
        field = {
            RegisterControl.USERNAME: "username",
            RegisterControl.PASSWORD: "password",
            RegisterControl.CONFIRM_PASSWORD: "confirm_password",
        }.get(self.focused)
        if field is not None:
            value = getattr(self, field)
            setattr(self, field, value[:-1] if char is None else value + char)
        self.message.clear_error()
        self.registration_success = False

    def _submit(self) -> RoutingDecision:
        if not self.username:
            self.set_error_message("Username cannot be empty.")
            return NO_TRANSITION
        if not self.password:
            self.set_error_message("Password cannot be empty.")
            return NO_TRANSITION
        if self.password != self.confirm_password:
            self.set_error_message("Passwords do not match.")
            return NO_TRANSITION

        try:
            user_id = self.store.create_user(self.username, self.password)
        except StoreError as exc:
            self.logger.warning("register.failed", **exc.to_dict())
            self.set_error_message(str(exc))
            return NO_TRANSITION

        self.logger.info("register.succeeded", user_id=user_id, username=self.username)
        self.username = ""
        self.password = ""
        self.confirm_password = ""
        self.registration_success = True
        return RoutingDecision.switch_to(ScreenId.LOGIN)

    def render(self, area: Area) -> RenderableType:
        focused = self.focused
        return Group(
            render.centered(Text("Create Account", style="bold")),
            Text(""),
            render.field_panel(
                "Username", self.username, focused == RegisterControl.USERNAME, area
            ),
            render.field_panel(
                "Password",
                self.password,
                focused == RegisterControl.PASSWORD,
                area,
                secret=True,
            ),
            render.field_panel(
                "Confirm Password",
                self.confirm_password,
                focused == RegisterControl.CONFIRM_PASSWORD,
                area,
                secret=True,
            ),
            render.message_line(self.message),
            Text(""),
            render.link_line("Back to Login", focused == RegisterControl.BACK),
            Text(""),
            render.help_line(HELP_TEXT),
        )
