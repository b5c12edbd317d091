"""Screen dispatcher: owns the active screen and applies routing decisions.

Screens only return a ``RoutingDecision``. Everything that needs a
collaborator across screens (credential checks, building Home, the
registration banner on Login) happens here.
"""

from __future__ import annotations

import time
from typing import Any

from rich.console import RenderableType

from medidesk.config.settings import Settings
from medidesk.core.keys import KeyEvent
from medidesk.core.messages import MESSAGE_TTL_SECONDS, Clock
from medidesk.core.routing import RoutingDecision, RoutingKind, ScreenId
from medidesk.data.exceptions import AuthenticationError
from medidesk.data.store import UserStore
from medidesk.tui import render
from medidesk.tui.render import Area
from medidesk.tui.screens import (
    ActionScreen,
    HomeScreen,
    LoginScreen,
    RegisterScreen,
    Screen,
)
from medidesk.utils.logging import bind_session_context, clear_session_context, get_logger

REGISTRATION_SUCCESS_TEXT = "Registration successful! Please log in."

logger = get_logger("dispatcher")


class ScreenDispatcher:
    """Routes key events to the active screen and swaps screens on request.

    Parameters
    ----------
    store : UserStore
        Account storage used for login, registration and the greeting.
    settings : Settings | None
        UI settings (message TTL, minimum size). Defaults apply when None.
    clock : Callable[[], float]
        Monotonic clock handed to every screen's message slot.
    """

    def __init__(
        self,
        store: UserStore,
        settings: Settings | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.store = store
        self.settings = settings
        self.clock = clock
        self.message_ttl = (
            settings.ui.message_ttl_seconds if settings is not None else MESSAGE_TTL_SECONDS
        )
        self.min_size = (
            (settings.ui.min_width, settings.ui.min_height) if settings is not None else (0, 0)
        )

        self.login = LoginScreen(**self._screen_kwargs())
        self.home: HomeScreen | None = None
        self.user_id: int | None = None
        self.active: Screen = self.login
        self.should_quit = False

    def _screen_kwargs(self) -> dict[str, Any]:
        return {"clock": self.clock, "message_ttl": self.message_ttl}

    @property
    def active_id(self) -> ScreenId:
        return self.active.screen_id

    # ------------------------------------------------------------------
    # Host-facing API
    # ------------------------------------------------------------------

    def handle_input(self, event: KeyEvent) -> RoutingDecision:
        decision = self.active.handle_input(event)
        self.apply(decision)
        return decision

    def tick(self, now: float | None = None) -> None:
        self.active.tick(now)

    def render(self, area: Area) -> RenderableType:
        min_width, min_height = self.min_size
        if not area.fits(min_width, min_height):
            return render.too_small(area, min_width, min_height)
        return self.active.render(area)

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def apply(self, decision: RoutingDecision) -> None:
        if decision.kind == RoutingKind.NO_TRANSITION:
            return
        target = decision.target
        if target is None or target == self.active_id:
            return
        if decision.kind == RoutingKind.STAY:
            # A screen can only stay on itself.
            logger.warning(
                "dispatcher.stay_mismatch", active=self.active_id.value, target=target.value
            )
            return

        source = self.active_id
        if target == ScreenId.QUIT:
            self.should_quit = True
        elif target == ScreenId.HOME:
            self._switch_home()
        elif target == ScreenId.REGISTER:
            self._activate(RegisterScreen(self.store, **self._screen_kwargs()))
        elif target == ScreenId.LOGIN:
            self._switch_login()
        elif target.is_action:
            self._open_action(target)
        logger.info(
            "dispatcher.switch",
            source=source.value,
            target=target.value,
            active=self.active_id.value,
        )

    def _activate(self, screen: Screen) -> None:
        self.active = screen

    def _switch_home(self) -> None:
        if self.active is self.login:
            self._login()
        elif self.home is not None:
            self._activate(self.home)
        else:
            # No session to return to.
            self._activate(self.login)

    def _login(self) -> None:
        username, password = self.login.credentials
        try:
            user_id = self.store.authenticate(username, password)
        except AuthenticationError as exc:
            logger.warning("auth.failed", **exc.to_dict())
            self.login.set_error_message(str(exc))
            return

        home = HomeScreen(**self._screen_kwargs())
        home.load_display_name(user_id, self.store)
        self.user_id = user_id
        self.home = home
        self.login.clear_password()
        bind_session_context(user_id=user_id, username=username)
        logger.info("auth.succeeded", user_id=user_id)
        self._activate(home)

    def _switch_login(self) -> None:
        source = self.active
        if isinstance(source, RegisterScreen):
            if source.registration_success:
                self.login.reset_credentials()
                self.login.set_success_message(REGISTRATION_SUCCESS_TEXT)
        elif source is self.home:
            logger.info("auth.logout", user_id=self.user_id)
            self.home = None
            self.user_id = None
            self.login.clear_password()
            clear_session_context()
        self._activate(self.login)

    def _open_action(self, action: ScreenId) -> None:
        menu = self.home.menu if self.home is not None else None
        labels = menu.labels_for(action) if menu is not None else None
        feature_label, option_label = labels or ("", "")
        self._activate(
            ActionScreen(action, feature_label, option_label, **self._screen_kwargs())
        )

    def __repr__(self) -> str:
        return f"ScreenDispatcher(active={self.active_id.value!r}, quit={self.should_quit})"
