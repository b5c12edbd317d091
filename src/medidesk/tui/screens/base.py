"""Base class shared by every MediDesk screen."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from rich.console import RenderableType

from medidesk.core.keys import KeyEvent
from medidesk.core.messages import MESSAGE_TTL_SECONDS, Clock, TransientMessage
from medidesk.core.routing import RoutingDecision, ScreenId
from medidesk.tui.render import Area
from medidesk.utils.logging import get_logger

# State-machine transitions kept per screen instance
HISTORY_LIMIT = 50


class Screen(ABC):
    """A full-terminal view with its own interaction state.

    Subclasses implement ``on_key`` and ``render``. ``handle_input`` runs
    the message expiry check before every key, so no subclass can forget it.
    """

    screen_id: ScreenId

    def __init__(
        self,
        *,
        clock: Clock = time.monotonic,
        message_ttl: float = MESSAGE_TTL_SECONDS,
    ) -> None:
        self.clock = clock
        self.message = TransientMessage(ttl=message_ttl, clock=clock)
        self.logger = get_logger("screen").bind(screen=self.screen_id.value)

    def handle_input(self, event: KeyEvent) -> RoutingDecision:
        self.message.check_expired()
        return self.on_key(event)

    @abstractmethod
    def on_key(self, event: KeyEvent) -> RoutingDecision:
        """Apply one key to this screen's state."""

    @abstractmethod
    def render(self, area: Area) -> RenderableType:
        """Build the renderable for the given area. Must not mutate state."""

    def tick(self, now: float | None = None) -> None:
        """Periodic housekeeping between key presses."""
        if self.message.check_expired(now):
            self.logger.debug("screen.message_expired")

    def set_error_message(self, text: str) -> None:
        self.message.error(text)

    def set_success_message(self, text: str) -> None:
        self.message.success(text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
