"""Transient status messages (error/success banners).

There is no background timer. Expiry is polled: screens call
``check_expired`` at the start of every input-handling call and on every
tick.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

MESSAGE_TTL_SECONDS = 5.0

Clock = Callable[[], float]


class MessageKind(str, Enum):
    """Which banner is shown."""

    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class StatusMessage:
    """A message payload with its creation time."""

    text: str
    kind: MessageKind
    created_at: float


class TransientMessage:
    """Single message slot with a time-to-live.

    Setting a message of either kind replaces whatever was there, so an
    error and a success banner are never shown together.
    """

    def __init__(self, ttl: float = MESSAGE_TTL_SECONDS, clock: Clock = time.monotonic) -> None:
        if ttl <= 0:
            raise ValueError(f"Message TTL must be positive, got {ttl}")
        self.ttl = ttl
        self._clock = clock
        self._message: StatusMessage | None = None

    @property
    def message(self) -> StatusMessage | None:
        return self._message

    @property
    def text(self) -> str | None:
        return self._message.text if self._message else None

    @property
    def kind(self) -> MessageKind | None:
        return self._message.kind if self._message else None

    def set(self, text: str, kind: MessageKind, now: float | None = None) -> None:
        created_at = self._clock() if now is None else now
        self._message = StatusMessage(text=text, kind=kind, created_at=created_at)

    def error(self, text: str) -> None:
        self.set(text, MessageKind.ERROR)

    def success(self, text: str) -> None:
        self.set(text, MessageKind.SUCCESS)

    def clear(self) -> None:
        self._message = None

    def clear_error(self) -> None:
        """Clear the slot only if it holds an error."""
        if self.kind == MessageKind.ERROR:
            self._message = None

    def is_active(self, now: float | None = None) -> bool:
        """Whether a message is present and younger than the TTL."""
        if self._message is None:
            return False
        now = self._clock() if now is None else now
        return now - self._message.created_at < self.ttl

    def check_expired(self, now: float | None = None) -> bool:
        """Drop the message once its age reaches the TTL.

        Returns True when a message was cleared.
        """
        if self._message is None or self.is_active(now):
            return False
        self._message = None
        return True
