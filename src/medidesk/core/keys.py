"""Abstract key events delivered to screens.

Screens never see host-specific key objects. The host translates its own
key names into a ``KeyEvent`` and drops anything without an abstract
identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Key(str, Enum):
    """Abstract key identity."""

    CHAR = "char"
    BACKSPACE = "backspace"
    TAB = "tab"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESC = "esc"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press.

    ``char`` is only set for ``Key.CHAR`` events.
    """

    key: Key
    char: str | None = None

    def __post_init__(self) -> None:
        if self.key == Key.CHAR:
            if not self.char or len(self.char) != 1:
                raise ValueError("CHAR events need exactly one character")
        elif self.char is not None:
            raise ValueError(f"{self.key.value} events carry no character")

    @classmethod
    def of(cls, key: Key) -> KeyEvent:
        return cls(key=key)

    @classmethod
    def character(cls, char: str) -> KeyEvent:
        return cls(key=Key.CHAR, char=char)

    @property
    def is_char(self) -> bool:
        return self.key == Key.CHAR


def text_events(text: str) -> list[KeyEvent]:
    """Expand a string into one CHAR event per character."""
    return [KeyEvent.character(char) for char in text]


# Textual key names -> abstract keys
TEXTUAL_KEY_MAP: dict[str, Key] = {
    "backspace": Key.BACKSPACE,
    "tab": Key.TAB,
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "enter": Key.ENTER,
    "escape": Key.ESC,
}


def from_textual(key: str, character: str | None = None) -> KeyEvent | None:
    """Translate a Textual key name (and its printable character).

    Returns None for keys the screens do not understand (function keys,
    control chords, ...).
    """
    mapped = TEXTUAL_KEY_MAP.get(key)
    if mapped is not None:
        return KeyEvent.of(mapped)
    if character is not None and len(character) == 1 and character.isprintable():
        return KeyEvent.character(character)
    return None
