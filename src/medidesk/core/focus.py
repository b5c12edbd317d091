"""Wrapping focus cursor."""

from __future__ import annotations


class FocusCursor:
    """Cyclic index over a fixed number of focusable controls.

    The count is fixed at construction and never zero, so the index is
    always valid.
    """

    def __init__(self, count: int, index: int = 0) -> None:
        if count <= 0:
            raise ValueError(f"FocusCursor needs at least one control, got {count}")
        if not 0 <= index < count:
            raise ValueError(f"Start index {index} outside [0, {count})")
        self._count = count
        self._index = index

    @property
    def count(self) -> int:
        return self._count

    @property
    def index(self) -> int:
        return self._index

    def current(self) -> int:
        return self._index

    def advance(self) -> int:
        self._index = (self._index + 1) % self._count
        return self._index

    def retreat(self) -> int:
        self._index = (self._index + self._count - 1) % self._count
        return self._index

    def is_at(self, index: int) -> bool:
        return self._index == index

    def __repr__(self) -> str:
        return f"FocusCursor(count={self._count}, index={self._index})"
