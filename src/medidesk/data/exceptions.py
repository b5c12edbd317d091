"""User store exceptions.

``str()`` of every store error is user-facing text: screens show it
verbatim in their status line.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class StoreErrorCode(str, Enum):
    """Categorized error codes for user store operations."""

    USER_EXISTS = "user_exists"
    AUTHENTICATION_FAILED = "authentication_failed"
    USER_NOT_FOUND = "user_not_found"
    DATABASE_ERROR = "database_error"


class StoreError(Exception):
    """Base exception for all user store errors."""

    code: StoreErrorCode = StoreErrorCode.DATABASE_ERROR

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code.value, "message": self.message, "details": self.details}


class UserExistsError(StoreError):
    """Raised when registering a username that is already taken."""

    code = StoreErrorCode.USER_EXISTS

    def __init__(self, username: str) -> None:
        super().__init__("Username already exists.", details={"username": username})


class AuthenticationError(StoreError):
    """Raised for an unknown username or a wrong password.

    Both cases share one message so the screen does not reveal which
    usernames exist.
    """

    code = StoreErrorCode.AUTHENTICATION_FAILED

    def __init__(self, username: str) -> None:
        super().__init__("Authentication failed", details={"username": username})


class UserNotFoundError(StoreError):
    """Raised when a user id has no row."""

    code = StoreErrorCode.USER_NOT_FOUND

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} not found", details={"user_id": user_id})
