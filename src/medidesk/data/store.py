"""
User account storage.

Provides in-memory and SQLite backends for the accounts the login and
registration screens work against, plus password hashing helpers.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from medidesk.config.settings import Settings, get_settings
from medidesk.data.exceptions import (
    AuthenticationError,
    StoreError,
    UserExistsError,
    UserNotFoundError,
)
from medidesk.utils.logging import get_logger

logger = get_logger(__name__)

PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ITERATIONS = 260_000
SALT_BYTES = 16

ROOT_USERNAME = "root"
ROOT_PASSWORD = "root"


class StorageBackend(str, Enum):
    """Available storage backends."""

    SQLITE = "sqlite"
    MEMORY = "memory"


class UserRecord(BaseModel):
    """A stored account. ``password_hash`` is never the clear password."""

    id: int
    username: str
    password_hash: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def hash_password(password: str, *, iterations: int | None = None) -> str:
    """Return ``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``."""
    rounds = iterations or PBKDF2_ITERATIONS
    salt = secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return f"{PBKDF2_ALGORITHM}${rounds}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check a clear password against a value produced by hash_password."""
    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
        rounds = int(iterations)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        return False
    if algorithm != PBKDF2_ALGORITHM:
        return False
    actual = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(actual, expected)


class UserStore(ABC):
    """Abstract base class for account storage."""

    @abstractmethod
    def create_user(self, username: str, password: str) -> int:
        """Create an account and return its id.

        Raises UserExistsError when the username is taken.
        """
        ...

    @abstractmethod
    def authenticate(self, username: str, password: str) -> int:
        """Return the user id for valid credentials.

        Raises AuthenticationError for an unknown user or wrong password.
        """
        ...

    @abstractmethod
    def lookup_display_name(self, user_id: int) -> str:
        """Return the name shown in the dashboard greeting."""
        ...

    @abstractmethod
    def get_user(self, user_id: int) -> UserRecord | None:
        """Retrieve an account by id."""
        ...

    @abstractmethod
    def count_users(self) -> int:
        """Number of stored accounts."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the store and release resources."""
        ...


class MemoryUserStore(UserStore):
    """In-memory account storage for testing."""

    def __init__(self) -> None:
        self._users: dict[int, UserRecord] = {}
        self._next_id = 1

    def create_user(self, username: str, password: str) -> int:
        if any(user.username == username for user in self._users.values()):
            raise UserExistsError(username)
        user_id = self._next_id
        self._next_id += 1
        self._users[user_id] = UserRecord(
            id=user_id, username=username, password_hash=hash_password(password)
        )
        logger.info("store.user_created", user_id=user_id, username=username)
        return user_id

    def authenticate(self, username: str, password: str) -> int:
        for user in self._users.values():
            if user.username == username and verify_password(password, user.password_hash):
                return user.id
        raise AuthenticationError(username)

    def lookup_display_name(self, user_id: int) -> str:
        user = self.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user.username

    def get_user(self, user_id: int) -> UserRecord | None:
        return self._users.get(user_id)

    def count_users(self) -> int:
        return len(self._users)

    def close(self) -> None:
        self._users.clear()


class SQLiteUserStore(UserStore):
    """SQLite-based account storage."""

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY,
        username TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or Path.home() / ".medidesk" / "medidesk.db"
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        """Initialize the database schema."""
        self._conn.executescript(self.SCHEMA)
        self._conn.commit()

    @contextmanager
    def _transaction(self) -> Generator[sqlite3.Cursor, None, None]:
        """Context manager for database transactions."""
        cursor = self._conn.cursor()
        try:
            yield cursor
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def _row_to_user(self, row: sqlite3.Row) -> UserRecord:
        return UserRecord(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def create_user(self, username: str, password: str) -> int:
        try:
            with self._transaction() as cursor:
                cursor.execute(
                    "INSERT INTO users (username, password_hash, created_at) VALUES (?, ?, ?)",
                    (
                        username,
                        hash_password(password),
                        datetime.now(timezone.utc).isoformat(),
                    ),
                )
                user_id = int(cursor.lastrowid)
        except sqlite3.IntegrityError as exc:
            raise UserExistsError(username) from exc
        except sqlite3.DatabaseError as exc:
            logger.error("store.create_failed", username=username, error=str(exc))
            raise StoreError(f"Database error: {exc}") from exc
        logger.info("store.user_created", user_id=user_id, username=username)
        return user_id

    def authenticate(self, username: str, password: str) -> int:
        row = self._conn.execute(
            "SELECT id, password_hash FROM users WHERE username = ?", (username,)
        ).fetchone()
        if row is None or not verify_password(password, row["password_hash"]):
            raise AuthenticationError(username)
        return int(row["id"])

    def lookup_display_name(self, user_id: int) -> str:
        row = self._conn.execute(
            "SELECT username FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        if row is None:
            raise UserNotFoundError(user_id)
        return str(row["username"])

    def get_user(self, user_id: int) -> UserRecord | None:
        row = self._conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return self._row_to_user(row) if row else None

    def count_users(self) -> int:
        row = self._conn.execute("SELECT COUNT(*) AS n FROM users").fetchone()
        return int(row["n"])

    def close(self) -> None:
        self._conn.close()


def seed_root_user(store: UserStore) -> bool:
    """Create the root/root account on an empty store.

    Returns True when the account was created.
    """
    if store.count_users() > 0:
        return False
    store.create_user(ROOT_USERNAME, ROOT_PASSWORD)
    logger.info("store.root_seeded")
    return True


def create_store(
    settings: Settings | None = None,
    backend: StorageBackend | None = None,
) -> UserStore:
    """Factory function to create a user store based on settings."""
    settings = settings or get_settings()
    backend = backend or StorageBackend(settings.storage.backend)

    if backend == StorageBackend.MEMORY:
        store: UserStore = MemoryUserStore()
    elif backend == StorageBackend.SQLITE:
        store = SQLiteUserStore(db_path=Path(settings.storage.db_path).expanduser())
    else:
        raise ValueError(f"Unknown storage backend: {backend}")

    if settings.storage.seed_root_user:
        seed_root_user(store)
    return store
