"""
Account storage module.
"""

from medidesk.data.exceptions import (
    AuthenticationError,
    StoreError,
    StoreErrorCode,
    UserExistsError,
    UserNotFoundError,
)
from medidesk.data.store import (
    MemoryUserStore,
    SQLiteUserStore,
    StorageBackend,
    UserRecord,
    UserStore,
    create_store,
    hash_password,
    seed_root_user,
    verify_password,
)

__all__ = [
    # Exceptions
    "StoreError",
    "StoreErrorCode",
    "UserExistsError",
    "AuthenticationError",
    "UserNotFoundError",
    # Store
    "StorageBackend",
    "UserRecord",
    "UserStore",
    "MemoryUserStore",
    "SQLiteUserStore",
    "create_store",
    "seed_root_user",
    "hash_password",
    "verify_password",
]
