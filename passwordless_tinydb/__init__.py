"""TinyDB-backed token store for passwordless login middleware."""

from passwordless_tinydb.core.errors import (
    HashingError,
    InvalidUsageError,
    StorageError,
    StoreUnavailableError,
    TokenStoreError,
)
from passwordless_tinydb.stores.base import AuthResult, TokenStore
from passwordless_tinydb.stores.tinydb_store import TinyDBTokenStore

__all__ = [
    "AuthResult",
    "HashingError",
    "InvalidUsageError",
    "StorageError",
    "StoreUnavailableError",
    "TinyDBTokenStore",
    "TokenStore",
    "TokenStoreError",
]
