"""Token store implementations.

Exports:
    TokenStore contract and AuthResult
    TinyDBTokenStore adapter
    Factory functions for the application singleton
"""

from passwordless_tinydb.stores.base import AuthResult, TokenStore
from passwordless_tinydb.stores.factory import (
    get_token_store,
    open_database,
    reset_token_store,
)
from passwordless_tinydb.stores.records import TokenRecord
from passwordless_tinydb.stores.tinydb_store import TinyDBTokenStore

__all__ = [
    # Contract
    "AuthResult",
    "TokenStore",
    # Implementations
    "TinyDBTokenStore",
    "TokenRecord",
    # Factory
    "get_token_store",
    "open_database",
    "reset_token_store",
]
