"""TinyDB-backed token store.

Persists one hashed login token per user id in a TinyDB table (or the
default table of a TinyDB instance). The collection is created and owned by
the caller; this adapter only addresses it.

TinyDB is not thread-safe and its JSON storage does blocking file I/O, so
every collection call runs in a worker thread while holding a lock shared by
all stores over the same storage object. bcrypt work is offloaded separately
(see core.hashing).
"""

import asyncio
import threading
import weakref
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TypeVar

import structlog
from tinydb import TinyDB, where
from tinydb.storages import Storage
from tinydb.table import Table

from passwordless_tinydb.core.config import settings
from passwordless_tinydb.core.errors import (
    InvalidUsageError,
    StorageError,
    StoreUnavailableError,
)
from passwordless_tinydb.core.hashing import hash_token, verify_token
from passwordless_tinydb.stores.base import AuthResult, TokenStore
from passwordless_tinydb.stores.records import TokenRecord

logger = structlog.get_logger()

T = TypeVar("T")

# Truncate collaborator error text in logs
_LOG_EXCERPT_LENGTH = 200

# Exceptions TinyDB and its JSON storage raise on I/O or decode failure
_STORAGE_EXCEPTIONS = (OSError, ValueError)

# One lock per storage object; a TinyDB and its tables share one storage
_storage_locks: "weakref.WeakKeyDictionary[Storage, threading.Lock]" = (
    weakref.WeakKeyDictionary()
)
_storage_locks_guard = threading.Lock()


def _lock_for(storage: Storage) -> threading.Lock:
    with _storage_locks_guard:
        lock = _storage_locks.get(storage)
        if lock is None:
            lock = _storage_locks[storage] = threading.Lock()
        return lock


class TinyDBTokenStore(TokenStore):
    """Token store backed by a TinyDB collection.

    Note: Expired records are not swept. They stay on disk until the user
    receives a new token or the store is cleared, but never authenticate.
    """

    def __init__(
        self,
        collection: TinyDB | Table | None = None,
        namespace: str | None = None,
        *,
        bcrypt_rounds: int | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            collection: TinyDB database or table holding the token
                documents. Required.
            namespace: Tag written into every document as ``namespace``.
                Defaults to ``settings.namespace`` ("passwordless-token").
            bcrypt_rounds: bcrypt cost factor. Defaults to
                ``settings.bcrypt_rounds``.

        Raises:
            InvalidUsageError: If collection is missing or not a TinyDB
                database/table, or namespace is not a string.
        """
        if not isinstance(collection, (TinyDB, Table)):
            raise InvalidUsageError(
                "A TinyDB database or table must be provided as collection"
            )
        if namespace and not isinstance(namespace, str):
            raise InvalidUsageError("namespace must be a valid string")

        self._collection = collection
        self._lock = _lock_for(collection.storage)
        self._namespace = namespace or settings.namespace
        self._bcrypt_rounds = bcrypt_rounds or settings.bcrypt_rounds

    @property
    def namespace(self) -> str:
        return self._namespace

    async def authenticate(self, token: str, uid: str) -> AuthResult:
        if not token or not uid:
            raise InvalidUsageError(
                "TokenStore.authenticate called with invalid parameters"
            )

        now = datetime.now(UTC)
        document = await self._run(
            "authenticate",
            "token lookup fail",
            lambda collection: collection.get(
                (where("uid") == uid) & (where("expires_at") > now.timestamp())
            ),
        )
        if document is None:
            return AuthResult.invalid()

        record = TokenRecord.from_document(document)
        if not record.is_valid(now):
            return AuthResult.invalid()
        if await verify_token(token, record.hashed_token):
            return AuthResult(valid=True, origin_url=record.origin_url)
        return AuthResult.invalid()

    async def store_or_update(
        self,
        token: str,
        uid: str,
        ttl: timedelta,
        origin_url: str | None = None,
    ) -> None:
        if not token or not uid or not isinstance(ttl, timedelta) or not ttl:
            raise InvalidUsageError(
                "TokenStore.store_or_update called with invalid parameters"
            )

        hashed = await hash_token(token, self._bcrypt_rounds)
        record = TokenRecord.issue(
            namespace=self._namespace,
            uid=uid,
            hashed_token=hashed,
            ttl=ttl,
            origin_url=origin_url,
        )

        await self._run(
            "store_or_update",
            "token upsert fail",
            lambda collection: collection.upsert(
                record.to_document(), where("uid") == uid
            ),
        )
        logger.debug("Token stored", uid=uid, expires=record.expires.isoformat())

    async def invalidate_user(self, uid: str) -> None:
        if not uid:
            raise InvalidUsageError(
                "TokenStore.invalidate_user called with invalid parameters"
            )

        removed = await self._run(
            "invalidate_user",
            "token removal fail",
            lambda collection: collection.remove(where("uid") == uid),
        )
        logger.debug("User invalidated", uid=uid, removed=len(removed))

    async def clear(self) -> None:
        await self._run(
            "clear",
            "token clear fail",
            lambda collection: collection.truncate(),
        )
        logger.debug("Token store cleared", namespace=self._namespace)

    async def length(self) -> int:
        return await self._run("length", "token count fail", len)

    async def _run(
        self,
        operation: str,
        failure: str,
        query: Callable[[TinyDB | Table], T],
    ) -> T:
        """Run one collection call in a worker thread.

        Args:
            operation: Operation name for logs.
            failure: Prefix of the StorageError message.
            query: Callable receiving the ready collection.

        Returns:
            Whatever query returns.
        """
        return await asyncio.to_thread(self._run_sync, operation, failure, query)

    def _run_sync(
        self,
        operation: str,
        failure: str,
        query: Callable[[TinyDB | Table], T],
    ) -> T:
        with self._lock:
            collection = self._ensure_ready()
            try:
                return query(collection)
            except _STORAGE_EXCEPTIONS as exc:
                self._log_failure(operation, exc)
                raise StorageError(f"{failure}: {exc}") from exc

    def _ensure_ready(self) -> TinyDB | Table:
        """Return the collection once its storage has been read successfully.

        Raises:
            StoreUnavailableError: If the storage file cannot be read or
                decoded.
        """
        try:
            self._collection.storage.read()
        except _STORAGE_EXCEPTIONS as exc:
            self._log_failure("load", exc)
            raise StoreUnavailableError(f"load database fail: {exc}") from exc
        return self._collection

    @staticmethod
    def _log_failure(operation: str, exc: Exception) -> None:
        logger.warning(
            "Token store operation failed",
            operation=operation,
            error=str(exc)[:_LOG_EXCERPT_LENGTH],
        )
