"""Token store error taxonomy.

Usage errors are programmer mistakes (missing arguments, wrong-typed
collection) and surface immediately. Operational errors wrap the failure of
a collaborator (storage or bcrypt) and chain the original exception.
"""


__all__ = [
    "TokenStoreError",
    "InvalidUsageError",
    "StoreUnavailableError",
    "StorageError",
    "HashingError",
]


class TokenStoreError(Exception):
    """Base class for all token store errors.

    Callers can catch every failure of a store with a single handler.
    """

    pass


class InvalidUsageError(TokenStoreError):
    """A store was constructed or called with invalid arguments.

    Not an operational failure: the calling code is wrong and retrying
    will not help.
    """

    pass


class StoreUnavailableError(TokenStoreError):
    """The backing database could not be loaded.

    Raised when the JSON file is unreadable or corrupt, before any query
    is attempted.
    """

    pass


class StorageError(TokenStoreError):
    """A query, upsert, remove or count against the collection failed."""

    pass


class HashingError(TokenStoreError):
    """bcrypt failed to hash or compare a token.

    Typical causes are a token longer than bcrypt's 72-byte input limit or
    a stored hash that is not a valid bcrypt string.
    """

    pass
