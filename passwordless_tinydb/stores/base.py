"""Abstract base class and types for token stores.

A token store persists one hashed login token per user id and answers
whether a presented token is currently valid. Login middleware depends only
on this interface; each backing database provides one implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a token authentication.

    Attributes:
        valid: True if the token matched a live record for the user.
        origin_url: URL requested before the login was triggered, if one
            was stored with the token. Always None when valid is False.
    """

    valid: bool
    origin_url: str | None = None

    @classmethod
    def invalid(cls) -> "AuthResult":
        """Result for an unknown, expired or mismatched token."""
        return cls(valid=False, origin_url=None)


class TokenStore(ABC):
    """Abstract base class for passwordless token stores.

    Every operation is a coroutine that resolves once the backing store has
    completed the request. Missing arguments raise InvalidUsageError;
    storage and hashing failures raise the matching TokenStoreError subclass.
    """

    @abstractmethod
    async def authenticate(self, token: str, uid: str) -> AuthResult:
        """Check a token / user id combination.

        Args:
            token: Plaintext token to authenticate.
            uid: Unique identifier of the user.

        Returns:
            AuthResult with valid=True and the stored origin URL if the
            token matches an unexpired record, otherwise an invalid result.
        """
        ...

    @abstractmethod
    async def store_or_update(
        self,
        token: str,
        uid: str,
        ttl: timedelta,
        origin_url: str | None = None,
    ) -> None:
        """Store a new token for a user, replacing any existing one.

        A user can only have one valid token at a time.

        Args:
            token: Plaintext token that allows authentication of uid.
            uid: Unique identifier of the user.
            ttl: Validity of the token from now.
            origin_url: Originally requested URL, if any.
        """
        ...

    @abstractmethod
    async def invalidate_user(self, uid: str) -> None:
        """Remove the token linked to a user.

        Args:
            uid: Unique identifier of the user.
        """
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Remove all tokens."""
        ...

    @abstractmethod
    async def length(self) -> int:
        """Return the number of stored tokens, regardless of validity."""
        ...
