"""Token document layout as written to TinyDB.

Field names here are the persisted contract; renaming one orphans every
document already on disk.
"""

from dataclasses import asdict, dataclass
from datetime import UTC, datetime, timedelta
from typing import Any


@dataclass
class TokenRecord:
    """One stored login token.

    Attributes:
        namespace: Grouping tag shared by all documents of a store.
        uid: Unique identifier of the user (one record per uid).
        hashed_token: bcrypt hash of the plaintext token.
        expires_at: Expiry as a POSIX timestamp in seconds (UTC).
        origin_url: Redirect target captured when the token was issued.
    """

    namespace: str
    uid: str
    hashed_token: str
    expires_at: float
    origin_url: str | None = None

    @classmethod
    def issue(
        cls,
        *,
        namespace: str,
        uid: str,
        hashed_token: str,
        ttl: timedelta,
        origin_url: str | None = None,
    ) -> "TokenRecord":
        """Build a record expiring ttl from now."""
        return cls(
            namespace=namespace,
            uid=uid,
            hashed_token=hashed_token,
            expires_at=(datetime.now(UTC) + ttl).timestamp(),
            origin_url=origin_url,
        )

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "TokenRecord":
        return cls(
            namespace=document["namespace"],
            uid=document["uid"],
            hashed_token=document["hashed_token"],
            expires_at=float(document["expires_at"]),
            origin_url=document.get("origin_url"),
        )

    def to_document(self) -> dict[str, Any]:
        return asdict(self)

    @property
    def expires(self) -> datetime:
        """Expiry as an aware UTC datetime."""
        return datetime.fromtimestamp(self.expires_at, tz=UTC)

    def is_valid(self, now: datetime | None = None) -> bool:
        """True while the expiry is strictly in the future."""
        now = now or datetime.now(UTC)
        return self.expires_at > now.timestamp()
