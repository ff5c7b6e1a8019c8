"""Tests for TokenRecord document layout and expiry checks."""

from datetime import UTC, datetime, timedelta

from passwordless_tinydb.stores.records import TokenRecord

_NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _record(**overrides: object) -> TokenRecord:
    base: dict[str, object] = {
        "namespace": "passwordless-token",
        "uid": "a@x.com",
        "hashed_token": "$2b$04$hash",
        "expires_at": (_NOW + timedelta(minutes=1)).timestamp(),
        "origin_url": None,
    }
    base.update(overrides)
    return TokenRecord(**base)  # type: ignore[arg-type]


class TestIssue:
    def test_issue_sets_expiry_from_ttl(self) -> None:
        before = datetime.now(UTC)
        record = TokenRecord.issue(
            namespace="ns",
            uid="a@x.com",
            hashed_token="$2b$04$hash",
            ttl=timedelta(minutes=10),
        )
        after = datetime.now(UTC)

        assert before + timedelta(minutes=10) <= record.expires
        assert record.expires <= after + timedelta(minutes=10)
        assert record.origin_url is None

    def test_issue_keeps_origin(self) -> None:
        record = TokenRecord.issue(
            namespace="ns",
            uid="a@x.com",
            hashed_token="$2b$04$hash",
            ttl=timedelta(minutes=1),
            origin_url="http://example.com/p",
        )
        assert record.origin_url == "http://example.com/p"


class TestDocumentMapping:
    def test_to_document_uses_persisted_keys(self) -> None:
        record = _record(origin_url="http://example.com/p")
        assert record.to_document() == {
            "namespace": "passwordless-token",
            "uid": "a@x.com",
            "hashed_token": "$2b$04$hash",
            "expires_at": record.expires_at,
            "origin_url": "http://example.com/p",
        }

    def test_from_document_tolerates_missing_origin(self) -> None:
        """Documents written without origin_url load with None."""
        document = _record().to_document()
        del document["origin_url"]

        assert TokenRecord.from_document(document).origin_url is None

    def test_from_document_coerces_integer_expiry(self) -> None:
        document = _record().to_document()
        document["expires_at"] = 1_800_000_000

        record = TokenRecord.from_document(document)

        assert record.expires_at == 1_800_000_000.0
        assert isinstance(record.expires_at, float)


class TestValidity:
    def test_valid_before_expiry(self) -> None:
        assert _record().is_valid(_NOW) is True

    def test_invalid_after_expiry(self) -> None:
        assert _record().is_valid(_NOW + timedelta(minutes=2)) is False

    def test_invalid_at_exact_expiry(self) -> None:
        """Expiry must be strictly in the future."""
        record = _record(expires_at=_NOW.timestamp())
        assert record.is_valid(_NOW) is False

    def test_expires_is_aware_utc(self) -> None:
        assert _record().expires == _NOW + timedelta(minutes=1)
        assert _record().expires.tzinfo is UTC
