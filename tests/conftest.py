"""Shared fixtures for token store tests.

Stores use bcrypt cost 4 (the minimum) so hashing stays fast; production
default is 10.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from tinydb import TinyDB
from tinydb.storages import MemoryStorage
from tinydb.table import Table

from passwordless_tinydb.stores.factory import reset_token_store
from passwordless_tinydb.stores.tinydb_store import TinyDBTokenStore

# Fastest cost factor bcrypt accepts
TEST_BCRYPT_ROUNDS = 4

TEST_TABLE_NAME = "passwordless_tokens"


@pytest.fixture
def memory_db() -> Iterator[TinyDB]:
    """In-memory TinyDB, discarded after each test."""
    db = TinyDB(storage=MemoryStorage)
    yield db
    db.close()


@pytest.fixture
def json_db(tmp_path: Path) -> Iterator[TinyDB]:
    """TinyDB backed by a JSON file in a temporary directory."""
    db = TinyDB(tmp_path / "tokens.json")
    yield db
    db.close()


@pytest.fixture
def table(memory_db: TinyDB) -> Table:
    """Token table inside the in-memory database."""
    return memory_db.table(TEST_TABLE_NAME)


@pytest.fixture
def store(table: Table) -> TinyDBTokenStore:
    """Fresh token store over an empty in-memory table."""
    return TinyDBTokenStore(table, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture(autouse=True)
def _reset_factory_singleton() -> Iterator[None]:
    """Ensure no test leaks the factory singleton into the next."""
    yield
    reset_token_store()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo configure_logging() between tests."""
    yield
    structlog.reset_defaults()
