"""Token store factory functions.

Singleton pattern for the application's token store: the first call opens
the JSON database, later calls reuse it.
"""

from pathlib import Path

import structlog
from tinydb import TinyDB

from passwordless_tinydb.core.config import Settings
from passwordless_tinydb.core.config import settings as default_settings
from passwordless_tinydb.core.log_config import configure_logging
from passwordless_tinydb.stores.tinydb_store import TinyDBTokenStore

logger = structlog.get_logger()

_database: TinyDB | None = None
_token_store: TinyDBTokenStore | None = None


def open_database(config: Settings | None = None) -> TinyDB:
    """Open (or create) the TinyDB JSON file named by the settings.

    Args:
        config: Settings to read db_path from. Defaults to the module
            settings.

    Returns:
        TinyDB instance backed by a JSON file.
    """
    config = config or default_settings
    path = Path(config.db_path)
    logger.info("Opening token database", path=str(path))
    return TinyDB(path, create_dirs=True)


def get_token_store(config: Settings | None = None) -> TinyDBTokenStore:
    """Get or create the token store singleton.

    Configures structlog from ``config.log_level`` when the store is
    created.

    Args:
        config: Optional settings. Only used by the call that creates the
            singleton; later calls return the existing store.

    Returns:
        TinyDBTokenStore bound to ``config.table_name``.
    """
    global _database, _token_store

    if _token_store is None:
        config = config or default_settings
        configure_logging(config)
        _database = open_database(config)
        _token_store = TinyDBTokenStore(
            _database.table(config.table_name),
            config.namespace,
            bcrypt_rounds=config.bcrypt_rounds,
        )

    return _token_store


def reset_token_store() -> None:
    """Close the database and drop the singleton (for testing)."""
    global _database, _token_store
    if _database is not None:
        _database.close()
    _database = None
    _token_store = None
