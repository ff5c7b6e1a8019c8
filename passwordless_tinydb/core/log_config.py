"""structlog setup driven by Settings.log_level."""

import logging

import structlog

from passwordless_tinydb.core.config import Settings
from passwordless_tinydb.core.config import settings as default_settings


def configure_logging(config: Settings | None = None) -> None:
    """Drop structlog events below the configured level.

    Args:
        config: Settings to read log_level from. Defaults to the module
            settings.
    """
    config = config or default_settings
    level = logging.getLevelNamesMapping()[config.log_level]
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
