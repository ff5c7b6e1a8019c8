"""Token store configuration loaded from environment variables.

Uses pydantic-settings for validation and .env file support. Every variable
is prefixed with ``TOKENSTORE_`` (e.g. ``TOKENSTORE_DB_PATH``).
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Namespace tag written into every token document unless overridden
DEFAULT_NAMESPACE = "passwordless-token"

# bcrypt accepts cost factors in this range (log2 rounds)
_MIN_BCRYPT_ROUNDS = 4
_MAX_BCRYPT_ROUNDS = 31

# Production floor for the bcrypt cost factor
_MIN_PRODUCTION_BCRYPT_ROUNDS = 10

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Token store settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TOKENSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    db_path: str = "data/passwordless_tokens.json"
    table_name: str = "passwordless_tokens"
    namespace: str = DEFAULT_NAMESPACE

    # Hashing
    bcrypt_rounds: int = 10

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    @field_validator("bcrypt_rounds")
    @classmethod
    def check_bcrypt_rounds(cls, value: int) -> int:
        """Reject cost factors bcrypt would refuse at hash time."""
        if not _MIN_BCRYPT_ROUNDS <= value <= _MAX_BCRYPT_ROUNDS:
            msg = (
                f"BCRYPT_ROUNDS must be between {_MIN_BCRYPT_ROUNDS} and "
                f"{_MAX_BCRYPT_ROUNDS}. Got: {value}"
            )
            raise ValueError(msg)
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        """Normalize to an upper-case standard level name."""
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            allowed = ", ".join(_LOG_LEVELS)
            msg = f"LOG_LEVEL must be one of {allowed}. Got: {value}"
            raise ValueError(msg)
        return level

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Validate production requirements.

        Checks:
        - namespace and table name must not be blank (all environments)
        - bcrypt cost factor must be at least 10 in production
        """
        if not self.namespace.strip():
            msg = "NAMESPACE must not be blank."
            raise ValueError(msg)
        if not self.table_name.strip():
            msg = "TABLE_NAME must not be blank."
            raise ValueError(msg)

        if (
            self.environment == "production"
            and self.bcrypt_rounds < _MIN_PRODUCTION_BCRYPT_ROUNDS
        ):
            msg = (
                "BCRYPT_ROUNDS must be at least "
                f"{_MIN_PRODUCTION_BCRYPT_ROUNDS} in production. "
                f"Got: {self.bcrypt_rounds}"
            )
            raise ValueError(msg)

        return self


settings = Settings()
