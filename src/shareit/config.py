"""ShareIt settings.

Settings are read from the environment (and an optional ``.env`` file) with
pydantic-settings. Variable names are case-insensitive, so ``DATABASE_URL``
sets ``database_url``.
"""

from typing import Annotated

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
ENVIRONMENTS = ("development", "testing", "production")
DATABASE_SCHEMES = ("postgresql://", "postgresql+psycopg2://", "sqlite:///")


class Settings(BaseSettings):
    """Runtime configuration of the ShareIt server."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    database_url: Annotated[
        str, Field(description="SQLite or PostgreSQL connection URL")
    ] = "sqlite:///./shareit.db"
    debug: Annotated[
        bool, Field(description="Console logging, SQL echo and interactive docs")
    ] = False
    log_level: Annotated[str, Field(description=f"One of {', '.join(LOG_LEVELS)}")] = "INFO"
    environment: Annotated[
        str, Field(description=f"One of {', '.join(ENVIRONMENTS)}")
    ] = "development"
    cors_allowed_origins: Annotated[
        list[str], Field(description="Browser origins allowed outside development")
    ] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    @validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {v!r}")
        return v.upper()

    @validator("database_url")
    def validate_database_url(cls, v: str) -> str:
        if not v.startswith(DATABASE_SCHEMES):
            raise ValueError(f"database_url must start with one of {DATABASE_SCHEMES}")
        return v

    @validator("environment")
    def validate_environment(cls, v: str) -> str:
        if v.lower() not in ENVIRONMENTS:
            raise ValueError(f"environment must be one of {ENVIRONMENTS}, got {v!r}")
        return v.lower()

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def masked_database_url(self) -> str:
        """Database URL without the credentials part."""
        scheme, _, rest = self.database_url.partition("://")
        return f"{scheme}://{rest.rsplit('@', 1)[-1]}"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


class ConfigurationError(Exception):
    """Raised when the environment does not hold a valid configuration."""


def get_settings() -> Settings:
    """Load and validate settings.

    Raises:
        ConfigurationError: If any setting fails validation
    """
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(f"Invalid ShareIt configuration: {e}") from e


settings = get_settings()
