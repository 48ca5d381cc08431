"""
Configuration management for sql-syntax-support.

Settings are loaded from environment variables (``SQLSYNTAX_`` prefix) and an
optional ``.env`` file using Pydantic BaseSettings. They provide the default
naming policy applied to entity definitions loaded from configuration, the
database URLs used by the metadata fetcher, and the logging level.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

import structlog
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SQLSYNTAX_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


def _normalize_url(url: str) -> str:
    # SQLAlchemy no longer accepts the postgres:// alias
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the SQLSYNTAX_ prefix, e.g.
    SQLSYNTAX_FORCE_UPPER_CASE=true. LOG_LEVEL and DATABASE_URL are also
    accepted without prefix.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "SQLSYNTAX_LOG_LEVEL"),
        description="Logging level (uppercase)",
    )

    # Metadata fetcher connections
    database_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SQLSYNTAX_DATABASE_URL", "DATABASE_URL"),
        description="Database URL of the default connection",
    )
    connection_urls: Dict[str, str] = Field(
        default_factory=dict,
        description="Additional named connections (JSON object: name -> URL)",
    )
    default_connection_name: str = Field(
        default="default",
        description="Connection name used by entities that do not name one",
    )

    # Default naming policy for configured entities
    force_upper_case: bool = Field(
        default=False, description="Render column and alias names upper-cased"
    )
    use_shortened_result_name: bool = Field(
        default=True, description="Shorten column names in result aliases"
    )
    use_snake_case_column_name: bool = Field(
        default=True, description="Convert field names to snake_case column names"
    )
    delimiter_for_result_name: Optional[str] = Field(
        default=None,
        description="Result alias delimiter (None = '_on_' or '_ON_' when upper-cased)",
    )

    entities_config: str = Field(
        default="./config/entities.yml",
        description="Path to the YAML entity definitions",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    def get_connection_url(self, connection_name: str) -> Optional[str]:
        """
        Get the database URL configured for a connection name.

        Named entries in ``connection_urls`` win; the default connection falls
        back to ``database_url``.

        Returns:
            The URL, or None when the connection is not configured
        """
        url = self.connection_urls.get(connection_name)
        if url is None and connection_name == self.default_connection_name:
            url = self.database_url
        if url is None:
            return None
        return _normalize_url(url)

    model_config = SettingsConfigDict(
        env_prefix="SQLSYNTAX_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
