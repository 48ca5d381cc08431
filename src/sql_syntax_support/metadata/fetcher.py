"""
Column metadata lookup through SQLAlchemy.

``SqlAlchemyColumnFetcher`` is the default fetch collaborator of
``ColumnMetadataCache``: given a connection name and a schema-qualified table
name it returns the table's column names in ordinal order, read with the
SQLAlchemy inspector.

Engines are registered per connection name. Connections configured in
Settings (``database_url`` / ``connection_urls``) are created lazily on first
use.
"""

from functools import lru_cache
from threading import Lock
from typing import Dict, Hashable, List, Optional

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError

from sql_syntax_support.config.settings import Settings, get_settings
from sql_syntax_support.core.exceptions import (
    ConfigurationError,
    MetadataConnectionError,
)
from sql_syntax_support.utils.logging import get_logger

logger = get_logger(__name__)


def split_table_name(table_name_with_schema: str) -> tuple[Optional[str], str]:
    """
    Split ``schema.table`` into its parts.

    Examples:
        >>> split_table_name("public.member")
        ('public', 'member')
        >>> split_table_name("member")
        (None, 'member')
    """
    schema, _, table = table_name_with_schema.rpartition(".")
    return (schema or None), table


class SqlAlchemyColumnFetcher:
    """
    Fetch column names of a table with ``sqlalchemy.inspect``.

    Example:
        >>> from sqlalchemy import create_engine
        >>> fetcher = SqlAlchemyColumnFetcher({"default": create_engine("sqlite://")})
        >>> fetcher("default", "member")  # table does not exist
        []
    """

    def __init__(
        self,
        engines: Optional[Dict[Hashable, Engine]] = None,
        settings: Optional[Settings] = None,
    ):
        self._engines: Dict[Hashable, Engine] = dict(engines or {})
        self._settings = settings
        self._lock = Lock()

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def register(self, connection_name: Hashable, engine: Engine) -> None:
        """Register (or replace) the engine used for ``connection_name``."""
        with self._lock:
            self._engines[connection_name] = engine

    def engine_for(self, connection_name: Hashable) -> Engine:
        """
        Get the engine of a connection, creating it from Settings if needed.

        Raises:
            ConfigurationError: If the connection is neither registered nor
                configured
        """
        with self._lock:
            engine = self._engines.get(connection_name)
            if engine is not None:
                return engine

            url = (
                self.settings.get_connection_url(connection_name)
                if isinstance(connection_name, str)
                else None
            )
            if not url:
                raise ConfigurationError(
                    "No database configured for connection. Register an engine "
                    "or set SQLSYNTAX_DATABASE_URL / SQLSYNTAX_CONNECTION_URLS",
                    connection_name=connection_name,
                )
            engine = create_engine(url)
            self._engines[connection_name] = engine

        logger.info(
            "column_fetcher.engine_created",
            connection_name=str(connection_name),
            dialect=engine.dialect.name,
        )
        return engine

    def __call__(
        self, connection_name: Hashable, table_name_with_schema: str
    ) -> List[str]:
        """
        Return the column names of a table in ordinal order.

        A missing table yields an empty list.

        Raises:
            ConfigurationError: If the connection is unknown
            MetadataConnectionError: If the database cannot be inspected
        """
        engine = self.engine_for(connection_name)
        schema, table = split_table_name(table_name_with_schema)
        try:
            columns = inspect(engine).get_columns(table, schema=schema)
        except NoSuchTableError:
            logger.warning(
                "column_fetcher.table_not_found",
                connection_name=str(connection_name),
                table_name=table_name_with_schema,
            )
            return []
        except SQLAlchemyError as exc:
            logger.error(
                "column_fetcher.inspection_failed",
                connection_name=str(connection_name),
                table_name=table_name_with_schema,
                error=str(exc),
            )
            raise MetadataConnectionError(
                f"Failed to read columns of {table_name_with_schema}",
                connection_name=connection_name,
                original_error=exc,
            ) from exc

        return [column["name"] for column in columns]


@lru_cache()
def get_column_fetcher() -> SqlAlchemyColumnFetcher:
    """Get the process-wide fetcher backed by the configured connections."""
    return SqlAlchemyColumnFetcher()
