"""
Column metadata cache.

Maps ``(connection_name, table_name_with_schema)`` to the ordered, lower-cased
column names of that table. Entries are loaded lazily through a fetch
callable and stay until they are explicitly invalidated.

Concurrent first access to the same key triggers a single fetch; the other
callers wait for it and observe the same result (or the same error).
"""

from concurrent.futures import Future
from functools import lru_cache
from threading import Lock
from typing import Any, Callable, Dict, Hashable, Sequence, Tuple

from sql_syntax_support.core.exceptions import ConfigurationError
from sql_syntax_support.utils.logging import get_logger

logger = get_logger(__name__)

CacheKey = Tuple[Hashable, str]


class ColumnMetadataCache:
    """
    Thread-safe cache of column names per connection and table.

    Example:
        >>> cache = ColumnMetadataCache()
        >>> cache.columns_for("default", "member", lambda: ["ID", "Name"])
        ('id', 'name')
        >>> cache.columns_for("default", "member", lambda: [])
        ('id', 'name')
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: Dict[CacheKey, Tuple[str, ...]] = {}
        self._in_flight: Dict[CacheKey, "Future[Tuple[str, ...]]"] = {}

    def columns_for(
        self,
        connection_name: Hashable,
        table_name: str,
        fetch: Callable[[], Sequence[str]],
    ) -> Tuple[str, ...]:
        """
        Return the cached columns of a table, fetching them on a miss.

        Args:
            connection_name: Identity of the connection the table lives in
            table_name: Schema-qualified table name
            fetch: Called without arguments on a miss; returns column names

        Returns:
            Lower-cased column names in table order

        Raises:
            ConfigurationError: If ``fetch`` returned no columns
            Exception: Whatever ``fetch`` raised, unchanged
        """
        key = (connection_name, table_name)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                return cached
            pending = self._in_flight.get(key)
            owner = pending is None
            if owner:
                pending = Future()
                self._in_flight[key] = pending

        if not owner:
            return pending.result()

        try:
            columns = tuple(column.lower() for column in fetch())
            if not columns:
                raise ConfigurationError(
                    "No column found. If the table lives in another database, "
                    "set the entity's connection_name",
                    connection_name=connection_name,
                    table_name=table_name,
                )
        except BaseException as exc:
            # every exit, interrupts included, resolves the in-flight future
            with self._lock:
                self._in_flight.pop(key, None)
            pending.set_exception(exc)
            raise

        with self._lock:
            self._entries[key] = columns
            self._in_flight.pop(key, None)
        pending.set_result(columns)
        logger.debug(
            "column_cache.populated",
            connection_name=str(connection_name),
            table_name=table_name,
            column_count=len(columns),
        )
        return columns

    def invalidate(self, connection_name: Hashable, table_name: str) -> None:
        """Remove the entry of one table, if present."""
        with self._lock:
            removed = self._entries.pop((connection_name, table_name), None)
        if removed is not None:
            logger.debug(
                "column_cache.invalidated",
                connection_name=str(connection_name),
                table_name=table_name,
            )

    def clear_all(self) -> None:
        """Remove every entry."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.debug("column_cache.cleared", removed=count)

    def clear_for(self, connection_name: Hashable) -> None:
        """Remove every entry loaded through ``connection_name``."""
        with self._lock:
            keys = [key for key in self._entries if key[0] == connection_name]
            for key in keys:
                del self._entries[key]
        logger.debug(
            "column_cache.cleared",
            connection_name=str(connection_name),
            removed=len(keys),
        )

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


@lru_cache()
def get_column_cache() -> ColumnMetadataCache:
    """
    Get the process-wide cache used by entities that do not inject their own.

    Returns:
        The shared ColumnMetadataCache instance
    """
    return ColumnMetadataCache()
