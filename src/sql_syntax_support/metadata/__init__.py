"""Column metadata loading and caching."""

from .cache import ColumnMetadataCache, get_column_cache
from .fetcher import SqlAlchemyColumnFetcher, get_column_fetcher, split_table_name

__all__ = [
    "ColumnMetadataCache",
    "get_column_cache",
    "SqlAlchemyColumnFetcher",
    "get_column_fetcher",
    "split_table_name",
]
