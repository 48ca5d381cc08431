"""
sql-syntax-support - identifier resolution and SQL fragment composition.

Derives table names, column names and result aliases from entity
descriptions and assembles them into SQL text fragments with bound
parameters.
"""

from sql_syntax_support.core import (
    ConfigurationError,
    EntityConfigError,
    InternalInvariantError,
    MetadataConnectionError,
    SyntaxFragment,
    SyntaxSupportError,
    TableAsAliasFragment,
    TableDefFragment,
    UnknownColumnError,
    to_column_name,
    to_shortened_name,
)
from sql_syntax_support.metadata import (
    ColumnMetadataCache,
    SqlAlchemyColumnFetcher,
    get_column_cache,
)
from sql_syntax_support.providers import as_table, compose, include
from sql_syntax_support.support import SyntaxSupport
from sql_syntax_support.config.entity_loader import load_entity_definitions

__version__ = "0.1.0"

__all__ = [
    "SyntaxSupport",
    "SyntaxFragment",
    "TableDefFragment",
    "TableAsAliasFragment",
    "ColumnMetadataCache",
    "SqlAlchemyColumnFetcher",
    "get_column_cache",
    "compose",
    "include",
    "as_table",
    "load_entity_definitions",
    "to_column_name",
    "to_shortened_name",
    "SyntaxSupportError",
    "UnknownColumnError",
    "ConfigurationError",
    "MetadataConnectionError",
    "InternalInvariantError",
    "EntityConfigError",
]
