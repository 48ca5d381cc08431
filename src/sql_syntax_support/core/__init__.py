"""Core identifier and fragment utilities."""

from .exceptions import (
    ConfigurationError,
    EntityConfigError,
    InternalInvariantError,
    MetadataConnectionError,
    SyntaxSupportError,
    UnknownColumnError,
)
from .fragment import SyntaxFragment, TableAsAliasFragment, TableDefFragment
from .identifier import qualify_table, table_alias_for, verify_table_name
from .naming import to_alias_name, to_column_name, to_shortened_name

__all__ = [
    "SyntaxFragment",
    "TableDefFragment",
    "TableAsAliasFragment",
    "to_column_name",
    "to_shortened_name",
    "to_alias_name",
    "qualify_table",
    "table_alias_for",
    "verify_table_name",
    "SyntaxSupportError",
    "UnknownColumnError",
    "ConfigurationError",
    "MetadataConnectionError",
    "InternalInvariantError",
    "EntityConfigError",
]
