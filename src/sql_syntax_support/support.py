"""
Entity syntax support.

``SyntaxSupport`` describes how one logical entity maps onto a table: where
the table lives, which columns it has and how field names, aliases and result
names are derived. Every fragment provider is built from it.

Usage:
    >>> member = SyntaxSupport("Member", column_names=("id", "group_id", "name"))
    >>> m = member.syntax("m")
    >>> str(m.result_all)
    'm.id as i_on_m, m.group_id as gi_on_m, m.name as n_on_m'
    >>> str(member.as_alias(m))
    'member m'
    >>> str(member.column.field("groupId"))
    'group_id'

Without ``column_names`` the columns are read once from the database through
the metadata cache and its fetcher.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Optional, Sequence, Tuple

from sql_syntax_support.core.fragment import TableAsAliasFragment, TableDefFragment
from sql_syntax_support.core.identifier import qualify_table, table_alias_for
from sql_syntax_support.core.naming import normalize_name_converters, to_column_name
from sql_syntax_support.metadata.cache import ColumnMetadataCache, get_column_cache
from sql_syntax_support.metadata.fetcher import get_column_fetcher
from sql_syntax_support.providers.column import ColumnFragmentProvider
from sql_syntax_support.providers.query import QueryFragmentProvider
from sql_syntax_support.providers.table import TableFragmentProvider

ColumnFetcher = Callable[[Hashable, str], Sequence[str]]

DEFAULT_CONNECTION_NAME = "default"
DEFAULT_DELIMITER = "_on_"


@dataclass(frozen=True)
class SyntaxSupport:
    """
    Naming configuration of one entity.

    Args:
        entity_name: Logical name; the table name is derived from it
        connection_name: Identity of the connection the table lives in
        schema_name: Optional schema qualifier
        table_name_override: Table name to use instead of the derived one
        column_names: Explicit columns; empty means "read from metadata"
        name_converters: Ordered (regex, replacement) rules, or a mapping
        force_upper_case: Render columns and aliases upper-cased
        use_shortened_result_name: Shorten column names in result names
        use_snake_case_column_name: Convert field names to snake_case
        delimiter_for_result_name: Defaults to ``_on_`` (``_ON_`` upper-cased)
        cache: Column metadata cache; the shared one by default
        column_fetcher: Metadata lookup; the SQLAlchemy fetcher by default
    """

    entity_name: str
    connection_name: Hashable = DEFAULT_CONNECTION_NAME
    schema_name: Optional[str] = None
    table_name_override: Optional[str] = None
    column_names: Tuple[str, ...] = ()
    name_converters: Tuple[Tuple[str, str], ...] = ()
    force_upper_case: bool = False
    use_shortened_result_name: bool = True
    use_snake_case_column_name: bool = True
    delimiter_for_result_name: Optional[str] = None
    cache: Optional[ColumnMetadataCache] = field(default=None, compare=False, repr=False)
    column_fetcher: Optional[ColumnFetcher] = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "column_names", tuple(self.column_names))
        object.__setattr__(
            self, "name_converters", normalize_name_converters(self.name_converters)
        )
        if self.delimiter_for_result_name is None:
            delimiter = DEFAULT_DELIMITER.upper() if self.force_upper_case else DEFAULT_DELIMITER
            object.__setattr__(self, "delimiter_for_result_name", delimiter)

    @classmethod
    def for_entity(cls, entity_type: type, **options: Any) -> "SyntaxSupport":
        """Support named after a class, e.g. ``SyntaxSupport.for_entity(Member)``."""
        return cls(entity_type.__name__, **options)

    # --- Table names ------------------------------------------------------------
    @property
    def table_name(self) -> str:
        if self.table_name_override:
            return self.table_name_override
        return to_column_name(
            self.entity_name, self.name_converters, self.use_snake_case_column_name
        )

    @property
    def table_name_with_schema(self) -> str:
        return qualify_table(self.table_name, self.schema_name)

    @property
    def table(self) -> TableDefFragment:
        return TableFragmentProvider(self).table()

    def as_alias(self, provider: QueryFragmentProvider) -> TableAsAliasFragment:
        """Table with the alias of ``provider`` (``member m``)."""
        return TableFragmentProvider(self).as_alias(provider)

    # --- Columns ----------------------------------------------------------------
    @property
    def columns(self) -> Tuple[str, ...]:
        """
        Column names of the entity.

        Explicit ``column_names`` win; otherwise they are loaded through the
        metadata cache.

        Raises:
            ConfigurationError: If the metadata lookup finds no columns
        """
        if self.column_names:
            return self.column_names
        cache = self.cache or get_column_cache()
        fetcher = self.column_fetcher or get_column_fetcher()
        return cache.columns_for(
            self.connection_name,
            self.table_name_with_schema,
            lambda: fetcher(self.connection_name, self.table_name_with_schema),
        )

    def clear_loaded_columns(self) -> None:
        """Forget the cached metadata of this entity's table."""
        cache = self.cache or get_column_cache()
        cache.invalidate(self.connection_name, self.table_name_with_schema)

    # --- Providers --------------------------------------------------------------
    @property
    def column(self) -> ColumnFragmentProvider:
        """Bare column names, for insert and update statements."""
        return ColumnFragmentProvider(self)

    def syntax(self, alias_name: Optional[str] = None) -> QueryFragmentProvider:
        """
        Query provider for the entity under ``alias_name``.

        Without an alias the schema-qualified table name (dots replaced by
        underscores) is used.
        """
        name = alias_name or table_alias_for(self.table_name_with_schema)
        if self.force_upper_case:
            name = name.upper()
        return QueryFragmentProvider(self, name)
