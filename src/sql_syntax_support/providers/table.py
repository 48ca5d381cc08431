"""
Table reference fragments.

Example:
    >>> from sql_syntax_support import SyntaxSupport
    >>> member = SyntaxSupport("Member", column_names=("id", "name"))
    >>> str(member.table)
    'member'
    >>> str(member.as_alias(member.syntax("m")))
    'member m'
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sql_syntax_support.core.fragment import TableAsAliasFragment, TableDefFragment
from sql_syntax_support.core.identifier import verify_table_name

if TYPE_CHECKING:
    from sql_syntax_support.providers.query import QueryFragmentProvider
    from sql_syntax_support.support import SyntaxSupport


@dataclass(frozen=True)
class AliasBinding:
    """Association of an alias with the entity it stands for in a statement."""

    alias_name: str
    support: "SyntaxSupport"


class TableFragmentProvider:
    """Render the table of an entity, alone or with an alias."""

    def __init__(self, support: "SyntaxSupport"):
        self.support = support

    def table(self) -> TableDefFragment:
        """Schema-qualified table name, checked for injection risk."""
        name = self.support.table_name_with_schema
        verify_table_name(name)
        return TableDefFragment(name)

    def as_alias(self, provider: "QueryFragmentProvider") -> TableAsAliasFragment:
        """
        ``<table> <alias>``, or the bare table when the alias is the table name.

        The alias binding is attached in both cases.
        """
        binding = AliasBinding(provider.table_alias_name, self.support)
        table = self.table()
        if self.support.table_name == provider.table_alias_name:
            return TableAsAliasFragment(table.value, table.parameters, binding=binding)
        return TableAsAliasFragment(
            f"{table.value} {provider.table_alias_name}", binding=binding
        )
