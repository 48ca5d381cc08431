"""
Result names of an aliased entity, without table qualifier.

These are the column labels of a result set selected with
``QueryFragmentProvider.result``; rows are mapped back to entities through
them.
"""

from functools import cached_property
from typing import TYPE_CHECKING, List

from sql_syntax_support.core.exceptions import UnknownColumnError
from sql_syntax_support.core.fragment import SyntaxFragment

from .base import EntityProvider, find_ignore_case, names_of

if TYPE_CHECKING:
    from sql_syntax_support.support import SyntaxSupport


class ResultNameProvider(EntityProvider):
    """
    Result names ``<alias><delimiter><table alias>`` of one entity.

    Example:
        >>> from sql_syntax_support import SyntaxSupport
        >>> names = SyntaxSupport("Member", column_names=("id", "name")).syntax("m").result_name
        >>> str(names.column("name"))
        'n_on_m'
    """

    def __init__(self, support: "SyntaxSupport", table_alias_name: str):
        super().__init__(support)
        self.table_alias_name = table_alias_name

    def _result_name(self, column: SyntaxFragment) -> str:
        return f"{self._alias_of(column)}{self.delimiter_for_result_name}{self.table_alias_name}"

    @cached_property
    def named_columns(self) -> List[SyntaxFragment]:
        """Result names of every column, in column order."""
        return [SyntaxFragment(self._result_name(c)) for c in self.columns]

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(self.named_columns)

    def named_column(self, name: str) -> SyntaxFragment:
        """
        Look up a result name (``n_on_m``) case-insensitively.

        Raises:
            UnknownColumnError: If no column has that result name
        """
        named = find_ignore_case(self.named_columns, name)
        if named is None:
            raise UnknownColumnError(name, names_of(self.named_columns))
        return named

    def column(self, name: str) -> SyntaxFragment:
        """Result name of the column ``name``."""
        column = self.find_column(name, qualifier=self.table_alias_name)
        return SyntaxFragment(self._result_name(column))
