"""
Alias-qualified column and result fragments for select statements.

Example:
    >>> from sql_syntax_support import SyntaxSupport
    >>> m = SyntaxSupport("Member", column_names=("id", "name")).syntax("m")
    >>> str(m.all_columns)
    'm.id, m.name'
    >>> str(m.result_all)
    'm.id as i_on_m, m.name as n_on_m'
"""

from functools import cached_property
from typing import TYPE_CHECKING

from sql_syntax_support.core.fragment import SyntaxFragment

from .base import EntityProvider
from .result_name import ResultNameProvider

if TYPE_CHECKING:
    from sql_syntax_support.support import SyntaxSupport


class QueryFragmentProvider(EntityProvider):
    """Columns of an entity qualified with its table alias (``m.id``)."""

    def __init__(self, support: "SyntaxSupport", table_alias_name: str):
        super().__init__(support)
        self.table_alias_name = table_alias_name
        self.result = ResultFragmentProvider(support, self._render(table_alias_name))
        self.result_name = self.result.name

    @property
    def result_all(self) -> SyntaxFragment:
        return self.result.all_columns

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(
            SyntaxFragment(f"{self.table_alias_name}.{c.value}") for c in self.columns
        )

    @property
    def asterisk(self) -> SyntaxFragment:
        return SyntaxFragment(f"{self.table_alias_name}.*")

    def column(self, name: str) -> SyntaxFragment:
        """
        ``<alias>.<column>`` for the column ``name`` (case-insensitive).

        Raises:
            UnknownColumnError: If the entity has no such column
        """
        column = self.find_column(name, qualifier=self.table_alias_name)
        return SyntaxFragment(f"{self.table_alias_name}.{column.value}")


class ResultFragmentProvider(EntityProvider):
    """Select-list entries labelled with their result names."""

    def __init__(self, support: "SyntaxSupport", table_alias_name: str):
        super().__init__(support)
        self.table_alias_name = table_alias_name
        self.name = ResultNameProvider(support, table_alias_name)

    def _labelled(self, column: SyntaxFragment) -> SyntaxFragment:
        return SyntaxFragment(
            f"{self.table_alias_name}.{column.value} as "
            f"{self._alias_of(column)}{self.delimiter_for_result_name}{self.table_alias_name}"
        )

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(self._labelled(c) for c in self.columns)

    def column(self, name: str) -> SyntaxFragment:
        return self._labelled(self.find_column(name, qualifier=self.table_alias_name))

    def for_expression(self, expression: SyntaxFragment) -> "PartialResultFragmentProvider":
        """
        Label an arbitrary expression with a column's result name.

        Example:
            >>> count = SyntaxFragment("count(?)", (1,))
            >>> m.result.for_expression(count).column("id")  # doctest: +SKIP
            SyntaxFragment(value='count(?) as i_on_m', parameters=(1,))
        """
        return PartialResultFragmentProvider(self.support, self.table_alias_name, expression)


class PartialResultFragmentProvider(EntityProvider):
    """Result label applied to an expression; keeps the expression's parameters."""

    def __init__(
        self, support: "SyntaxSupport", table_alias_name: str, expression: SyntaxFragment
    ):
        super().__init__(support)
        self.table_alias_name = table_alias_name
        self.expression = expression

    def column(self, name: str) -> SyntaxFragment:
        column = self.find_column(name, qualifier=self.table_alias_name)
        return SyntaxFragment(
            f"{self.expression.value} as "
            f"{self._alias_of(column)}{self.delimiter_for_result_name}{self.table_alias_name}",
            self.expression.parameters,
        )
