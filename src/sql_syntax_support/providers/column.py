"""
Bare column names, for insert and update statements.

Example:
    >>> from sql_syntax_support import SyntaxSupport
    >>> column = SyntaxSupport("Member", column_names=("id", "created_at")).column
    >>> str(column.field("createdAt"))
    'created_at'
    >>> str(column.all_columns)
    'id, created_at'
"""

from functools import cached_property

from sql_syntax_support.core.fragment import SyntaxFragment

from .base import EntityProvider


class ColumnFragmentProvider(EntityProvider):
    """Column names without table qualifier."""

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(self.columns)

    @property
    def asterisk(self) -> SyntaxFragment:
        return SyntaxFragment("*")

    def column(self, name: str) -> SyntaxFragment:
        """
        Get the column named ``name`` (case-insensitive).

        Raises:
            UnknownColumnError: If the entity has no such column
        """
        return SyntaxFragment(self.find_column(name).value)
