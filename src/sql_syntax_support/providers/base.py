"""
Shared plumbing of the fragment providers.

Every provider resolves the same entity columns, applies the entity's
upper-casing policy and looks names up case-insensitively.
"""

from functools import cached_property
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Protocol, Sequence

from sql_syntax_support.core.exceptions import UnknownColumnError
from sql_syntax_support.core.fragment import SyntaxFragment
from sql_syntax_support.core.naming import to_alias_name, to_column_name

if TYPE_CHECKING:
    from sql_syntax_support.support import SyntaxSupport


class ResultNames(Protocol):
    """Anything whose result names can be surfaced by a subquery."""

    delimiter_for_result_name: str

    @property
    def named_columns(self) -> List[SyntaxFragment]: ...

    def named_column(self, name: str) -> SyntaxFragment: ...


def find_ignore_case(
    fragments: Iterable[SyntaxFragment], name: str
) -> Optional[SyntaxFragment]:
    """First fragment whose text equals ``name`` ignoring case."""
    wanted = name.casefold()
    for fragment in fragments:
        if fragment.value.casefold() == wanted:
            return fragment
    return None


def names_of(fragments: Sequence[SyntaxFragment]) -> List[str]:
    return [fragment.value for fragment in fragments]


class EntityProvider:
    """Base of providers bound to one entity."""

    def __init__(
        self, support: "SyntaxSupport", delimiter_for_result_name: Optional[str] = None
    ):
        self.support = support
        self.name_converters = support.name_converters
        self.force_upper_case = support.force_upper_case
        self.use_snake_case_column_name = support.use_snake_case_column_name
        self.delimiter_for_result_name = (
            delimiter_for_result_name or support.delimiter_for_result_name
        )

    @cached_property
    def columns(self) -> List[SyntaxFragment]:
        """Entity columns as rendered in SQL."""
        return [SyntaxFragment(self._render(c)) for c in self.support.columns]

    def _render(self, name: str) -> str:
        return name.upper() if self.force_upper_case else name

    @cached_property
    def _original_names(self) -> Dict[str, str]:
        return {self._render(c): c for c in self.support.columns}

    def _alias_of(self, column: SyntaxFragment) -> str:
        # Shorten the metadata name so collisions resolve identically
        # whether or not the entity is upper-cased
        original = self._original_names.get(column.value, column.value)
        return self._render(to_alias_name(original, self.support))

    def find_column(self, name: str, qualifier: Optional[str] = None) -> SyntaxFragment:
        """
        Look up a column case-insensitively.

        Raises:
            UnknownColumnError: If the entity has no such column
        """
        column = find_ignore_case(self.columns, name)
        if column is None:
            attempted = f"{qualifier}.{name}" if qualifier else name
            raise UnknownColumnError(attempted, names_of(self.columns))
        return column

    def column(self, name: str) -> SyntaxFragment:
        raise NotImplementedError

    def c(self, name: str) -> SyntaxFragment:
        """Shorthand for ``column``."""
        return self.column(name)

    def field(self, name: str) -> SyntaxFragment:
        """
        Resolve a field name (before conversion) to the column fragment.

        The field name goes through the entity's name converters and
        snake_case policy first, then through ``column``.
        """
        column_name = self._render(
            to_column_name(name, self.name_converters, self.use_snake_case_column_name)
        )
        return self.column(column_name)
