"""
SQL text fragments with positional bound parameters.

A fragment pairs literal SQL text with the parameters bound to the
placeholders inside it, left to right. Fragments compose by concatenating
both parts; the relative order of parameters is always preserved.

Examples:
    >>> left = SyntaxFragment("m.id = ?", (1,))
    >>> right = SyntaxFragment(" and m.name = ?", ("alice",))
    >>> combined = left + right
    >>> combined.value
    'm.id = ? and m.name = ?'
    >>> combined.parameters
    (1, 'alice')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Optional, Tuple

if TYPE_CHECKING:
    from sql_syntax_support.providers.table import AliasBinding


@dataclass(frozen=True)
class SyntaxFragment:
    """Immutable pair of SQL text and its ordered bound parameters."""

    value: str
    parameters: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.parameters, tuple):
            object.__setattr__(self, "parameters", tuple(self.parameters))

    def __str__(self) -> str:
        return self.value

    def __add__(self, other: "SyntaxFragment") -> "SyntaxFragment":
        if not isinstance(other, SyntaxFragment):
            return NotImplemented
        return SyntaxFragment(
            self.value + other.value, self.parameters + other.parameters
        )

    def __bool__(self) -> bool:
        return bool(self.value or self.parameters)

    @classmethod
    def join(
        cls, fragments: Iterable["SyntaxFragment"], delimiter: str = ", "
    ) -> "SyntaxFragment":
        """Join fragments with ``delimiter``, concatenating their parameters."""
        values = []
        parameters: list = []
        for fragment in fragments:
            values.append(fragment.value)
            parameters.extend(fragment.parameters)
        return cls(delimiter.join(values), tuple(parameters))

    @classmethod
    def csv(cls, *fragments: "SyntaxFragment") -> "SyntaxFragment":
        """Comma-separated join of ``fragments``."""
        return cls.join(fragments, ", ")


@dataclass(frozen=True)
class TableDefFragment(SyntaxFragment):
    """Table reference part of a statement (``schema.table`` or a subquery alias)."""


@dataclass(frozen=True)
class TableAsAliasFragment(SyntaxFragment):
    """Table reference together with its alias; keeps the alias binding."""

    binding: Optional["AliasBinding"] = field(default=None, compare=False)
