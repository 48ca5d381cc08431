"""
Subquery providers.

A subquery surfaces the result names of its members under a new alias. Given
a member ``m`` whose result names are ``i_on_m, n_on_m``, the subquery
``sq`` exposes them as ``sq.i_on_m`` and relabels them ``i_on_m_on_sq`` in
its own result set.

Example:
    >>> from sql_syntax_support import SyntaxSupport
    >>> m = SyntaxSupport("Member", column_names=("id", "name")).syntax("m")
    >>> sq = include("sq", m)
    >>> str(sq.resolve(m.result_name.column("id")))
    'sq.i_on_m'
    >>> str(sq.result.all_columns)
    'sq.i_on_m as i_on_m_on_sq, sq.n_on_m as n_on_m_on_sq'

A partial subquery narrows the subquery to one member, so that member's
columns can be addressed by their plain names:

    >>> str(sq.partial(m).result_name.column("name"))
    'n_on_m_on_sq'

Subqueries nest: ``compose("outer", sq.result_name)`` treats the inner
subquery's result names like any other member.
"""

from functools import cached_property
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from sql_syntax_support.core.exceptions import UnknownColumnError
from sql_syntax_support.core.fragment import SyntaxFragment, TableDefFragment
from sql_syntax_support.utils.logging import get_logger

from .base import EntityProvider, ResultNames, find_ignore_case, names_of
from .result_name import ResultNameProvider

if TYPE_CHECKING:
    from .query import QueryFragmentProvider

logger = get_logger(__name__)

NameLike = Union[str, SyntaxFragment]


def _find_member(
    alias_name: str, result_names: Sequence[ResultNames], name: str
) -> Optional[ResultNames]:
    matches = [
        rn for rn in result_names if find_ignore_case(rn.named_columns, name) is not None
    ]
    if len(matches) > 1:
        # first member wins
        logger.warning(
            "subquery.ambiguous_result_name",
            subquery=alias_name,
            name=name,
            member_count=len(matches),
        )
    return matches[0] if matches else None


def _registered_names(result_names: Sequence[ResultNames]) -> List[str]:
    return [nc.value for rn in result_names for nc in rn.named_columns]


def compose(
    alias_name: str,
    *result_names: ResultNames,
    delimiter_for_result_name: Optional[str] = None,
) -> "SubQueryProvider":
    """
    Build a subquery from result names of its members.

    Args:
        alias_name: Alias of the subquery in the outer statement
        *result_names: Members, e.g. ``m.result_name``
        delimiter_for_result_name: Defaults to the first member's delimiter
    """
    if not result_names:
        raise ValueError("A subquery needs at least one member")
    delimiter = delimiter_for_result_name or result_names[0].delimiter_for_result_name
    return SubQueryProvider(alias_name, delimiter, result_names)


def include(
    alias_name: str,
    *providers: Union["QueryFragmentProvider", "SubQueryProvider"],
    delimiter_for_result_name: Optional[str] = None,
) -> "SubQueryProvider":
    """Build a subquery from query (or subquery) providers."""
    return compose(
        alias_name,
        *(provider.result_name for provider in providers),
        delimiter_for_result_name=delimiter_for_result_name,
    )


def as_table(subquery: "SubQueryProvider") -> TableDefFragment:
    """Table reference for a subquery: its alias."""
    return TableDefFragment(subquery.alias_name)


class SubQueryProvider:
    """Member result names qualified with the subquery alias (``sq.i_on_m``)."""

    def __init__(
        self,
        alias_name: str,
        delimiter_for_result_name: str,
        result_names: Sequence[ResultNames],
    ):
        self.alias_name = alias_name
        self.delimiter_for_result_name = delimiter_for_result_name
        self.result_names = tuple(result_names)
        self.result = SubQueryResultProvider(
            alias_name, delimiter_for_result_name, self.result_names
        )
        self.result_name = self.result.name

    @property
    def table_alias_name(self) -> str:
        return self.alias_name

    @property
    def result_all(self) -> SyntaxFragment:
        return self.result.all_columns

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(
            SyntaxFragment(f"{self.alias_name}.{nc.value}")
            for rn in self.result_names
            for nc in rn.named_columns
        )

    @property
    def asterisk(self) -> SyntaxFragment:
        return SyntaxFragment(f"{self.alias_name}.*")

    def resolve(self, name: NameLike) -> SyntaxFragment:
        """
        Qualify a member result name with the subquery alias.

        Raises:
            UnknownColumnError: If no member has that result name
        """
        name = str(name)
        member = _find_member(self.alias_name, self.result_names, name)
        if member is None:
            raise UnknownColumnError(
                f"{self.alias_name}.{name}", _registered_names(self.result_names)
            )
        return SyntaxFragment(f"{self.alias_name}.{member.named_column(name).value}")

    def partial(self, provider: "QueryFragmentProvider") -> "PartialSubQueryProvider":
        """
        Narrow this subquery to the member behind ``provider``.

        Only entity members can be narrowed; a nested subquery member is
        addressed through ``resolve`` instead.

        Raises:
            TypeError: If ``provider`` is not a QueryFragmentProvider
        """
        if not isinstance(getattr(provider, "result_name", None), ResultNameProvider):
            raise TypeError(
                "partial() expects a QueryFragmentProvider, "
                f"got {type(provider).__name__}"
            )
        return PartialSubQueryProvider(
            self.alias_name, self.delimiter_for_result_name, provider.result_name
        )


class SubQueryResultProvider:
    """Select-list entries relabelling member result names for the outer level."""

    def __init__(
        self,
        alias_name: str,
        delimiter_for_result_name: str,
        result_names: Sequence[ResultNames],
    ):
        self.alias_name = alias_name
        self.delimiter_for_result_name = delimiter_for_result_name
        self.result_names = tuple(result_names)
        self.name = SubQueryResultNameProvider(
            alias_name, delimiter_for_result_name, self.result_names
        )

    def _labelled(self, named: str) -> str:
        return (
            f"{self.alias_name}.{named} as "
            f"{named}{self.delimiter_for_result_name}{self.alias_name}"
        )

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(
            SyntaxFragment(self._labelled(nc.value))
            for rn in self.result_names
            for nc in rn.named_columns
        )

    def column(self, name: NameLike) -> SyntaxFragment:
        """Select-list entry of one member result name."""
        name = str(name)
        member = _find_member(self.alias_name, self.result_names, name)
        if member is None:
            raise UnknownColumnError(
                f"{self.alias_name}.{name}", _registered_names(self.result_names)
            )
        return SyntaxFragment(self._labelled(member.named_column(name).value))


class SubQueryResultNameProvider:
    """Result names of a subquery (``i_on_m_on_sq``)."""

    def __init__(
        self,
        alias_name: str,
        delimiter_for_result_name: str,
        result_names: Sequence[ResultNames],
    ):
        self.alias_name = alias_name
        self.delimiter_for_result_name = delimiter_for_result_name
        self.result_names = tuple(result_names)

    def _outer(self, named: str) -> str:
        return f"{named}{self.delimiter_for_result_name}{self.alias_name}"

    @cached_property
    def named_columns(self) -> List[SyntaxFragment]:
        return [
            SyntaxFragment(self._outer(nc.value))
            for rn in self.result_names
            for nc in rn.named_columns
        ]

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(self.named_columns)

    def named_column(self, name: NameLike) -> SyntaxFragment:
        """
        Look up an outer result name (``i_on_m_on_sq``).

        Raises:
            UnknownColumnError: If the subquery has no such result name
        """
        name = str(name)
        named = find_ignore_case(self.named_columns, name)
        if named is None:
            raise UnknownColumnError(
                f"{self.alias_name}.{name}", names_of(self.named_columns)
            )
        return named

    column = named_column

    def resolve(self, name: NameLike) -> SyntaxFragment:
        """Outer result name of a member result name (``i_on_m`` -> ``i_on_m_on_sq``)."""
        name = str(name)
        member = _find_member(self.alias_name, self.result_names, name)
        if member is None:
            raise UnknownColumnError(
                f"{self.alias_name}.{name}", _registered_names(self.result_names)
            )
        return SyntaxFragment(self._outer(member.named_column(name).value))


# partial subquery providers


class PartialSubQueryProvider(EntityProvider):
    """Subquery narrowed to one member, addressable by its column names."""

    def __init__(
        self,
        alias_name: str,
        delimiter_for_result_name: str,
        underlying: "ResultNameProvider",
    ):
        super().__init__(underlying.support, delimiter_for_result_name)
        self.alias_name = alias_name
        self.underlying = underlying
        self.result = PartialSubQueryResultProvider(
            alias_name, delimiter_for_result_name, underlying
        )
        self.result_name = self.result.name

    @property
    def table_alias_name(self) -> str:
        return self.alias_name

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(
            SyntaxFragment(f"{self.alias_name}.{nc.value}")
            for nc in self.underlying.named_columns
        )

    @property
    def asterisk(self) -> SyntaxFragment:
        return SyntaxFragment(f"{self.alias_name}.*")

    def resolve(self, name: NameLike) -> SyntaxFragment:
        """``sq.<member result name>`` for a member result name."""
        name = str(name)
        named = find_ignore_case(self.underlying.named_columns, name)
        if named is None:
            raise UnknownColumnError(
                f"{self.alias_name}.{name}", names_of(self.underlying.named_columns)
            )
        return SyntaxFragment(f"{self.alias_name}.{named.value}")

    def column(self, name: str) -> SyntaxFragment:
        """``sq.<member result name>`` for a member column name."""
        return SyntaxFragment(f"{self.alias_name}.{self.underlying.column(name).value}")


class PartialSubQueryResultProvider(EntityProvider):
    """Select-list entries of a partial subquery."""

    def __init__(
        self,
        alias_name: str,
        delimiter_for_result_name: str,
        underlying: "ResultNameProvider",
    ):
        super().__init__(underlying.support, delimiter_for_result_name)
        self.alias_name = alias_name
        self.underlying = underlying
        self.name = PartialSubQueryResultNameProvider(
            alias_name, delimiter_for_result_name, underlying
        )

    def _labelled(self, named: str) -> SyntaxFragment:
        return SyntaxFragment(
            f"{self.alias_name}.{named} as "
            f"{named}{self.delimiter_for_result_name}{self.alias_name}"
        )

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(
            self._labelled(nc.value) for nc in self.underlying.named_columns
        )

    def named_column(self, name: NameLike) -> SyntaxFragment:
        """Select-list entry for a member result name."""
        name = str(name)
        named = find_ignore_case(self.underlying.named_columns, name)
        if named is None:
            raise UnknownColumnError(
                f"{self.alias_name}.{name}", names_of(self.underlying.named_columns)
            )
        return self._labelled(named.value)

    def column(self, name: str) -> SyntaxFragment:
        """Select-list entry for a member column name."""
        return self._labelled(self.underlying.column(name).value)


class PartialSubQueryResultNameProvider(EntityProvider):
    """
    Result names of a partial subquery.

    Column lookups chain the member alias and the subquery alias:
    ``<column alias><d><member alias><d><subquery alias>``.
    """

    def __init__(
        self,
        alias_name: str,
        delimiter_for_result_name: str,
        underlying: "ResultNameProvider",
    ):
        super().__init__(underlying.support, delimiter_for_result_name)
        self.alias_name = alias_name
        self.underlying = underlying

    def _outer(self, named: str) -> str:
        return f"{named}{self.delimiter_for_result_name}{self.alias_name}"

    @cached_property
    def named_columns(self) -> List[SyntaxFragment]:
        return [SyntaxFragment(self._outer(nc.value)) for nc in self.underlying.named_columns]

    @cached_property
    def all_columns(self) -> SyntaxFragment:
        return SyntaxFragment.join(self.named_columns)

    def named_column(self, name: NameLike) -> SyntaxFragment:
        """Look up an outer result name (``n_on_m_on_sq``)."""
        name = str(name)
        named = find_ignore_case(self.named_columns, name)
        if named is None:
            raise UnknownColumnError(
                f"{self.alias_name}.{name}", names_of(self.named_columns)
            )
        return named

    def column(self, name: str) -> SyntaxFragment:
        """Outer result name of a member column (``name`` -> ``n_on_m_on_sq``)."""
        return SyntaxFragment(self._outer(self.underlying.column(name).value))

    def resolve(self, name: NameLike) -> SyntaxFragment:
        """Outer result name of a member result name (``n_on_m`` -> ``n_on_m_on_sq``)."""
        name = str(name)
        named = find_ignore_case(self.underlying.named_columns, name)
        if named is None:
            raise UnknownColumnError(
                f"{self.alias_name}.{name}", names_of(self.underlying.named_columns)
            )
        return SyntaxFragment(self._outer(named.value))
