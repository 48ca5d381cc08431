"""Fragment providers composing entity names into SQL text."""

from .base import EntityProvider, ResultNames
from .column import ColumnFragmentProvider
from .query import (
    PartialResultFragmentProvider,
    QueryFragmentProvider,
    ResultFragmentProvider,
)
from .result_name import ResultNameProvider
from .subquery import (
    PartialSubQueryProvider,
    PartialSubQueryResultNameProvider,
    PartialSubQueryResultProvider,
    SubQueryProvider,
    SubQueryResultNameProvider,
    SubQueryResultProvider,
    as_table,
    compose,
    include,
)
from .table import AliasBinding, TableFragmentProvider

__all__ = [
    "EntityProvider",
    "ResultNames",
    "AliasBinding",
    "TableFragmentProvider",
    "ColumnFragmentProvider",
    "QueryFragmentProvider",
    "ResultFragmentProvider",
    "PartialResultFragmentProvider",
    "ResultNameProvider",
    "SubQueryProvider",
    "SubQueryResultProvider",
    "SubQueryResultNameProvider",
    "PartialSubQueryProvider",
    "PartialSubQueryResultProvider",
    "PartialSubQueryResultNameProvider",
    "compose",
    "include",
    "as_table",
]
