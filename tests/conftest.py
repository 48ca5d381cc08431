"""Shared fixtures for the sql-syntax-support test suite."""

from __future__ import annotations

from typing import Dict, Hashable, List, Sequence, Tuple

import pytest

from sql_syntax_support.config.settings import get_settings
from sql_syntax_support.metadata.cache import ColumnMetadataCache
from sql_syntax_support.support import SyntaxSupport


class CountingFetcher:
    """In-memory column fetcher recording every lookup."""

    def __init__(self, tables: Dict[Tuple[Hashable, str], Sequence[str]]):
        self.tables = dict(tables)
        self.calls: List[Tuple[Hashable, str]] = []

    def __call__(self, connection_name: Hashable, table_name: str) -> List[str]:
        self.calls.append((connection_name, table_name))
        return list(self.tables.get((connection_name, table_name), []))


@pytest.fixture(autouse=True)
def fresh_settings():
    """Every test sees Settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def column_cache() -> ColumnMetadataCache:
    return ColumnMetadataCache()


@pytest.fixture
def fetcher() -> CountingFetcher:
    return CountingFetcher(
        {
            ("default", "member"): ["ID", "GROUP_ID", "NAME", "CREATED_AT"],
            ("default", "public.member_group"): ["id", "name"],
            ("billing", "invoice"): ["id", "member_id", "amount"],
        }
    )


@pytest.fixture
def member_support() -> SyntaxSupport:
    return SyntaxSupport("Member", column_names=("id", "group_id", "name", "created_at"))


@pytest.fixture
def group_support() -> SyntaxSupport:
    return SyntaxSupport("MemberGroup", column_names=("id", "name"))
