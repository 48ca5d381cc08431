"""
Unit tests for table reference fragments.
"""

from unittest.mock import MagicMock

import pytest

from sql_syntax_support.core import identifier
from sql_syntax_support.core.fragment import TableAsAliasFragment, TableDefFragment
from sql_syntax_support.providers.table import AliasBinding
from sql_syntax_support.support import SyntaxSupport


@pytest.mark.unit
class TestTable:
    """Tests for the bare table fragment."""

    def test_derived_table_name(self, member_support):
        table = member_support.table
        assert isinstance(table, TableDefFragment)
        assert str(table) == "member"

    def test_schema_qualified(self):
        support = SyntaxSupport("Member", schema_name="public", column_names=("id",))
        assert str(support.table) == "public.member"

    def test_suspicious_table_name_still_rendered(self, monkeypatch):
        logger = MagicMock()
        monkeypatch.setattr(identifier, "logger", logger)
        support = SyntaxSupport("Member", table_name_override="member; drop table x")

        assert str(support.table) == "member; drop table x"
        logger.warning.assert_called_once()


@pytest.mark.unit
class TestAsAlias:
    """Tests for table-with-alias fragments."""

    def test_table_with_alias(self, member_support):
        fragment = member_support.as_alias(member_support.syntax("m"))

        assert isinstance(fragment, TableAsAliasFragment)
        assert str(fragment) == "member m"
        assert fragment.binding == AliasBinding("m", member_support)

    def test_alias_equal_to_table_name_is_omitted(self, member_support):
        fragment = member_support.as_alias(member_support.syntax("member"))

        assert str(fragment) == "member"
        assert fragment.binding.alias_name == "member"

    def test_default_alias_without_schema(self, member_support):
        assert str(member_support.as_alias(member_support.syntax())) == "member"

    def test_default_alias_with_schema(self):
        support = SyntaxSupport("Member", schema_name="public", column_names=("id",))
        assert str(support.as_alias(support.syntax())) == "public.member public_member"
