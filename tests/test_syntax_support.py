"""
Unit tests for SyntaxSupport: table naming, column loading and composition.
"""

import pytest

from sql_syntax_support.core.exceptions import ConfigurationError
from sql_syntax_support.core.fragment import SyntaxFragment
from sql_syntax_support.support import SyntaxSupport


class ServiceOrder:
    pass


@pytest.mark.unit
class TestTableNames:
    """Tests for table name derivation."""

    def test_derived_from_entity_name(self):
        assert SyntaxSupport("Member").table_name == "member"
        assert SyntaxSupport("MemberGroup").table_name == "member_group"

    def test_override(self):
        assert SyntaxSupport("Member", table_name_override="members").table_name == "members"

    def test_with_schema(self):
        support = SyntaxSupport("MemberGroup", schema_name="public")
        assert support.table_name_with_schema == "public.member_group"

    def test_name_converters_apply_to_table_name(self):
        support = SyntaxSupport("ServiceOrder", name_converters={"Order$": "Request"})
        assert support.table_name == "service_request"

    def test_for_entity(self):
        support = SyntaxSupport.for_entity(ServiceOrder, column_names=("id",))
        assert support.entity_name == "ServiceOrder"
        assert support.table_name == "service_order"


@pytest.mark.unit
class TestDefaults:
    """Tests for configuration defaults."""

    def test_delimiter(self):
        assert SyntaxSupport("Member").delimiter_for_result_name == "_on_"
        assert SyntaxSupport("Member", force_upper_case=True).delimiter_for_result_name == "_ON_"

    def test_explicit_delimiter_kept(self):
        support = SyntaxSupport("Member", force_upper_case=True, delimiter_for_result_name="__")
        assert support.delimiter_for_result_name == "__"

    def test_name_converters_normalized(self):
        support = SyntaxSupport("Member", name_converters={"^serviceCode$": "service_cd"})
        assert support.name_converters == (("^serviceCode$", "service_cd"),)

    def test_equality_ignores_collaborators(self, column_cache, fetcher):
        plain = SyntaxSupport("Member", column_names=["id"])
        wired = SyntaxSupport(
            "Member", column_names=("id",), cache=column_cache, column_fetcher=fetcher
        )
        assert plain == wired
        assert hash(plain) == hash(wired)

    def test_name_converter_resolves_field(self):
        support = SyntaxSupport(
            "ServiceOrder",
            column_names=("id", "service_cd"),
            name_converters={"^serviceCode$": "service_cd"},
        )
        assert str(support.column.field("serviceCode")) == "service_cd"
        assert str(support.syntax("s").result.field("serviceCode")) == "s.service_cd as sc_on_s"


@pytest.mark.unit
class TestColumnLoading:
    """Tests for columns loaded through the metadata cache."""

    def test_explicit_columns_skip_metadata(self, column_cache, fetcher):
        support = SyntaxSupport(
            "Member", column_names=("id",), cache=column_cache, column_fetcher=fetcher
        )
        assert support.columns == ("id",)
        assert fetcher.calls == []

    def test_columns_loaded_once(self, column_cache, fetcher):
        support = SyntaxSupport("Member", cache=column_cache, column_fetcher=fetcher)

        assert support.columns == ("id", "group_id", "name", "created_at")
        assert support.syntax("m").columns
        assert fetcher.calls == [("default", "member")]

    def test_schema_qualified_lookup(self, column_cache, fetcher):
        support = SyntaxSupport(
            "MemberGroup", schema_name="public", cache=column_cache, column_fetcher=fetcher
        )
        assert support.columns == ("id", "name")

    def test_connection_name_selects_database(self, column_cache, fetcher):
        support = SyntaxSupport(
            "Invoice", connection_name="billing", cache=column_cache, column_fetcher=fetcher
        )
        assert support.columns == ("id", "member_id", "amount")
        assert ("billing", "invoice") in column_cache

    def test_table_without_columns(self, column_cache, fetcher):
        support = SyntaxSupport("Invoice", cache=column_cache, column_fetcher=fetcher)
        with pytest.raises(ConfigurationError) as exc_info:
            support.columns
        assert exc_info.value.table_name == "invoice"

    def test_clear_loaded_columns(self, column_cache, fetcher):
        support = SyntaxSupport("Member", cache=column_cache, column_fetcher=fetcher)
        support.columns

        support.clear_loaded_columns()

        assert ("default", "member") not in column_cache
        support.columns
        assert len(fetcher.calls) == 2

    def test_entities_share_cache_entries(self, column_cache, fetcher):
        first = SyntaxSupport("Member", cache=column_cache, column_fetcher=fetcher)
        second = SyntaxSupport("Member", force_upper_case=True, cache=column_cache, column_fetcher=fetcher)

        first.columns
        second.columns

        assert len(fetcher.calls) == 1


@pytest.mark.unit
class TestStatementComposition:
    """Fragments from several entities assembled into one statement."""

    def test_join_select(self, member_support, group_support):
        m = member_support.syntax("m")
        g = group_support.syntax("g")
        condition = SyntaxFragment(f"{m.column('id')} = ?", (42,))

        statement = (
            SyntaxFragment(
                f"select {m.result_all}, {g.result_all} "
                f"from {member_support.as_alias(m)} "
                f"inner join {group_support.as_alias(g)} on {m.field('groupId')} = {g.c('id')} "
                "where "
            )
            + condition
        )

        assert statement.value == (
            "select m.id as i_on_m, m.group_id as gi_on_m, m.name as n_on_m, "
            "m.created_at as ca_on_m, g.id as i_on_g, g.name as n_on_g "
            "from member m inner join member_group g on m.group_id = g.id "
            "where m.id = ?"
        )
        assert statement.parameters == (42,)

    def test_insert_columns(self, member_support):
        column = member_support.column
        statement = f"insert into {member_support.table} ({column.all_columns}) values (?, ?, ?, ?)"
        assert statement == "insert into member (id, group_id, name, created_at) values (?, ?, ?, ?)"
