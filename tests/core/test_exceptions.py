"""
Unit tests for the exception hierarchy.
"""

import pytest

from sql_syntax_support.core.exceptions import (
    ConfigurationError,
    EntityConfigError,
    InternalInvariantError,
    MetadataConnectionError,
    SyntaxSupportError,
    UnknownColumnError,
)


@pytest.mark.unit
class TestUnknownColumnError:
    """Tests for UnknownColumnError."""

    def test_message_lists_registered_names(self):
        error = UnknownColumnError("m.foo", ["id", "name"])
        assert str(error) == "Invalid column name. (name: m.foo, registered names: id,name)"

    def test_attributes(self):
        error = UnknownColumnError("foo", ("id",))
        assert error.name == "foo"
        assert error.registered_names == ["id"]

    def test_is_lookup_error(self):
        assert isinstance(UnknownColumnError("foo", []), LookupError)
        assert isinstance(UnknownColumnError("foo", []), SyntaxSupportError)

    def test_to_dict(self):
        data = UnknownColumnError("foo", ["id"]).to_dict()
        assert data["error_type"] == "UnknownColumnError"
        assert data["name"] == "foo"
        assert data["registered_names"] == ["id"]


@pytest.mark.unit
class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_message_includes_context(self):
        error = ConfigurationError("No column found", connection_name="default", table_name="member")
        assert str(error) == "No column found (connection='default', table='member')"

    def test_message_without_context(self):
        assert str(ConfigurationError("Broken")) == "Broken"

    def test_to_dict(self):
        data = ConfigurationError("x", connection_name="db", table_name="t").to_dict()
        assert data["connection_name"] == "db"
        assert data["table_name"] == "t"


@pytest.mark.unit
class TestMetadataConnectionError:
    """Tests for MetadataConnectionError."""

    def test_keeps_original_error(self):
        original = RuntimeError("refused")
        error = MetadataConnectionError("Cannot inspect", "default", original)

        assert error.original_error is original
        assert isinstance(error, ConnectionError)
        assert "connection='default'" in str(error)
        assert error.to_dict()["original_error_type"] == "RuntimeError"


@pytest.mark.unit
def test_remaining_errors_share_base():
    assert issubclass(InternalInvariantError, SyntaxSupportError)
    assert issubclass(EntityConfigError, SyntaxSupportError)
    assert issubclass(EntityConfigError, ValueError)
