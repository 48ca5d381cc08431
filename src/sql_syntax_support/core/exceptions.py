"""
Exception hierarchy for identifier resolution and fragment composition.

Every error is raised synchronously where the lookup or computation fails;
nothing is retried or recovered silently.
"""

from typing import Any, Dict, Optional, Sequence


class SyntaxSupportError(Exception):
    """Base exception for all sql-syntax-support errors."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        return {"error_type": type(self).__name__, "message": str(self)}


class UnknownColumnError(SyntaxSupportError, LookupError):
    """
    Raised when a column, field or result name is not registered.

    Args:
        name: The attempted name (possibly alias-qualified)
        registered_names: Every name the lookup was performed against
    """

    def __init__(self, name: str, registered_names: Sequence[str]):
        self.name = name
        self.registered_names = list(registered_names)
        super().__init__(
            f"Invalid column name. (name: {name}, "
            f"registered names: {','.join(self.registered_names)})"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(name=self.name, registered_names=self.registered_names)
        return data


class ConfigurationError(SyntaxSupportError):
    """
    Raised when an entity cannot be resolved because of its configuration.

    Typical cause: the metadata lookup returned no columns, which usually
    means the connection name points at the wrong database.
    """

    def __init__(
        self,
        message: str,
        connection_name: Optional[Any] = None,
        table_name: Optional[str] = None,
    ):
        self.connection_name = connection_name
        self.table_name = table_name

        context_parts = []
        if connection_name is not None:
            context_parts.append(f"connection='{connection_name}'")
        if table_name:
            context_parts.append(f"table='{table_name}'")

        if context_parts:
            full_message = f"{message} ({', '.join(context_parts)})"
        else:
            full_message = message
        super().__init__(full_message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            connection_name=str(self.connection_name),
            table_name=self.table_name,
        )
        return data


class MetadataConnectionError(SyntaxSupportError, ConnectionError):
    """Raised by the metadata fetcher when the database cannot be reached."""

    def __init__(self, message: str, connection_name: Any, original_error: Exception):
        self.connection_name = connection_name
        self.original_error = original_error
        super().__init__(f"{message} (connection='{connection_name}')")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            connection_name=str(self.connection_name),
            original_error_type=type(self.original_error).__name__,
            original_error_message=str(self.original_error),
        )
        return data


class InternalInvariantError(SyntaxSupportError):
    """Raised when an internal contract is violated (a programming defect)."""

    pass


class EntityConfigError(SyntaxSupportError, ValueError):
    """Raised when entity definitions cannot be loaded from configuration."""

    pass
