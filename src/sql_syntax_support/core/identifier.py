"""
Table identifier helpers.

Table names are rendered as literal text, never as bound parameters, so a
name that came from configuration could smuggle SQL into a statement. The
names are checked and a warning is logged; rendering still goes ahead.
"""

import re
from typing import Optional

from sql_syntax_support.utils.logging import get_logger

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s")


def qualify_table(table: str, schema: Optional[str] = None) -> str:
    """
    Create a table name with optional schema prefix.

    Examples:
        >>> qualify_table("member", schema="public")
        'public.member'
        >>> qualify_table("member")
        'member'
    """
    if schema:
        return f"{schema}.{table}"
    return table


def table_alias_for(table_name_with_schema: str) -> str:
    """
    Default alias of a table: the qualified name with dots replaced.

    Examples:
        >>> table_alias_for("public.member")
        'public_member'
    """
    return table_name_with_schema.replace(".", "_")


def verify_table_name(table_name_with_schema: Optional[str]) -> bool:
    """
    Warn when a table name might carry an SQL injection.

    Returns:
        True when the name looks safe, False when a warning was logged
    """
    if table_name_with_schema is None:
        return True
    name = table_name_with_schema.strip()
    if _WHITESPACE.search(name) or ";" in name:
        logger.warning(
            "table_name.injection_risk",
            table_name=name,
            message=f"The table name ({name}) might bring you SQL injection vulnerability.",
        )
        return False
    return True
