"""Configuration management for sql-syntax-support.

Usage:
    >>> from sql_syntax_support.config import get_settings
    >>> settings = get_settings()
    >>> settings.default_connection_name
    'default'

Entity definitions are loaded with
``sql_syntax_support.config.entity_loader.load_entity_definitions``.
"""

from sql_syntax_support.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
