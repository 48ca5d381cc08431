"""Structured logging using structlog.

Provides the logging configuration shared by the package:
- ISO-8601 timestamps
- JSON rendering through the stdlib logging module
- Redaction of connection URLs and credentials
- Context binding support

The log level comes from sql_syntax_support.config.settings (LOG_LEVEL).

Usage:
    >>> from sql_syntax_support.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("table_name.injection_risk", table_name="member; drop")
"""

import logging
import os
import re
from typing import Any, Dict, MutableMapping

import structlog
from structlog.types import EventDict, Processor

from sql_syntax_support.config.settings import get_settings

# Keys whose values must never reach the log output
SENSITIVE_PATTERNS = [
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*_url$", re.IGNORECASE),
    re.compile(r"^url$", re.IGNORECASE),
    re.compile(r"^connection_urls$", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with sensitive values replaced.

    Nested dictionaries are sanitized recursively.

    Example:
        >>> sanitize_for_logging({"database_url": "postgresql://u:p@h/db", "table": "member"})
        {'database_url': '[REDACTED]', 'table': 'member'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(pattern.match(key) for pattern in SENSITIVE_PATTERNS):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor redacting sensitive fields before rendering."""
    return sanitize_for_logging(dict(event_dict))


def _get_log_level() -> int:
    try:
        level_name = get_settings().LOG_LEVEL
    except Exception:
        # Settings may be invalid while the environment is being set up
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging() -> None:
    """Configure stdlib logging and structlog processors.

    Safe to call more than once; the stdout handler is only installed when
    the root logger has none.
    """
    level = _get_log_level()
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger for ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Example:
        >>> logger = bind_context(entity="Member", alias="m")
        >>> logger.debug("fragment.rendered", kind="result_all")
    """
    return structlog.get_logger().bind(**kwargs)
