"""
Structured logging helpers.

Flattens job context (ids, statuses, caller payloads) into values that are
safe to put in a log record's extra dict. Caller payloads are free-form,
so only their shape is logged.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import enum
import logging
import uuid
from typing import Any

MAX_VALUE_LENGTH = 200


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value for a log record.

    Enums log their value, UUIDs their canonical string, dicts their sorted
    keys and sequences their length. Long strings are truncated.

    Args:
        value: Value to render
        max_length: Maximum length before truncating

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, dict):
        rendered = f"keys={sorted(str(k) for k in value)}"
    elif isinstance(value, (list, tuple)):
        rendered = f"{type(value).__name__}[{len(value)}]"
    else:
        rendered = str(value)

    if len(rendered) > max_length:
        return f"{rendered[:max_length]}...(+{len(rendered) - max_length})"
    return rendered


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with every context value passed through safe_log_value.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Fields for the record's extra dict
    """
    logger.log(
        level,
        message,
        extra={key: safe_log_value(val) for key, val in context.items()},
    )
