"""
Correlation ID context.

Holds the id of the request being served so that log records and outbound
worker calls carry it. The API and the reference worker both read and
echo the X-Correlation-ID header.

Dependencies: contextvars
System role: Request tracing across the orchestrator and the worker
"""

from contextvars import ContextVar
import uuid

CORRELATION_HEADER = "X-Correlation-ID"

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation id to the current context.

    Args:
        correlation_id: Incoming header value; a uuid4 is generated when empty

    Returns:
        str: The id now bound
    """
    value = correlation_id or str(uuid.uuid4())
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    """Return the bound correlation id, or "" outside a request."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")
