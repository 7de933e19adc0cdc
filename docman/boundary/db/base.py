"""
SQLAlchemy declarative base and shared column mixins.

Column types are backend-neutral so the same models run on PostgreSQL in
deployment and on SQLite in tests.

Dependencies: sqlalchemy
System role: Foundation for the record store models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base; create_tables() builds everything registered here."""


class UUIDMixin:
    """
    UUID primary key.

    Native UUID on PostgreSQL, CHAR(32) elsewhere. Callers may assign the
    id themselves; the orchestrator does, so it can lock on the id before
    the row exists.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )


class TimestampMixin:
    """created_at set on insert; updated_at refreshed on every write."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
