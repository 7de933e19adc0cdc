"""
Record store adapter for ingestion jobs.

The orchestrator only sees IngestionJobModel and ingestion_job_crud; the
engine and session helpers are for the API wiring and tests.

Dependencies: sqlalchemy, docman.configs
"""

from docman.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docman.boundary.db.connection import (
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docman.boundary.db.models import IngestionJobModel
from docman.boundary.db.CRUD import BaseCRUD, IngestionJobCRUD, ingestion_job_crud

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "IngestionJobModel",
    "BaseCRUD",
    "IngestionJobCRUD",
    "ingestion_job_crud",
]
