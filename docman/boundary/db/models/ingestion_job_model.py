"""
Ingestion job ORM model.

Persists the orchestrator's last known status for each ingestion job.
The remote worker owns the authoritative status while a job is in flight;
this row is a cache refreshed on every synchronisation.

Dependencies: sqlalchemy, docman.boundary.db.base, docman.core.job_states
System role: Local job record store
"""

from sqlalchemy import Enum, JSON
from sqlalchemy.orm import Mapped, mapped_column

from docman.boundary.db.base import Base, UUIDMixin, TimestampMixin
from docman.core.job_states import IngestionStatus


class IngestionJobModel(Base, UUIDMixin, TimestampMixin):
    """
    Ingestion job ORM model.

    Attributes:
        id: UUID primary key, assigned at creation and immutable thereafter
        status: Best known status as of the last worker sync
        payload: Caller-supplied ingestion metadata, forwarded to the worker
        created_at: Job creation timestamp (UTC)
        updated_at: Last persisted status change (UTC)

    Workflow:
        1. Orchestrator creates the row with status=PENDING
        2. Worker start response folds PROCESSING (or whatever it reports) back in
        3. Status polls and control actions overwrite status
    """

    __tablename__ = "ingestion_jobs"

    status: Mapped[IngestionStatus] = mapped_column(
        Enum(
            IngestionStatus,
            native_enum=False,
            values_callable=lambda statuses: [s.value for s in statuses],
            length=32,
        ),
        nullable=False,
        default=IngestionStatus.PENDING,
    )

    payload: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Caller-supplied ingestion metadata",
    )
