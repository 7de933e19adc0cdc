"""
Ingestion job CRUD operations.

Keyed get/put access to IngestionJobModel plus the status-write helper the
orchestrator uses on every sync.

Dependencies: sqlalchemy, docman.boundary.db.models
System role: Ingestion job persistence operations
"""

from sqlalchemy.ext.asyncio import AsyncSession

from docman.boundary.db.base import utc_now
from docman.boundary.db.models.ingestion_job_model import IngestionJobModel
from docman.boundary.db.CRUD.base_crud import BaseCRUD
from docman.core.job_states import IngestionStatus


class IngestionJobCRUD(BaseCRUD[IngestionJobModel]):
    """CRUD operations for IngestionJobModel."""

    def __init__(self) -> None:
        """Initialize IngestionJobCRUD with IngestionJobModel."""
        super().__init__(IngestionJobModel)

    async def set_status(
        self,
        session: AsyncSession,
        job: IngestionJobModel,
        status: IngestionStatus,
    ) -> IngestionJobModel:
        """
        Overwrite the cached status and persist the record.

        updated_at is refreshed on every write, even when the status value
        is unchanged, so it always marks the last sync.

        Args:
            session: Async database session
            job: Loaded job record
            status: New cached status

        Returns:
            IngestionJobModel: Persisted record
        """
        job.status = status
        job.updated_at = utc_now()
        return await self.put(session, job)


ingestion_job_crud = IngestionJobCRUD()
