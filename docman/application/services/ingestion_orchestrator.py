"""
Ingestion orchestrator.

Coordinates ingestion jobs between the local record store and the remote
ingestion worker. The persisted status is a cache of the worker's
authoritative status, refreshed on every call that reaches the worker.

Operations on the same job id are serialised with a process-wide KeyedLock;
different ids run in parallel. Nothing here retries on its own.

Dependencies: docman.boundary.db.CRUD, docman.boundary.worker, docman.core
System role: Ingestion job orchestration
"""

import logging
import uuid
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docman.boundary.db.CRUD.ingestion_job_crud import ingestion_job_crud
from docman.boundary.db.models.ingestion_job_model import IngestionJobModel
from docman.boundary.worker.client import IngestionWorkerClient
from docman.core.exceptions import (
    InvalidTransitionError,
    JobNotFoundError,
    RemoteUnavailableError,
)
from docman.core.job_states import IngestionStatus, parse_status
from docman.core.keyed_lock import KeyedLock
from docman.models.ingestion import (
    ControlResult,
    IngestionJob,
    RemoteStartResult,
    RemoteStatusResult,
)
from docman.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

# Cache value written after each control call; retry re-enters the pipeline.
CONTROL_TARGETS: dict[str, IngestionStatus] = {
    "cancel": IngestionStatus.CANCELLED,
    "pause": IngestionStatus.PAUSED,
    "resume": IngestionStatus.PROCESSING,
    "retry": IngestionStatus.PROCESSING,
}


class IngestionOrchestrator:
    """
    Ingestion job orchestrator.

    Exposes create/status/control/embedding operations to the HTTP layer.
    """

    def __init__(
        self,
        db: AsyncSession,
        worker: IngestionWorkerClient,
        locks: KeyedLock,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            db: AsyncSession for record store operations
            worker: Client for the remote ingestion worker
            locks: Process-wide per-job lock registry
        """
        self.db = db
        self.worker = worker
        self.locks = locks

    async def create_job(self, payload: dict[str, Any]) -> RemoteStartResult:
        """
        Persist a new Pending job and ask the worker to start it.

        The record is committed before the worker call, so a worker failure
        leaves a Pending record that get_status can later report.

        Args:
            payload: Caller-supplied ingestion metadata

        Returns:
            RemoteStartResult: Worker's start response plus the new job id

        Raises:
            RemoteUnavailableError: Worker call did not complete (record stays Pending)
        """
        job_id = uuid.uuid4()
        async with self.locks.hold(job_id):
            job = await ingestion_job_crud.create(
                self.db,
                id=job_id,
                status=IngestionStatus.PENDING,
                payload=payload,
            )
            await self.db.commit()

            try:
                response = await self.worker.start(str(job_id), payload)
            except RemoteUnavailableError:
                logger.warning(
                    "Ingestion job left pending; worker start failed",
                    extra={"job_id": str(job_id)},
                )
                raise

            reported = parse_status(response.status)
            if reported is not None:
                await ingestion_job_crud.set_status(self.db, job, reported)
                await self.db.commit()

            log_with_context(
                logger,
                logging.INFO,
                "Ingestion job created",
                job_id=job_id,
                worker_status=response.status,
                payload=payload,
            )
            return RemoteStartResult.model_validate(
                {**response.model_dump(), "job_id": job_id}
            )

    async def get_status(self, job_id: UUID) -> RemoteStatusResult:
        """
        Fetch the worker's status and fold it into the local record.

        Local presence gates the call: an id unknown locally fails even if
        the worker still holds state for it.

        Args:
            job_id: Job UUID

        Returns:
            RemoteStatusResult: Worker status, or the cached status with
                stale=True when the worker could not be reached or gave no
                usable status

        Raises:
            JobNotFoundError: No local record
        """
        async with self.locks.hold(job_id):
            job = await self._require_job(job_id)

            try:
                response = await self.worker.status(str(job_id))
            except RemoteUnavailableError as e:
                logger.warning(
                    "Serving cached ingestion status",
                    extra={"job_id": str(job_id), "error": e.reason},
                )
                return RemoteStatusResult(
                    job_id=job_id,
                    status=job.status.value,
                    stale=True,
                    remote_error=e.reason,
                )

            reported = parse_status(response.status)
            if reported is None:
                return RemoteStatusResult(
                    job_id=job_id,
                    status=response.status or job.status.value,
                    stale=True,
                )

            await ingestion_job_crud.set_status(self.db, job, reported)
            await self.db.commit()
            return RemoteStatusResult(job_id=job_id, status=reported.value)

    async def cancel(self, job_id: UUID) -> ControlResult:
        """Signal cancel and cache Cancelled."""
        return await self._control(job_id, "cancel")

    async def pause(self, job_id: UUID) -> ControlResult:
        """Signal pause and cache Paused."""
        return await self._control(job_id, "pause")

    async def resume(self, job_id: UUID) -> ControlResult:
        """Signal resume and cache Processing."""
        return await self._control(job_id, "resume")

    async def retry(self, job_id: UUID) -> ControlResult:
        """Signal retry and cache Processing."""
        return await self._control(job_id, "retry")

    async def get_embedding(self, job_id: UUID) -> list[float]:
        """
        Fetch the document embedding from the worker.

        Touches no local state.

        Raises:
            RemoteUnavailableError: Worker call did not complete
        """
        return await self.worker.embedding(str(job_id))

    async def _require_job(self, job_id: UUID) -> IngestionJobModel:
        job = await ingestion_job_crud.get_by_id(self.db, job_id)
        if job is None:
            raise JobNotFoundError(str(job_id))
        return job

    async def _control(self, job_id: UUID, operation: str) -> ControlResult:
        """
        Send a control signal, then overwrite the cached status with the target.

        The cache is written without checking that the worker agreed; a
        transport failure only clears remote_synced. A strict worker's
        rejection propagates and leaves the record untouched.
        """
        target = CONTROL_TARGETS[operation]
        async with self.locks.hold(job_id):
            remote_synced = True
            remote_status = None
            rejected: InvalidTransitionError | None = None

            try:
                response = await getattr(self.worker, operation)(str(job_id))
                remote_status = response.status
            except InvalidTransitionError as e:
                rejected = e
            except RemoteUnavailableError as e:
                remote_synced = False
                logger.warning(
                    "Ingestion control accepted locally; worker not confirmed",
                    extra={"job_id": str(job_id), "operation": operation, "error": e.reason},
                )

            job = await self._require_job(job_id)
            if rejected is not None:
                raise rejected

            job = await ingestion_job_crud.set_status(self.db, job, target)
            await self.db.commit()

            logger.info(
                "Ingestion control applied",
                extra={
                    "job_id": str(job_id),
                    "operation": operation,
                    "cached_status": target.value,
                    "remote_status": remote_status,
                    "remote_synced": remote_synced,
                },
            )
            return ControlResult(
                job=IngestionJob.model_validate(job),
                remote_synced=remote_synced,
                remote_status=remote_status,
            )
