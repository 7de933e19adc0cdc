"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: docman.configs, docman.application, docman.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docman.configs import get_settings
from docman.boundary.db import get_async_db
from docman.boundary.worker.client import IngestionWorkerClient
from docman.application.services import IngestionOrchestrator
from docman.core.keyed_lock import KeyedLock


class ServiceCache:
    """Container for process-wide service instances."""

    def __init__(self):
        self._worker_client = None
        self._job_locks = None

    @property
    def worker_client(self) -> IngestionWorkerClient:
        """Get cached ingestion worker client."""
        if self._worker_client is None:
            worker = get_settings().worker
            self._worker_client = IngestionWorkerClient(
                base_url=worker.base_url,
                timeout=worker.timeout_seconds,
                connect_timeout=worker.connect_timeout_seconds,
            )
        return self._worker_client

    @property
    def job_locks(self) -> KeyedLock:
        """Get the per-job lock registry shared by all requests."""
        if self._job_locks is None:
            self._job_locks = KeyedLock()
        return self._job_locks

    async def aclose(self) -> None:
        """Close the worker client and drop cached instances."""
        if self._worker_client is not None:
            await self._worker_client.close()
        self._worker_client = None
        self._job_locks = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_ingestion_orchestrator(
    db: AsyncSession = Depends(get_async_db),
) -> IngestionOrchestrator:
    """
    Get ingestion orchestrator instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        IngestionOrchestrator: Orchestrator bound to the request's session and
            the process-wide worker client and job locks
    """
    cache = get_service_cache()
    return IngestionOrchestrator(
        db=db,
        worker=cache.worker_client,
        locks=cache.job_locks,
    )
