"""
End-to-end tests: orchestrator wired to the real worker application.

The worker app is reached through httpx.ASGITransport, the record store is
in-memory SQLite. Completion delays are short and outcomes scripted.

System role: Verification of orchestrator/worker contract
"""

import asyncio
import uuid

import httpx
import pytest

from docman.application.services.ingestion_orchestrator import IngestionOrchestrator
from docman.boundary.worker.client import IngestionWorkerClient
from docman.core.exceptions import InvalidTransitionError, RemoteUnavailableError
from docman.core.job_states import IngestionStatus
from docman.ingestion_worker.app import create_worker_app
from docman.ingestion_worker.engine import IngestionWorkerEngine

COMPLETE = 0.9
FAIL = 0.1


@pytest.fixture
async def wire(test_async_db, job_locks, fixed_random):
    """Factory wiring an orchestrator to a fresh worker engine."""
    resources = []

    async def factory(delay: float = 60, outcomes=None, strict: bool = False):
        engine = IngestionWorkerEngine(
            strict_transitions=strict,
            rng=fixed_random(delay=delay, outcomes=outcomes),
        )
        transport = httpx.ASGITransport(app=create_worker_app(engine))
        client = IngestionWorkerClient("http://worker", transport=transport)
        resources.append((engine, client))
        orchestrator = IngestionOrchestrator(db=test_async_db, worker=client, locks=job_locks)
        return orchestrator, engine

    yield factory

    for engine, client in resources:
        await client.close()
        await engine.aclose()


class TestScenario:
    """Create, poll, cancel, poll."""

    @pytest.mark.asyncio
    async def test_create_status_cancel_status(self, wire) -> None:
        orchestrator, engine = await wire()

        created = await orchestrator.create_job({"name": "a"})
        assert created.status == "Processing"

        status = await orchestrator.get_status(created.job_id)
        assert status.status == "Processing"
        assert status.stale is False

        cancelled = await orchestrator.cancel(created.job_id)
        assert cancelled.job.status is IngestionStatus.CANCELLED
        assert cancelled.remote_status == "Cancelled"
        assert cancelled.remote_synced is True

        status = await orchestrator.get_status(created.job_id)
        assert status.status == "Cancelled"

    @pytest.mark.asyncio
    async def test_cancelled_job_is_not_completed_later(self, wire) -> None:
        orchestrator, engine = await wire(delay=0.02, outcomes=[COMPLETE])

        created = await orchestrator.create_job({})
        await orchestrator.cancel(created.job_id)
        await asyncio.sleep(0.06)

        status = await orchestrator.get_status(created.job_id)
        assert status.status == "Cancelled"

    @pytest.mark.asyncio
    async def test_completion_is_picked_up_by_poll(self, wire) -> None:
        orchestrator, engine = await wire(delay=0.01, outcomes=[COMPLETE])

        created = await orchestrator.create_job({})
        await asyncio.sleep(0.05)

        status = await orchestrator.get_status(created.job_id)
        assert status.status == "Completed"

    @pytest.mark.asyncio
    async def test_pause_then_resume_returns_to_processing(self, wire) -> None:
        orchestrator, engine = await wire(delay=0.03, outcomes=[COMPLETE])

        created = await orchestrator.create_job({})
        paused = await orchestrator.pause(created.job_id)
        assert paused.job.status is IngestionStatus.PAUSED
        await asyncio.sleep(0.06)
        assert (await orchestrator.get_status(created.job_id)).status == "Paused"

        resumed = await orchestrator.resume(created.job_id)
        assert resumed.job.status is IngestionStatus.PROCESSING
        assert engine.pending_completions() == 1

    @pytest.mark.asyncio
    async def test_retry_after_failure_rearms_one_completion(self, wire) -> None:
        orchestrator, engine = await wire(delay=0.01, outcomes=[FAIL, COMPLETE])

        created = await orchestrator.create_job({})
        await asyncio.sleep(0.05)
        assert (await orchestrator.get_status(created.job_id)).status == "Failed"

        retried = await orchestrator.retry(created.job_id)
        assert retried.job.status is IngestionStatus.PROCESSING
        assert retried.remote_status == "Processing"
        assert engine.pending_completions() == 1

        await asyncio.sleep(0.05)
        assert (await orchestrator.get_status(created.job_id)).status == "Completed"

    @pytest.mark.asyncio
    async def test_embedding_is_idempotent(self, wire) -> None:
        orchestrator, engine = await wire()
        created = await orchestrator.create_job({})

        first = await orchestrator.get_embedding(created.job_id)
        second = await orchestrator.get_embedding(created.job_id)

        assert first == second == [0.1, 0.2, 0.3, 0.4, 0.5]
        assert (await orchestrator.get_status(created.job_id)).status == "Processing"

    @pytest.mark.asyncio
    async def test_strict_worker_rejection_surfaces(self, wire, test_async_db) -> None:
        orchestrator, engine = await wire(strict=True)
        created = await orchestrator.create_job({})

        with pytest.raises(InvalidTransitionError):
            await orchestrator.resume(created.job_id)

        status = await orchestrator.get_status(created.job_id)
        assert status.status == "Processing"


class TestWorkerDown:
    """Orchestrator behaviour when the worker cannot be reached."""

    @pytest.mark.asyncio
    async def test_create_fails_and_status_is_stale(self, test_async_db, job_locks) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = IngestionWorkerClient("http://worker", transport=httpx.MockTransport(refuse))
        orchestrator = IngestionOrchestrator(db=test_async_db, worker=client, locks=job_locks)

        with pytest.raises(RemoteUnavailableError) as exc_info:
            await orchestrator.create_job({"name": "a"})

        job_id = exc_info.value.job_id
        assert job_id is not None

        status = await orchestrator.get_status(uuid.UUID(job_id))
        assert status.status == "Pending"
        assert status.stale is True

        paused = await orchestrator.pause(uuid.UUID(job_id))
        assert paused.remote_synced is False
        assert paused.job.status is IngestionStatus.PAUSED

        await client.close()
