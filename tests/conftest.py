"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory record store, worker client mocks, deterministic
randomness for the worker engine, id fixtures
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import random
import uuid
from unittest.mock import AsyncMock

import pytest

from docman.boundary.worker.client import IngestionWorkerClient
from docman.core.keyed_lock import KeyedLock
from docman.models.ingestion import WorkerStatusResponse


class FixedRandom(random.Random):
    """
    Random source with a fixed completion delay and scripted outcomes.

    outcomes are consumed in order by random(); the last one repeats.
    Values >= 0.5 complete a job, values < 0.5 fail it.
    """

    def __init__(self, delay: float = 0.01, outcomes: list[float] | None = None) -> None:
        super().__init__(0)
        self.delay = delay
        self.outcomes = list(outcomes or [0.9])

    def uniform(self, a: float, b: float) -> float:
        return self.delay

    def random(self) -> float:
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from docman.boundary.db.base import Base
    import docman.boundary.db.models  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def mock_worker_client():
    """
    Create mock IngestionWorkerClient for testing.

    Every status-returning call answers with status=Processing by default.

    Returns:
        AsyncMock: Mocked worker client
    """
    client = AsyncMock(spec=IngestionWorkerClient)
    processing = WorkerStatusResponse(status="Processing")
    client.start.return_value = processing
    client.status.return_value = processing
    client.cancel.return_value = WorkerStatusResponse(status="Cancelled")
    client.pause.return_value = WorkerStatusResponse(status="Paused")
    client.resume.return_value = processing
    client.retry.return_value = processing
    client.embedding.return_value = [0.1, 0.2, 0.3, 0.4, 0.5]
    return client


@pytest.fixture
def job_locks():
    """Provide a fresh per-job lock registry."""
    return KeyedLock()


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom instances."""
    return FixedRandom


@pytest.fixture
def job_id():
    """Generate a test job ID."""
    return uuid.uuid4()
