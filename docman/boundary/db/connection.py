"""
Record store connection lifecycle.

One async engine and one session factory per process, built lazily from
DatabaseSettings. Each API request gets its own AsyncSession.

Dependencies: sqlalchemy, asyncpg (or aiosqlite), docman.configs
System role: Record store connection management
"""

from functools import lru_cache
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

from docman.configs import get_settings
from docman.configs.database import DatabaseSettings


def _engine_options(db_config: DatabaseSettings) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": db_config.echo_sql}
    # SQLite drivers reject QueuePool sizing arguments.
    if not db_config.async_database_url.startswith("sqlite"):
        options.update(
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_pre_ping=True,
        )
    return options


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Return the process-wide async engine.

    Returns:
        AsyncEngine: Engine for POSTGRES_URL, or the URL assembled from POSTGRES_*
    """
    db_config = get_settings().database
    return create_async_engine(db_config.async_database_url, **_engine_options(db_config))


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Return the session factory bound to the process-wide engine.

    expire_on_commit is off: the orchestrator commits mid-operation and
    still reads the job afterwards.
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    async with get_async_session_factory()() as session:
        yield session


async def create_tables() -> None:
    """Create the ingestion_jobs table if it does not exist."""
    from docman.boundary.db.base import Base
    import docman.boundary.db.models  # noqa: F401

    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
