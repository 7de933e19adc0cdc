"""
Generic record access for SQLAlchemy models.

Every method flushes but never commits; the caller owns the transaction
boundary.

Dependencies: sqlalchemy
System role: Foundation for model-specific CRUD classes
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docman.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """Create/read/write helpers bound to one model class."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **fields: Any) -> ModelT:
        """
        Insert a row and return it with server-side defaults loaded.

        Args:
            session: Async database session
            **fields: Column values; id may be supplied by the caller

        Returns:
            ModelT: The flushed instance
        """
        instance = self.model(**fields)
        return await self.put(session, instance)

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Look a row up by primary key, serving from the identity map when possible."""
        return await session.get(self.model, id)

    async def put(self, session: AsyncSession, instance: ModelT) -> ModelT:
        """Flush a new or modified instance and reload its columns."""
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance
