"""
Base Repository Pattern

Provides generic async CRUD operations for all repositories.
Implements the Repository pattern for clean separation between
domain logic and data access.
"""

from typing import Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from haven.infrastructure.database.connection import Base

# Type variable for model types
ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Generic base repository with async CRUD operations.

    No delete: crisis records are never deleted by the engine.

    Usage:
        class CrisisEventRepository(BaseRepository[CrisisEventModel]):
            pass

        repo = CrisisEventRepository(session)
        event = await repo.get_by_id(event_id)
    """

    def __init__(self, model: Type[ModelT], session: AsyncSession) -> None:
        """
        Initialize repository with model class and session.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self._model = model
        self._session = session

    async def get_by_id(self, id: UUID) -> Optional[ModelT]:
        """
        Get entity by primary key ID.

        Args:
            id: Entity UUID

        Returns:
            Entity if found, None otherwise
        """
        result = await self._session.execute(
            select(self._model).where(self._model.id == id)
        )
        return result.scalar_one_or_none()

    async def create(self, entity: ModelT) -> ModelT:
        """
        Create a new entity.

        Args:
            entity: Entity instance to create

        Returns:
            Created entity with ID
        """
        self._session.add(entity)
        await self._session.flush()
        await self._session.refresh(entity)
        return entity

    async def update(self, entity: ModelT) -> ModelT:
        """
        Flush changes to an existing entity.

        Args:
            entity: Entity instance with updates

        Returns:
            Updated entity
        """
        entity = await self._session.merge(entity)
        await self._session.flush()
        return entity
