"""
Crisis Event Repository

Data access layer for crisis event records.
"""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from haven.domain.clock import utc_now
from haven.infrastructure.database.models.crisis_event_model import CrisisEventModel
from haven.infrastructure.database.repositories.base import BaseRepository


class CrisisEventRepository(BaseRepository[CrisisEventModel]):
    """
    Repository for crisis event data access.

    Provides moderation queries beyond basic CRUD.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with crisis event model."""
        super().__init__(CrisisEventModel, session)

    async def list_events(
        self,
        *,
        user_id: Optional[str] = None,
        resolved: Optional[bool] = None,
        limit: int = 50,
    ) -> Sequence[CrisisEventModel]:
        """
        List crisis events, newest first.

        Args:
            user_id: Only events for this user
            resolved: Only resolved (True) or open (False) events
            limit: Maximum results

        Returns:
            List of events
        """
        query = select(CrisisEventModel)

        if user_id is not None:
            query = query.where(CrisisEventModel.user_id == user_id)
        if resolved is not None:
            query = query.where(CrisisEventModel.resolved.is_(resolved))

        result = await self._session.execute(
            query.order_by(CrisisEventModel.created_at.desc()).limit(limit)
        )
        return result.scalars().all()

    async def resolve(
        self,
        event_id: UUID,
        notes: str,
    ) -> Optional[CrisisEventModel]:
        """
        Mark an event resolved with moderator notes.

        Args:
            event_id: Event UUID
            notes: Resolution notes

        Returns:
            Updated event, or None if not found
        """
        event = await self.get_by_id(event_id)
        if event is None:
            return None

        event.resolved = True
        event.resolution_notes = notes
        event.resolved_at = utc_now()
        await self._session.flush()
        return event
