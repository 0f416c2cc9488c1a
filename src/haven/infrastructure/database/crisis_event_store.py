"""
SQL Crisis Event Store

CrisisEventStore implementation on the async SQLAlchemy layer.

Database errors are wrapped in CrisisStoreError; the escalation
manager absorbs them so they never reach the user-facing path.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from haven.config.logging_config import get_logger
from haven.domain.exceptions import CrisisEventNotFoundError, CrisisStoreError
from haven.domain.models.crisis_event import CrisisEvent
from haven.infrastructure.database.connection import DatabaseManager
from haven.infrastructure.database.models.crisis_event_model import CrisisEventModel
from haven.infrastructure.database.repositories.crisis_event_repository import (
    CrisisEventRepository,
)

logger = get_logger(__name__)


def _parse_id(event_id: str) -> Optional[UUID]:
    try:
        return UUID(str(event_id))
    except ValueError:
        return None


class SqlCrisisEventStore:
    """
    Crisis event store backed by PostgreSQL (or any async SQLAlchemy backend).

    The engine is initialized on first use.

    Usage:
        store = SqlCrisisEventStore(DatabaseManager(settings.database))
        stored = await store.create(event)
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def create(self, event: CrisisEvent) -> CrisisEvent:
        """Insert a new event; returns it with id and created_at set."""
        try:
            await self._db.initialize()
            async with self._db.session() as session:
                model = await CrisisEventRepository(session).create(
                    CrisisEventModel.from_domain(event)
                )
                return model.to_domain()
        except SQLAlchemyError as e:
            raise CrisisStoreError("create", original_error=e) from e

    async def get(self, event_id: str) -> Optional[CrisisEvent]:
        uuid = _parse_id(event_id)
        if uuid is None:
            return None
        try:
            await self._db.initialize()
            async with self._db.session() as session:
                model = await CrisisEventRepository(session).get_by_id(uuid)
                return model.to_domain() if model else None
        except SQLAlchemyError as e:
            raise CrisisStoreError("get", original_error=e) from e

    async def update(self, event: CrisisEvent) -> CrisisEvent:
        """
        Persist changes to an existing event.

        Raises:
            CrisisEventNotFoundError: If the event does not exist
        """
        uuid = _parse_id(event.id) if event.id else None
        if uuid is None:
            raise CrisisEventNotFoundError(str(event.id))
        try:
            await self._db.initialize()
            async with self._db.session() as session:
                repo = CrisisEventRepository(session)
                model = await repo.get_by_id(uuid)
                if model is None:
                    raise CrisisEventNotFoundError(event.id)
                model.apply(event)
                model = await repo.update(model)
                return model.to_domain()
        except SQLAlchemyError as e:
            raise CrisisStoreError("update", original_error=e) from e

    async def list_events(
        self,
        user_id: Optional[str] = None,
        resolved: Optional[bool] = None,
        limit: int = 50,
    ) -> list[CrisisEvent]:
        """List events, newest first."""
        try:
            await self._db.initialize()
            async with self._db.session() as session:
                models = await CrisisEventRepository(session).list_events(
                    user_id=user_id,
                    resolved=resolved,
                    limit=limit,
                )
                return [m.to_domain() for m in models]
        except SQLAlchemyError as e:
            raise CrisisStoreError("list_events", original_error=e) from e

    async def resolve(self, event_id: str, notes: str) -> CrisisEvent:
        """
        Mark an event resolved.

        Raises:
            CrisisEventNotFoundError: If the event does not exist
        """
        uuid = _parse_id(event_id)
        if uuid is None:
            raise CrisisEventNotFoundError(event_id)
        try:
            await self._db.initialize()
            async with self._db.session() as session:
                model = await CrisisEventRepository(session).resolve(uuid, notes)
                if model is None:
                    raise CrisisEventNotFoundError(event_id)
                resolved = model.to_domain()
        except SQLAlchemyError as e:
            raise CrisisStoreError("resolve", original_error=e) from e

        logger.info("Crisis event resolved", event_id=event_id)
        return resolved
