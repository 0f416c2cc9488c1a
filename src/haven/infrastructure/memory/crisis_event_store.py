"""
In-Memory Crisis Event Store

Process-local CrisisEventStore for tests and local development.
Not durable; events are lost on restart.
"""

import dataclasses
from typing import Optional
from uuid import uuid4

from haven.domain.clock import utc_now
from haven.domain.exceptions import CrisisEventNotFoundError
from haven.domain.models.crisis_event import CrisisEvent


def _copy(event: CrisisEvent, **changes) -> CrisisEvent:
    """Copy an event, including its list fields."""
    changes.setdefault("trigger_keywords", list(event.trigger_keywords))
    changes.setdefault("resources_provided", list(event.resources_provided))
    return dataclasses.replace(event, **changes)


class InMemoryCrisisEventStore:
    """
    Dict-backed crisis event store.

    Stored events are copies; callers never hold a reference to
    the stored record.
    """

    def __init__(self) -> None:
        self._events: dict[str, CrisisEvent] = {}

    async def create(self, event: CrisisEvent) -> CrisisEvent:
        stored = _copy(event, id=str(uuid4()), created_at=utc_now())
        self._events[stored.id] = stored
        return _copy(stored)

    async def get(self, event_id: str) -> Optional[CrisisEvent]:
        event = self._events.get(event_id)
        return _copy(event) if event else None

    async def update(self, event: CrisisEvent) -> CrisisEvent:
        if event.id not in self._events:
            raise CrisisEventNotFoundError(str(event.id))
        self._events[event.id] = _copy(event)
        return _copy(event)

    async def list_events(
        self,
        user_id: Optional[str] = None,
        resolved: Optional[bool] = None,
        limit: int = 50,
    ) -> list[CrisisEvent]:
        """List events, newest first."""
        events = [
            e for e in reversed(self._events.values())
            if (user_id is None or e.user_id == user_id)
            and (resolved is None or e.resolved == resolved)
        ]
        return [_copy(e) for e in events[:limit]]

    async def resolve(self, event_id: str, notes: str) -> CrisisEvent:
        event = self._events.get(event_id)
        if event is None:
            raise CrisisEventNotFoundError(event_id)
        self._events[event_id] = _copy(
            event,
            resolved=True,
            resolution_notes=notes,
            resolved_at=utc_now(),
        )
        return _copy(self._events[event_id])

    def __len__(self) -> int:
        return len(self._events)
