"""In-process infrastructure for tests and local development."""

from haven.infrastructure.memory.crisis_event_store import InMemoryCrisisEventStore

__all__ = ["InMemoryCrisisEventStore"]
