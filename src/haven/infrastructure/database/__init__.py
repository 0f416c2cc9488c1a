"""
Database infrastructure components.
"""

from haven.infrastructure.database.connection import Base, DatabaseManager
from haven.infrastructure.database.crisis_event_store import SqlCrisisEventStore

__all__ = [
    "Base",
    "DatabaseManager",
    "SqlCrisisEventStore",
]
