"""
Database ORM models package.
"""

from haven.infrastructure.database.models.crisis_event_model import CrisisEventModel

__all__ = [
    "CrisisEventModel",
]
