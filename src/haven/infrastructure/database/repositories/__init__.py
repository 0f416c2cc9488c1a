"""
Repository pattern implementations package.
"""

from haven.infrastructure.database.repositories.base import BaseRepository
from haven.infrastructure.database.repositories.crisis_event_repository import (
    CrisisEventRepository,
)

__all__ = [
    "BaseRepository",
    "CrisisEventRepository",
]
