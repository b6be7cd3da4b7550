"""
Persistence layer.

``base`` declares the abstract contract for each entity kind and
``sqlite`` provides the store-backed implementations wired into the
application.
"""

from .base import EventRepository, IncidentRepository, MessageRepository, ProjectRepository
from .sqlite import (
    SQLiteEventRepository,
    SQLiteIncidentRepository,
    SQLiteMessageRepository,
    SQLiteProjectRepository,
)

__all__ = [
    "EventRepository",
    "IncidentRepository",
    "MessageRepository",
    "ProjectRepository",
    "SQLiteEventRepository",
    "SQLiteIncidentRepository",
    "SQLiteMessageRepository",
    "SQLiteProjectRepository",
]
