"""
Service wiring for the HTTP layer.

Each ``get_*_service`` function is a FastAPI dependency returning a
process-wide service instance built on the SQLite repositories.  Tests
replace them through ``app.dependency_overrides``.
"""

from functools import lru_cache

from .repositories.sqlite import (
    SQLiteEventRepository,
    SQLiteIncidentRepository,
    SQLiteMessageRepository,
    SQLiteProjectRepository,
)
from .services.event_service import EventService
from .services.incident_service import IncidentService
from .services.message_service import MessageService
from .services.project_service import ProjectService


@lru_cache
def get_project_service() -> ProjectService:
    return ProjectService(SQLiteProjectRepository())


@lru_cache
def get_event_service() -> EventService:
    return EventService(SQLiteEventRepository(), get_project_service())


@lru_cache
def get_incident_service() -> IncidentService:
    return IncidentService(SQLiteIncidentRepository(), get_project_service())


@lru_cache
def get_message_service() -> MessageService:
    return MessageService(SQLiteMessageRepository())
