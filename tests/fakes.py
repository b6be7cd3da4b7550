"""
In-memory repositories used by the service tests.

They implement the same contracts as the SQLite repositories,
including ordering and the "no document" results, so services can be
tested without a database.
"""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from project_hub_api.app.repositories.base import (
    EventRepository,
    IncidentRepository,
    MessageRepository,
    ProjectRepository,
)
from project_hub_api.app.schemas.event import EventRead
from project_hub_api.app.schemas.incident import IncidentRead
from project_hub_api.app.schemas.message import MessageRead
from project_hub_api.app.schemas.project import ProjectRead

_EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)


class _Clock:
    """Strictly increasing timestamps so newest-first ordering is deterministic."""

    def __init__(self) -> None:
        self._ticks = itertools.count(1)

    def now(self) -> datetime:
        return _EPOCH + timedelta(seconds=next(self._ticks))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class InMemoryProjectRepository(ProjectRepository):
    def __init__(self) -> None:
        self.projects: Dict[int, ProjectRead] = {}
        self.lookups = 0
        self._ids = itertools.count(1)
        self._clock = _Clock()

    async def create(self, name: str, owner_id: int, description: Optional[str] = None) -> ProjectRead:
        now = self._clock.now()
        project = ProjectRead(
            id=next(self._ids),
            name=name,
            description=description,
            owner_id=owner_id,
            member_ids=[owner_id],
            created_at=now,
            updated_at=now,
        )
        self.projects[project.id] = project
        return project

    async def find_by_id(self, project_id: int) -> Optional[ProjectRead]:
        self.lookups += 1
        return self.projects.get(project_id)

    async def find_by_user(self, user_id: int) -> List[ProjectRead]:
        return [p for p in self.projects.values() if p.has_member(user_id)]

    async def add_member(self, project_id: int, user_id: int) -> Optional[ProjectRead]:
        project = self.projects.get(project_id)
        if project is None:
            return None
        if user_id not in project.member_ids:
            project = project.model_copy(update={"member_ids": sorted(project.member_ids + [user_id])})
            self.projects[project_id] = project
        return project

    def remove_member(self, project_id: int, user_id: int) -> None:
        project = self.projects[project_id]
        self.projects[project_id] = project.model_copy(
            update={"member_ids": [m for m in project.member_ids if m != user_id]}
        )


class InMemoryEventRepository(EventRepository):
    def __init__(self) -> None:
        self.events: Dict[int, EventRead] = {}
        self.fail_updates = False
        self._ids = itertools.count(1)
        self._clock = _Clock()

    async def create(self, payload: Dict[str, Any]) -> EventRead:
        now = self._clock.now()
        event = EventRead(id=next(self._ids), created_at=now, updated_at=now, **payload)
        self.events[event.id] = event
        return event

    async def find_by_id(self, event_id: int) -> Optional[EventRead]:
        return self.events.get(event_id)

    async def find_by_project(self, project_id: int) -> List[EventRead]:
        return await self.find_by_projects([project_id])

    async def find_by_projects(self, project_ids: List[int]) -> List[EventRead]:
        found = [e for e in self.events.values() if e.project_id in project_ids]
        return sorted(found, key=lambda e: (_as_utc(e.date), e.id))

    async def mark_events_as_realized_up_to(self, cutoff: datetime) -> int:
        count = 0
        for event in list(self.events.values()):
            if event.status == "pending" and _as_utc(event.date) <= _as_utc(cutoff):
                self.events[event.id] = event.model_copy(
                    update={"status": "realized", "updated_at": self._clock.now()}
                )
                count += 1
        return count

    async def update(self, event_id: int, payload: Dict[str, Any]) -> Optional[EventRead]:
        if self.fail_updates or event_id not in self.events:
            return None
        event = self.events[event_id].model_copy(update={**payload, "updated_at": self._clock.now()})
        self.events[event_id] = event
        return event

    async def delete(self, event_id: int) -> bool:
        return self.events.pop(event_id, None) is not None


class InMemoryIncidentRepository(IncidentRepository):
    def __init__(self) -> None:
        self.incidents: Dict[int, IncidentRead] = {}
        self.fail_updates = False
        self._ids = itertools.count(1)
        self._clock = _Clock()

    async def create(self, payload: Dict[str, Any]) -> IncidentRead:
        now = self._clock.now()
        incident = IncidentRead(id=next(self._ids), created_at=now, updated_at=now, **payload)
        self.incidents[incident.id] = incident
        return incident

    async def find_by_id(self, incident_id: int) -> Optional[IncidentRead]:
        return self.incidents.get(incident_id)

    async def find_by_project(self, project_id: int) -> List[IncidentRead]:
        return await self.find_by_projects([project_id])

    async def find_by_projects(self, project_ids: List[int]) -> List[IncidentRead]:
        found = [i for i in self.incidents.values() if i.project_id in project_ids]
        return sorted(found, key=lambda i: (i.created_at, i.id), reverse=True)

    async def update(self, incident_id: int, payload: Dict[str, Any]) -> Optional[IncidentRead]:
        if self.fail_updates or incident_id not in self.incidents:
            return None
        incident = self.incidents[incident_id].model_copy(update={**payload, "updated_at": self._clock.now()})
        self.incidents[incident_id] = incident
        return incident

    async def delete(self, incident_id: int) -> bool:
        return self.incidents.pop(incident_id, None) is not None


class InMemoryMessageRepository(MessageRepository):
    def __init__(self) -> None:
        self.messages: Dict[int, MessageRead] = {}
        self._ids = itertools.count(1)
        self._clock = _Clock()

    async def create(self, payload: Dict[str, Any]) -> MessageRead:
        now = self._clock.now()
        message = MessageRead(id=next(self._ids), created_at=now, updated_at=now, **payload)
        self.messages[message.id] = message
        return message

    async def find_by_id(self, message_id: int) -> Optional[MessageRead]:
        return self.messages.get(message_id)

    async def list_by_chat(self, chat_id: int, limit: int = 50, offset: int = 0) -> List[MessageRead]:
        found = [m for m in self.messages.values() if m.chat_id == chat_id]
        found.sort(key=lambda m: (m.created_at, m.id), reverse=True)
        return found[offset:offset + limit]

    async def count_by_chat(self, chat_id: int) -> int:
        return sum(1 for m in self.messages.values() if m.chat_id == chat_id)
