"""
Abstract persistence contracts consumed by the services.

Each entity kind has its own capability set.  Services only depend on
these classes, so a store-backed implementation (``sqlite.py``) and an
in-memory fake used in tests are interchangeable.

Create payloads are plain dictionaries already carrying every default
the service decided on; update payloads only contain the fields that
should change.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..schemas.event import EventRead
from ..schemas.incident import IncidentRead
from ..schemas.message import MessageRead
from ..schemas.project import ProjectRead


class EventRepository(ABC):
    @abstractmethod
    async def create(self, payload: Dict[str, Any]) -> EventRead: ...

    @abstractmethod
    async def find_by_id(self, event_id: int) -> Optional[EventRead]: ...

    @abstractmethod
    async def find_by_project(self, project_id: int) -> List[EventRead]:
        """Events of one project, ascending by date."""

    @abstractmethod
    async def find_by_projects(self, project_ids: List[int]) -> List[EventRead]:
        """Events across several projects, ascending by date."""

    @abstractmethod
    async def mark_events_as_realized_up_to(self, cutoff: datetime) -> int:
        """Move pending events dated at or before ``cutoff`` to realized.

        Returns the number of records changed.
        """

    @abstractmethod
    async def update(self, event_id: int, payload: Dict[str, Any]) -> Optional[EventRead]: ...

    @abstractmethod
    async def delete(self, event_id: int) -> bool: ...


class IncidentRepository(ABC):
    @abstractmethod
    async def create(self, payload: Dict[str, Any]) -> IncidentRead: ...

    @abstractmethod
    async def find_by_id(self, incident_id: int) -> Optional[IncidentRead]: ...

    @abstractmethod
    async def find_by_project(self, project_id: int) -> List[IncidentRead]:
        """Incidents of one project, newest first."""

    @abstractmethod
    async def find_by_projects(self, project_ids: List[int]) -> List[IncidentRead]:
        """Incidents across several projects, newest first."""

    @abstractmethod
    async def update(self, incident_id: int, payload: Dict[str, Any]) -> Optional[IncidentRead]: ...

    @abstractmethod
    async def delete(self, incident_id: int) -> bool: ...


class MessageRepository(ABC):
    @abstractmethod
    async def create(self, payload: Dict[str, Any]) -> MessageRead: ...

    @abstractmethod
    async def find_by_id(self, message_id: int) -> Optional[MessageRead]: ...

    @abstractmethod
    async def list_by_chat(self, chat_id: int, limit: int = 50, offset: int = 0) -> List[MessageRead]:
        """One page of a chat's messages, newest first."""

    @abstractmethod
    async def count_by_chat(self, chat_id: int) -> int: ...


class ProjectRepository(ABC):
    @abstractmethod
    async def create(self, name: str, owner_id: int, description: Optional[str] = None) -> ProjectRead: ...

    @abstractmethod
    async def find_by_id(self, project_id: int) -> Optional[ProjectRead]: ...

    @abstractmethod
    async def find_by_user(self, user_id: int) -> List[ProjectRead]:
        """Projects the user owns or is a member of."""

    @abstractmethod
    async def add_member(self, project_id: int, user_id: int) -> Optional[ProjectRead]: ...
