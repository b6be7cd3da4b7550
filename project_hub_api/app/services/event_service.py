"""
Business logic for project events.

An event is owned by the user who created it: only that user may
change or remove it.  The one transition that ignores caller identity
is the periodic sweep, which moves every pending event whose date has
passed to ``realized``.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ..core.db import utcnow
from ..core.errors import ForbiddenError, NotFoundError, PersistenceError
from ..repositories.base import EventRepository
from ..schemas.event import EventCreate, EventRead, EventStatus, EventUpdate
from .project_service import ProjectService

logger = logging.getLogger(__name__)


class EventService:
    """Service for managing events of a project."""

    def __init__(self, repository: EventRepository, projects: ProjectService) -> None:
        self.repository = repository
        self.projects = projects

    async def create_event(self, data: EventCreate, caller_id: int) -> EventRead:
        """Create an event owned by ``caller_id``.

        Project membership is not checked here; the caller's transport
        layer is expected to have established it.  The status defaults
        to ``pending``.
        """
        payload = {
            "project_id": data.project_id,
            "title": data.title,
            "description": data.description,
            "date": data.date,
            "status": data.status or EventStatus.PENDING.value,
            "created_by": caller_id,
        }
        event = await self.repository.create(payload)
        logger.info("User %s created event %s in project %s", caller_id, event.id, event.project_id)
        return event

    async def get_event_by_id(self, event_id: int) -> Optional[EventRead]:
        return await self.repository.find_by_id(event_id)

    async def get_events_by_project(self, project_id: int) -> List[EventRead]:
        return await self.repository.find_by_project(project_id)

    async def get_events_for_user(self, caller_id: int) -> List[EventRead]:
        """Events across every project the caller belongs to, ascending by date."""
        projects = await self.projects.get_my_projects(caller_id)
        project_ids = [p.id for p in projects]
        if not project_ids:
            return []
        return await self.repository.find_by_projects(project_ids)

    async def mark_due_events_as_realized(self, cutoff: Optional[datetime] = None) -> int:
        """Move pending events dated at or before ``cutoff`` (default: now) to realized.

        Returns how many events changed.  Running it again without new
        pending events in range returns 0.
        """
        cutoff = cutoff or utcnow()
        count = await self.repository.mark_events_as_realized_up_to(cutoff)
        if count:
            logger.info("Marked %s events as realized (cutoff %s)", count, cutoff.isoformat())
        else:
            logger.debug("No due events to realize (cutoff %s)", cutoff.isoformat())
        return count

    async def _get_owned(self, event_id: int, caller_id: int, action: str) -> EventRead:
        existing = await self.repository.find_by_id(event_id)
        if existing is None:
            raise NotFoundError(f"Event {event_id} not found")
        if existing.created_by != caller_id:
            logger.warning("User %s tried to %s event %s owned by %s", caller_id, action, event_id, existing.created_by)
            raise ForbiddenError(f"Only the creator can {action} this event")
        return existing

    async def update_event(self, event_id: int, data: EventUpdate, caller_id: int) -> EventRead:
        """Apply a partial update to an event created by ``caller_id``."""
        await self._get_owned(event_id, caller_id, "update")
        payload = data.model_dump(include={"title", "description", "date", "status"}, exclude_unset=True)
        updated = await self.repository.update(event_id, payload)
        if updated is None:
            raise PersistenceError(f"Event {event_id} could not be updated")
        logger.info("User %s updated event %s (%s)", caller_id, event_id, ", ".join(sorted(payload)) or "no changes")
        return updated

    async def delete_event(self, event_id: int, caller_id: int) -> bool:
        await self._get_owned(event_id, caller_id, "delete")
        deleted = await self.repository.delete(event_id)
        if deleted:
            logger.info("User %s deleted event %s", caller_id, event_id)
        return deleted
