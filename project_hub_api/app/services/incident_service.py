"""
Business logic for incident reports.

Every operation on an incident requires the caller to be a member of
the incident's project at the time of the call; membership is asked
of ``ProjectService`` each time.  Any member may update an incident,
but only the member who reported it may delete it.
"""

import logging
from typing import List

from ..core.errors import ForbiddenError, NotFoundError, PersistenceError
from ..repositories.base import IncidentRepository
from ..schemas.incident import (
    DEFAULT_INCIDENT_PRIORITY,
    DEFAULT_INCIDENT_STATUS,
    DEFAULT_INCIDENT_TYPE,
    IncidentCreate,
    IncidentRead,
    IncidentUpdate,
)
from .project_service import ProjectService

logger = logging.getLogger(__name__)


class IncidentService:
    """Service for reporting and tracking incidents within projects."""

    def __init__(self, repository: IncidentRepository, projects: ProjectService) -> None:
        self.repository = repository
        self.projects = projects

    async def _get_existing(self, incident_id: int) -> IncidentRead:
        existing = await self.repository.find_by_id(incident_id)
        if existing is None:
            raise NotFoundError(f"Incident {incident_id} not found")
        return existing

    async def create_incident(self, data: IncidentCreate, caller_id: int) -> IncidentRead:
        """Report an incident in a project the caller belongs to.

        Errors from the membership check are propagated unchanged.
        ``type`` defaults to ``other``, ``priority`` to ``medium`` and
        ``evidence`` to an empty list.
        """
        await self.projects.get_project_by_id(data.project_id, caller_id)
        payload = {
            "project_id": data.project_id,
            "task_id": data.task_id,
            "title": data.title,
            "description": data.description,
            "type": data.type or DEFAULT_INCIDENT_TYPE.value,
            "priority": data.priority or DEFAULT_INCIDENT_PRIORITY.value,
            "status": DEFAULT_INCIDENT_STATUS.value,
            "evidence": list(data.evidence or []),
            "created_by": caller_id,
        }
        incident = await self.repository.create(payload)
        logger.info("User %s reported incident %s in project %s", caller_id, incident.id, incident.project_id)
        return incident

    async def get_incident_by_id(self, incident_id: int, caller_id: int) -> IncidentRead:
        incident = await self._get_existing(incident_id)
        await self.projects.get_project_by_id(incident.project_id, caller_id)
        return incident

    async def get_incidents_by_project(self, project_id: int, caller_id: int) -> List[IncidentRead]:
        await self.projects.get_project_by_id(project_id, caller_id)
        return await self.repository.find_by_project(project_id)

    async def get_incidents_for_user(self, caller_id: int) -> List[IncidentRead]:
        projects = await self.projects.get_my_projects(caller_id)
        return await self.repository.find_by_projects([p.id for p in projects])

    async def update_incident(self, incident_id: int, data: IncidentUpdate, caller_id: int) -> IncidentRead:
        """Apply a partial update on behalf of any member of the incident's project.

        Every field of ``IncidentUpdate`` that was provided is written,
        including ``status`` and ``assigned_to``.
        """
        existing = await self._get_existing(incident_id)
        await self.projects.get_project_by_id(existing.project_id, caller_id)
        payload = data.model_dump(exclude_unset=True)
        updated = await self.repository.update(incident_id, payload)
        if updated is None:
            raise PersistenceError(f"Incident {incident_id} could not be updated")
        logger.info("User %s updated incident %s (%s)", caller_id, incident_id, ", ".join(sorted(payload)) or "no changes")
        return updated

    async def delete_incident(self, incident_id: int, caller_id: int) -> bool:
        """Delete an incident.  Only its reporter may do this, membership alone is not enough."""
        existing = await self._get_existing(incident_id)
        if existing.created_by != caller_id:
            logger.warning("User %s tried to delete incident %s reported by %s", caller_id, incident_id, existing.created_by)
            raise ForbiddenError("Only the reporter can delete this incident")
        deleted = await self.repository.delete(incident_id)
        if deleted:
            logger.info("User %s deleted incident %s", caller_id, incident_id)
        return deleted
