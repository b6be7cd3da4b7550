"""
Project membership checks.

``ProjectService`` is the authority other services consult to decide
whether a caller belongs to a project.  Membership is looked up in the
repository on every call and never cached, so a member removed from a
project loses access immediately.
"""

import logging
from typing import List, Optional

from ..core.errors import ForbiddenError, NotFoundError
from ..repositories.base import ProjectRepository
from ..schemas.project import ProjectRead

logger = logging.getLogger(__name__)


class ProjectService:
    """Resolve projects and their members for a given caller."""

    def __init__(self, repository: ProjectRepository) -> None:
        self.repository = repository

    async def create_project(self, name: str, caller_id: int, description: Optional[str] = None) -> ProjectRead:
        """Create a project owned by the caller, who also becomes its first member."""
        project = await self.repository.create(name=name, owner_id=caller_id, description=description)
        logger.info("User %s created project %s", caller_id, project.id)
        return project

    async def get_project_by_id(self, project_id: int, caller_id: int) -> ProjectRead:
        """Return the project if the caller owns it or belongs to its team.

        Raises ``NotFoundError`` if the project does not exist and
        ``ForbiddenError`` if the caller is not a member.
        """
        project = await self.repository.find_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        if not project.has_member(caller_id):
            logger.warning("User %s denied access to project %s", caller_id, project_id)
            raise ForbiddenError(f"User {caller_id} is not a member of project {project_id}")
        return project

    async def get_my_projects(self, caller_id: int) -> List[ProjectRead]:
        return await self.repository.find_by_user(caller_id)

    async def add_member(self, project_id: int, user_id: int, caller_id: int) -> ProjectRead:
        """Add ``user_id`` to the team.  Only the project owner may do this."""
        project = await self.repository.find_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        if project.owner_id != caller_id:
            logger.warning("User %s tried to add members to project %s", caller_id, project_id)
            raise ForbiddenError("Only the project owner can add members")
        updated = await self.repository.add_member(project_id, user_id)
        if updated is None:
            raise NotFoundError(f"Project {project_id} not found")
        logger.info("User %s added user %s to project %s", caller_id, user_id, project_id)
        return updated
