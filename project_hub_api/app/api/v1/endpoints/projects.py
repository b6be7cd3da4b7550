"""
Project endpoints for API v1.

Projects define who may see and report incidents.  The authenticated
caller becomes the owner of any project they create; only the owner
can add team members.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from project_hub_api.app.core.security import get_caller_id
from project_hub_api.app.dependencies import get_project_service
from project_hub_api.app.schemas.project import ProjectCreate, ProjectMemberAdd, ProjectRead
from project_hub_api.app.services.project_service import ProjectService

router = APIRouter()


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    caller_id: int = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    return await service.create_project(body.name, caller_id, description=body.description)


@router.get("/", response_model=List[ProjectRead])
async def list_my_projects(
    caller_id: int = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service),
) -> List[ProjectRead]:
    """Projects the caller owns or belongs to."""
    return await service.get_my_projects(caller_id)


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: int,
    caller_id: int = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    return await service.get_project_by_id(project_id, caller_id)


@router.post("/{project_id}/members", response_model=ProjectRead)
async def add_project_member(
    project_id: int,
    body: ProjectMemberAdd,
    caller_id: int = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service),
) -> ProjectRead:
    """Add a user to the project team (owner only)."""
    return await service.add_member(project_id, body.user_id, caller_id)
