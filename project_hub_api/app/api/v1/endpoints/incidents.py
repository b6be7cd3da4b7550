"""
Incident endpoints for API v1.

Every route requires the caller to be a member of the incident's
project.  Deletion is further limited to the incident's reporter.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from project_hub_api.app.core.security import get_caller_id
from project_hub_api.app.dependencies import get_incident_service
from project_hub_api.app.schemas.incident import IncidentCreate, IncidentRead, IncidentUpdate
from project_hub_api.app.services.incident_service import IncidentService

router = APIRouter()


@router.post("/", response_model=IncidentRead, status_code=status.HTTP_201_CREATED)
async def create_incident(
    incident: IncidentCreate,
    caller_id: int = Depends(get_caller_id),
    service: IncidentService = Depends(get_incident_service),
) -> IncidentRead:
    return await service.create_incident(incident, caller_id)


@router.get("/mine", response_model=List[IncidentRead])
async def list_my_incidents(
    caller_id: int = Depends(get_caller_id),
    service: IncidentService = Depends(get_incident_service),
) -> List[IncidentRead]:
    return await service.get_incidents_for_user(caller_id)


@router.get("/project/{project_id}", response_model=List[IncidentRead])
async def list_project_incidents(
    project_id: int,
    caller_id: int = Depends(get_caller_id),
    service: IncidentService = Depends(get_incident_service),
) -> List[IncidentRead]:
    """Incidents of one project, newest first."""
    return await service.get_incidents_by_project(project_id, caller_id)


@router.get("/{incident_id}", response_model=IncidentRead)
async def get_incident(
    incident_id: int,
    caller_id: int = Depends(get_caller_id),
    service: IncidentService = Depends(get_incident_service),
) -> IncidentRead:
    return await service.get_incident_by_id(incident_id, caller_id)


@router.patch("/{incident_id}", response_model=IncidentRead)
async def update_incident(
    incident_id: int,
    updates: IncidentUpdate,
    caller_id: int = Depends(get_caller_id),
    service: IncidentService = Depends(get_incident_service),
) -> IncidentRead:
    return await service.update_incident(incident_id, updates, caller_id)


@router.delete("/{incident_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_incident(
    incident_id: int,
    caller_id: int = Depends(get_caller_id),
    service: IncidentService = Depends(get_incident_service),
) -> None:
    if not await service.delete_incident(incident_id, caller_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Incident {incident_id} not found")
    return None
