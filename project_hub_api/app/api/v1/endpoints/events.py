"""
Event endpoints for API v1.

Any authenticated caller may create events; the creator is the only
one allowed to modify or delete them afterwards.  ``POST
/realize-due`` triggers the same sweep the background scheduler runs.
"""

from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from project_hub_api.app.core.security import get_caller_id
from project_hub_api.app.dependencies import get_event_service
from project_hub_api.app.schemas.event import EventCreate, EventRead, EventUpdate
from project_hub_api.app.services.event_service import EventService

router = APIRouter()


@router.post("/", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    caller_id: int = Depends(get_caller_id),
    service: EventService = Depends(get_event_service),
) -> EventRead:
    return await service.create_event(event, caller_id)


@router.get("/mine", response_model=List[EventRead])
async def list_my_events(
    caller_id: int = Depends(get_caller_id),
    service: EventService = Depends(get_event_service),
) -> List[EventRead]:
    """Events of every project the caller belongs to, ascending by date."""
    return await service.get_events_for_user(caller_id)


@router.get("/project/{project_id}", response_model=List[EventRead])
async def list_project_events(
    project_id: int,
    caller_id: int = Depends(get_caller_id),
    service: EventService = Depends(get_event_service),
) -> List[EventRead]:
    return await service.get_events_by_project(project_id)


@router.post("/realize-due", response_model=Dict[str, int])
async def realize_due_events(
    cutoff: Optional[datetime] = Query(None),
    caller_id: int = Depends(get_caller_id),
    service: EventService = Depends(get_event_service),
) -> Dict[str, int]:
    """Mark pending events dated at or before ``cutoff`` (default: now) as realized."""
    return {"updated": await service.mark_due_events_as_realized(cutoff)}


@router.get("/{event_id}", response_model=EventRead)
async def get_event(
    event_id: int,
    caller_id: int = Depends(get_caller_id),
    service: EventService = Depends(get_event_service),
) -> EventRead:
    event = await service.get_event_by_id(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Event {event_id} not found")
    return event


@router.patch("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: int,
    updates: EventUpdate,
    caller_id: int = Depends(get_caller_id),
    service: EventService = Depends(get_event_service),
) -> EventRead:
    """Partially update an event.  Only its creator may do this."""
    return await service.update_event(event_id, updates, caller_id)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: int,
    caller_id: int = Depends(get_caller_id),
    service: EventService = Depends(get_event_service),
) -> None:
    if not await service.delete_event(event_id, caller_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Event {event_id} not found")
    return None
