"""
Pydantic models for event data.

``EventCreate`` is the input for creating an event, ``EventUpdate``
carries a partial patch (every field optional, absent fields are left
untouched) and ``EventRead`` is the stored record returned to callers.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class EventStatus(str, Enum):
    PENDING = "pending"
    REALIZED = "realized"
    CANCELLED = "cancelled"


class EventCreate(BaseModel):
    """Schema for creating an event."""

    project_id: int = Field(..., examples=[1])
    title: str = Field(..., min_length=1, examples=["Concrete pour inspection"])
    description: Optional[str] = Field(None, examples=["Site walk with the supervisor"])
    date: datetime = Field(..., examples=["2025-09-01T10:00:00Z"])
    status: Optional[EventStatus] = None

    model_config = {"use_enum_values": True}


class EventUpdate(BaseModel):
    """Schema for updating an event.

    All fields are optional; only provided fields will be updated.
    """

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    date: Optional[datetime] = None
    status: Optional[EventStatus] = None

    model_config = {"use_enum_values": True}


class EventRead(BaseModel):
    """Schema for an event returned by the service layer."""

    id: int
    project_id: int
    title: str
    description: Optional[str] = None
    date: datetime
    status: EventStatus
    created_by: int
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
        "use_enum_values": True,
    }
