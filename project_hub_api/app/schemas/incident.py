"""
Pydantic models for incident reports.

An incident belongs to a project and optionally to a task.  The
classification vocabularies live here together with the defaults
applied when an incident is created without them.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class IncidentType(str, Enum):
    QUALITY = "quality"
    SAFETY = "safety"
    OPERATIONAL = "operational"
    OTHER = "other"


class IncidentPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class IncidentStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


DEFAULT_INCIDENT_TYPE = IncidentType.OTHER
DEFAULT_INCIDENT_PRIORITY = IncidentPriority.MEDIUM
DEFAULT_INCIDENT_STATUS = IncidentStatus.OPEN


class IncidentCreate(BaseModel):
    """Schema for reporting an incident."""

    project_id: int = Field(..., examples=[1])
    task_id: Optional[int] = None
    title: str = Field(..., min_length=1, examples=["Missing guard rail on level 3"])
    description: Optional[str] = None
    type: Optional[IncidentType] = None
    priority: Optional[IncidentPriority] = None
    evidence: Optional[List[str]] = Field(None, examples=[["https://files.example.com/rail.jpg"]])

    model_config = {"use_enum_values": True}


class IncidentUpdate(BaseModel):
    """Partial update of an incident.

    Any field may be set, including ``status`` and ``assigned_to``.
    Fields that are not provided keep their stored value.
    """

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    type: Optional[IncidentType] = None
    priority: Optional[IncidentPriority] = None
    status: Optional[IncidentStatus] = None
    assigned_to: Optional[int] = None
    evidence: Optional[List[str]] = None

    model_config = {"use_enum_values": True}


class IncidentRead(BaseModel):
    id: int
    project_id: int
    task_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    type: IncidentType
    priority: IncidentPriority
    status: IncidentStatus
    assigned_to: Optional[int] = None
    evidence: List[str] = Field(default_factory=list)
    created_by: int
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
        "use_enum_values": True,
    }
