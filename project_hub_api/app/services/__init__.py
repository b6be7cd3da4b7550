"""
Service layer.

Each service encapsulates the business rules for one domain and talks
to the store only through the repository contracts it was constructed
with.  Caller identity is always passed in explicitly.
"""

from .event_service import EventService
from .incident_service import IncidentService
from .message_service import MessageService
from .project_service import ProjectService

__all__ = ["EventService", "IncidentService", "MessageService", "ProjectService"]
