"""
Pydantic models for projects as seen by the membership checks.

Only the fields the other services need are modelled: who owns the
project and who belongs to it.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Riverside tower"])
    description: Optional[str] = None


class ProjectMemberAdd(BaseModel):
    user_id: int


class ProjectRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    owner_id: int
    member_ids: List[int] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    def has_member(self, user_id: int) -> bool:
        """Owner or listed team member."""
        return user_id == self.owner_id or user_id in self.member_ids
