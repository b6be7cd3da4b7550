"""
Pydantic models for chat messages.

Messages are always listed per chat, newest first.  ``MessagePage``
bundles one page of messages with the total number of messages in
the chat; the two values are read separately and are not guaranteed
to describe the same instant.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Attachment(BaseModel):
    url: str = Field(..., min_length=1, examples=["https://files.example.com/plan.pdf"])
    media_type: Optional[str] = Field(None, examples=["application/pdf"])
    filename: Optional[str] = None
    size: Optional[int] = Field(None, ge=0)


class MessageCreate(BaseModel):
    """Schema for posting a message to a chat."""

    chat_id: int
    sender_id: int
    recipient_id: Optional[int] = None
    text: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)
    type: str = "text"


class MessageBody(BaseModel):
    """Message content sent over HTTP; chat and sender come from the request."""

    recipient_id: Optional[int] = None
    text: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)
    type: str = "text"


class MessageRead(BaseModel):
    id: int
    chat_id: int
    sender_id: int
    recipient_id: Optional[int] = None
    text: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)
    type: str = "text"
    status: str = "sent"
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MessagePage(BaseModel):
    items: List[MessageRead]
    total: int
