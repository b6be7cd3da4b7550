"""
Chat message endpoints for API v1.

Messages are posted as the authenticated caller and listed newest
first.  ``with_total=true`` returns a page object that also carries
the number of messages in the chat.
"""

from typing import List, Union

from fastapi import APIRouter, Depends, Query, status

from project_hub_api.app.core.config import settings
from project_hub_api.app.core.security import get_caller_id
from project_hub_api.app.dependencies import get_message_service
from project_hub_api.app.schemas.message import MessageBody, MessageCreate, MessagePage, MessageRead
from project_hub_api.app.services.message_service import MessageService

router = APIRouter()


@router.post("/chats/{chat_id}/messages", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def post_message(
    chat_id: int,
    body: MessageBody,
    caller_id: int = Depends(get_caller_id),
    service: MessageService = Depends(get_message_service),
) -> MessageRead:
    data = MessageCreate(chat_id=chat_id, sender_id=caller_id, **body.model_dump())
    return await service.create_message(data)


@router.get("/chats/{chat_id}/messages", response_model=Union[MessagePage, List[MessageRead]])
async def list_messages(
    chat_id: int,
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
    with_total: bool = Query(False),
    caller_id: int = Depends(get_caller_id),
    service: MessageService = Depends(get_message_service),
) -> Union[MessagePage, List[MessageRead]]:
    if with_total:
        return await service.list_by_chat_with_total(chat_id, limit=limit, offset=offset)
    return await service.list_by_chat(chat_id, limit=limit, offset=offset)
