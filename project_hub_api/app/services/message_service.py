"""
Service layer for chat messages.

A thin read/write façade over the message repository.  Listing is
always scoped to one chat and ordered newest first.
"""

import logging
from typing import List

from ..core.config import settings
from ..repositories.base import MessageRepository
from ..schemas.message import MessageCreate, MessagePage, MessageRead

logger = logging.getLogger(__name__)


def _page_window(limit: int, offset: int) -> tuple[int, int]:
    """Non-positive limits fall back to the default page size; negative offsets start at 0."""
    if limit is None or limit <= 0:
        limit = settings.default_page_size
    return limit, max(offset or 0, 0)


class MessageService:
    """Service for posting and paging through chat history."""

    def __init__(self, repository: MessageRepository) -> None:
        self.repository = repository

    async def create_message(self, data: MessageCreate) -> MessageRead:
        message = await self.repository.create(data.model_dump())
        logger.debug("Message %s posted to chat %s by user %s", message.id, message.chat_id, message.sender_id)
        return message

    async def list_by_chat(self, chat_id: int, limit: int = 50, offset: int = 0) -> List[MessageRead]:
        limit, offset = _page_window(limit, offset)
        return await self.repository.list_by_chat(chat_id, limit=limit, offset=offset)

    async def list_by_chat_with_total(self, chat_id: int, limit: int = 50, offset: int = 0) -> MessagePage:
        """Return one page of messages together with the chat's message count.

        The page and the count are two separate reads.  A message
        written between them makes ``total`` disagree with the page by
        that message; callers should treat ``total`` as approximate
        under concurrent writes.
        """
        limit, offset = _page_window(limit, offset)
        items = await self.repository.list_by_chat(chat_id, limit=limit, offset=offset)
        total = await self.repository.count_by_chat(chat_id)
        return MessagePage(items=items, total=total)
