# roomchat/services/message_log.py
from __future__ import annotations

import logging
from typing import List, Optional

from roomchat.core.clock import Clock, now_ms
from roomchat.core.errors import ValidationError, require
from roomchat.models.models import ChatMessage
from roomchat.services.kv_store import RedisKeyValueStore, room_messages_key

logger = logging.getLogger(__name__)

RETENTION_CAP = 100

# Body sent for messages that carry an image and no text
IMAGE_PLACEHOLDER = "📷 Image"


class MessageLog:
    """
    Per-room chat history, oldest first, bounded to RETENTION_CAP entries.

    Messages are never edited. The only way one leaves the log is being
    pushed out of the front when the cap is exceeded.
    """

    def __init__(self, store: RedisKeyValueStore, clock: Clock = now_ms) -> None:
        self.store = store
        self.clock = clock

    async def append(
        self,
        room_id: str,
        user_id: str,
        username: str,
        message: Optional[str],
        image_url: Optional[str] = None,
    ) -> ChatMessage:
        """
        Append a message and trim the log to the retention cap.

        Returns the stored message, including its generated id and timestamp,
        so callers can render it without reading the log back.

        Note:
            Ids are "{timestamp}-{user_id}" and only unique while a sender
            appends at most once per millisecond.
        """
        require(room_id=room_id, user_id=user_id, username=username)
        if not message and not image_url:
            raise ValidationError("Missing required fields: message or imageUrl")

        key = room_messages_key(room_id)
        messages = await self.store.get_models(key, ChatMessage)

        timestamp = self.clock()
        new_message = ChatMessage(
            id=f"{timestamp}-{user_id}",
            user_id=user_id,
            username=username,
            message=message or "",
            image_url=image_url or None,
            timestamp=timestamp,
        )
        messages.append(new_message)

        # Keep only the newest RETENTION_CAP messages
        if len(messages) > RETENTION_CAP:
            del messages[: len(messages) - RETENTION_CAP]

        await self.store.set_models(key, messages)
        logger.info("📨 %s posted to '%s' (%d in log)", user_id, room_id, len(messages))
        return new_message

    async def list(self, room_id: str) -> List[ChatMessage]:
        require(room_id=room_id)
        return await self.store.get_models(room_messages_key(room_id), ChatMessage)
