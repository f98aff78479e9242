# roomchat/api/routes/messages.py

from fastapi import APIRouter

from roomchat.core import state
from roomchat.core.errors import DecodeError, StoreUnavailable
from roomchat.models.models import SendMessageRequest
from roomchat.services.message_log import IMAGE_PLACEHOLDER
from roomchat.api.routes.utils import dump, dump_all, storage_failure

# ============================================================================
# MESSAGE ENDPOINTS
# ============================================================================

router = APIRouter(tags=["Messages"])


@router.post("/send-message")
async def send_message(request: SendMessageRequest):
    """
    Post a message to a room.

    Flow:
        1. Strip the text; image-only messages get the placeholder body
        2. Append to the room's log (oldest entries beyond 100 are dropped)
        3. Return the stored message so the client can render it at once

    Returns:
        dict: {"success": True, "message": ChatMessage}

    Raises:
        HTTPException: 400 on missing fields, 503 if the store is unavailable
    """
    body = (request.message or "").strip()
    if not body and request.image_url:
        body = IMAGE_PLACEHOLDER

    try:
        message = await state.message_log.append(
            request.room_id,
            request.user_id,
            request.username,
            body,
            image_url=request.image_url,
        )
    except (StoreUnavailable, DecodeError) as e:
        raise storage_failure(e, "Failed to send message")

    return {"success": True, "message": dump(message)}


@router.get("/messages/{room_id}")
async def get_messages(room_id: str):
    """Full retained history of a room, oldest first. No pagination."""
    try:
        messages = await state.message_log.list(room_id)
    except (StoreUnavailable, DecodeError) as e:
        raise storage_failure(e, "Failed to fetch messages")
    return {"messages": dump_all(messages)}
