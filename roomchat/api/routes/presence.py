# roomchat/api/routes/presence.py

from fastapi import APIRouter

from roomchat.core import state
from roomchat.core.errors import DecodeError, StoreUnavailable
from roomchat.models.models import JoinRoomRequest, LeaveRoomRequest
from roomchat.api.routes.utils import dump_all, storage_failure

# ============================================================================
# PRESENCE ENDPOINTS
# ============================================================================

router = APIRouter(tags=["Presence"])


@router.post("/join-room")
async def join_room(request: JoinRoomRequest):
    """
    Announce that a user is present in a room.

    Clients call this when entering a room and keep calling it to stay
    listed; an entry not refreshed for 5 minutes stops showing up in
    /active-users.

    Raises:
        HTTPException: 400 on missing fields, 503 if the store is unavailable
    """
    try:
        await state.presence_tracker.announce(request.room_id, request.user_id, request.username)
    except (StoreUnavailable, DecodeError) as e:
        raise storage_failure(e, "Failed to join room")
    return {"success": True}


@router.post("/leave-room")
async def leave_room(request: LeaveRoomRequest):
    """Remove a user from a room. Leaving a room you're not in succeeds."""
    try:
        await state.presence_tracker.withdraw(request.room_id, request.user_id)
    except (StoreUnavailable, DecodeError) as e:
        raise storage_failure(e, "Failed to leave room")
    return {"success": True}


@router.get("/active-users/{room_id}")
async def active_users(room_id: str):
    try:
        users = await state.presence_tracker.list_active(room_id)
    except (StoreUnavailable, DecodeError) as e:
        raise storage_failure(e, "Failed to fetch active users")
    return {"users": dump_all(users)}
