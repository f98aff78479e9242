# roomchat/api/routes/rooms.py

from fastapi import APIRouter, HTTPException

from roomchat.core import state
from roomchat.core.errors import DecodeError, NotFound, StoreUnavailable
from roomchat.api.routes.utils import dump, dump_all, storage_failure

router = APIRouter(tags=["Rooms"])

# ============================================================================
# ROOM CATALOG ENDPOINTS
# ============================================================================

@router.get("/rooms")
async def list_rooms():
    """
    List all available rooms.

    The catalog is read-only: it is seeded with the default rooms on first
    use and no endpoint creates or deletes rooms.
    """
    try:
        rooms = await state.room_catalog.list_rooms()
    except (StoreUnavailable, DecodeError) as e:
        raise storage_failure(e, "Failed to fetch rooms")
    return {"rooms": dump_all(rooms)}


@router.get("/rooms/{room_id}")
async def get_room(room_id: str):
    """
    Get details of a specific room.

    Raises:
        HTTPException: 404 if room not found
    """
    try:
        room = await state.room_catalog.get_room(room_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Room not found")
    except (StoreUnavailable, DecodeError) as e:
        raise storage_failure(e, "Failed to fetch room")
    return {"room": dump(room)}
