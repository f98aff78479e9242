# roomchat/api/routes/root.py

from fastapi import APIRouter

from roomchat import __version__
from roomchat.services.message_log import RETENTION_CAP
from roomchat.services.presence import FRESHNESS_WINDOW_MS

router = APIRouter()


@router.get("/")
async def root():
    """
    Root endpoint - API information.

    Returns basic info about the API and its limits.
    """
    return {
        "message": "Room Chat",
        "version": __version__,
        "delivery": "client polling",
        "presence_window_seconds": FRESHNESS_WINDOW_MS // 1000,
        "message_retention": RETENTION_CAP,
        "endpoints": {
            "rooms": "/rooms",
            "join": "/join-room",
            "leave": "/leave-room",
            "active_users": "/active-users/{room_id}",
            "send": "/send-message",
            "messages": "/messages/{room_id}",
            "health": "/health",
        },
    }
