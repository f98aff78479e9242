# roomchat/services/room_catalog.py
from __future__ import annotations

import logging
from typing import List

from roomchat.core.errors import DecodeError, NotFound
from roomchat.models.models import Room
from roomchat.services.kv_store import ROOMS_KEY, RedisKeyValueStore, validate_models

logger = logging.getLogger(__name__)

DEFAULT_ROOMS = [
    {"id": "general", "name": "General", "description": "General discussion"},
    {"id": "random", "name": "Random", "description": "Random chat"},
    {"id": "tech", "name": "Tech", "description": "Technology talk"},
    {"id": "gaming", "name": "Gaming", "description": "Gaming discussion"},
]

# ============================================================================
# ROOM CATALOG
# ============================================================================
class RoomCatalog:
    """
    Read-mostly catalog of chat rooms, stored under the "rooms" key.

    The catalog is seeded with DEFAULT_ROOMS the first time the key is
    found missing, or when what is stored there cannot be read back.
    Nothing in the API mutates it afterwards.

    Storage Format (rooms):
        [
            {"id": "general", "name": "General", "description": "General discussion"},
            ...
        ]
    """

    def __init__(self, store: RedisKeyValueStore) -> None:
        self.store = store
        self._initialized = False

    async def ensure_default_rooms(self) -> None:
        """
        Write the default catalog if the rooms key is absent or unreadable.

        Runs the check at most once per process once it has succeeded. If the
        store fails the flag stays unset and the next call tries again.
        """
        if self._initialized:
            return

        try:
            existing = await self.store.get(ROOMS_KEY)
            if existing is not None:
                validate_models(ROOMS_KEY, existing, Room)
        except DecodeError as e:
            logger.warning(f"Replacing unreadable room catalog: {e}")
            existing = None

        if existing is None:
            rooms = [Room(**rd) for rd in DEFAULT_ROOMS]
            await self.store.set_models(ROOMS_KEY, rooms)
            logger.info(f"✓ Created {len(rooms)} default rooms")

        self._initialized = True

    async def list_rooms(self) -> List[Room]:
        await self.ensure_default_rooms()
        return await self.store.get_models(ROOMS_KEY, Room)

    async def get_room(self, room_id: str) -> Room:
        """
        Get a room by ID.

        Raises:
            NotFound: no room with that id in the catalog
        """
        for room in await self.list_rooms():
            if room.id == room_id:
                return room
        raise NotFound(f"Room '{room_id}' not found")
