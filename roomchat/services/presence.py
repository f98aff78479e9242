# roomchat/services/presence.py
from __future__ import annotations

import logging
from typing import List

from roomchat.core.clock import Clock, now_ms
from roomchat.core.errors import StoreUnavailable, require
from roomchat.models.models import RoomMembership
from roomchat.services.kv_store import RedisKeyValueStore, room_users_key

logger = logging.getLogger(__name__)

FRESHNESS_WINDOW_MS = 5 * 60 * 1000

# ============================================================================
# PRESENCE TRACKER
# ============================================================================

class PresenceTracker:
    """
    Tracks which users are currently active in each room.

    Storage Format (room:{roomId}:users):
        [
            {"userId": "u1", "username": "alice", "joinedAt": 1733000000000},
            ...
        ]

    A user refreshes their entry by announcing again (the UI does this while
    the room is open). Entries whose joinedAt is older than the freshness
    window are evicted lazily by list_active(); nothing sweeps rooms nobody
    reads, so stale entries may sit in storage but are never reported.

    Every operation is a read-modify-write of the whole list. Concurrent
    writers to the same room can overwrite each other's changes.
    """

    def __init__(self, store: RedisKeyValueStore, clock: Clock = now_ms) -> None:
        self.store = store
        self.clock = clock

    async def announce(self, room_id: str, user_id: str, username: str) -> RoomMembership:
        """
        Add or refresh a user's membership in a room.

        Any previous entry for user_id is dropped and a fresh one is appended,
        so there is always exactly one entry per user.

        Raises:
            ValidationError: a parameter is missing or empty
            StoreUnavailable: the store failed
        """
        require(room_id=room_id, user_id=user_id, username=username)

        key = room_users_key(room_id)
        members = await self.store.get_models(key, RoomMembership)

        remaining = [m for m in members if m.user_id != user_id]
        entry = RoomMembership(user_id=user_id, username=username, joined_at=self.clock())
        remaining.append(entry)

        await self.store.set_models(key, remaining)
        logger.info("→ %s announced in '%s' (%d present)", user_id, room_id, len(remaining))
        return entry

    async def withdraw(self, room_id: str, user_id: str) -> None:
        """Remove a user from a room. Withdrawing an absent user is a no-op."""
        require(room_id=room_id, user_id=user_id)

        key = room_users_key(room_id)
        members = await self.store.get_models(key, RoomMembership)
        remaining = [m for m in members if m.user_id != user_id]

        await self.store.set_models(key, remaining)
        logger.info("← %s left '%s' (%d present)", user_id, room_id, len(remaining))

    async def list_active(self, room_id: str) -> List[RoomMembership]:
        """
        Members whose last announcement is inside the freshness window.

        An entry exactly FRESHNESS_WINDOW_MS old is already stale. When stale
        entries are found the pruned list is written back; if that write
        fails the error is logged and the pruned list is still returned.
        """
        require(room_id=room_id)

        key = room_users_key(room_id)
        members = await self.store.get_models(key, RoomMembership)

        cutoff = self.clock() - FRESHNESS_WINDOW_MS
        active = [m for m in members if m.joined_at > cutoff]

        if len(active) != len(members):
            try:
                await self.store.set_models(key, active)
                logger.info("Evicted %d stale member(s) from '%s'", len(members) - len(active), room_id)
            except StoreUnavailable as e:
                logger.warning(f"Could not persist eviction for '{room_id}': {e}")

        return active
