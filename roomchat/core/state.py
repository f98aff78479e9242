# roomchat/core/state.py
from __future__ import annotations

from typing import Optional

from roomchat.core.clock import Clock, now_ms
from roomchat.services.kv_store import RedisKeyValueStore
from roomchat.services.message_log import MessageLog
from roomchat.services.presence import PresenceTracker
from roomchat.services.room_catalog import RoomCatalog

# Global singletons for app state, populated by init_state() on startup
kv_store: Optional[RedisKeyValueStore] = None
presence_tracker: Optional[PresenceTracker] = None
message_log: Optional[MessageLog] = None
room_catalog: Optional[RoomCatalog] = None


def init_state(store: RedisKeyValueStore, clock: Clock = now_ms) -> None:
    """Build the services around a store. Replaces any previous singletons."""
    global kv_store, presence_tracker, message_log, room_catalog

    kv_store = store
    presence_tracker = PresenceTracker(store, clock=clock)
    message_log = MessageLog(store, clock=clock)
    room_catalog = RoomCatalog(store)


def reset_state() -> None:
    global kv_store, presence_tracker, message_log, room_catalog

    kv_store = None
    presence_tracker = None
    message_log = None
    room_catalog = None
