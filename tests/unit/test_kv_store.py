import pytest

from roomchat.core.config import Settings
from roomchat.core.errors import DecodeError, StoreUnavailable
from roomchat.models.models import Room, RoomMembership
from roomchat.services.kv_store import (
    RedisKeyValueStore,
    _list_adapter,
    room_messages_key,
    room_users_key,
    validate_models,
)


def test_key_helpers():
    assert room_users_key("general") == "room:general:users"
    assert room_messages_key("general") == "room:general:messages"


@pytest.mark.asyncio
async def test_get_absent_key_returns_none(store):
    assert await store.get("missing") is None
    assert await store.get_models("missing", Room) == []


@pytest.mark.asyncio
async def test_set_replaces_whole_value(store):
    await store.set("k", [1, 2, 3])
    await store.set("k", {"a": 1})

    assert await store.get("k") == {"a": 1}


@pytest.mark.asyncio
async def test_invalid_json_raises_decode_error(store, redis_client):
    await redis_client.set("k", "{not json")

    with pytest.raises(DecodeError):
        await store.get("k")


@pytest.mark.asyncio
async def test_unconnected_store_is_unavailable():
    store = RedisKeyValueStore(url="redis://localhost:1")

    with pytest.raises(StoreUnavailable):
        await store.get("k")
    assert await store.ping() is False


@pytest.mark.asyncio
async def test_connect_with_existing_client(redis_client):
    store = RedisKeyValueStore(client=redis_client)

    await store.connect()

    assert await store.ping() is True


def test_redis_url_from_parts():
    settings = Settings()
    settings.REDIS_URL = None
    settings.REDIS_HOST = "cache.internal"
    settings.REDIS_PORT = 6380
    settings.REDIS_ACCESS_KEY = "secret"
    settings.REDIS_SSL = True

    assert settings.redis_url() == "rediss://:secret@cache.internal:6380"

    settings.REDIS_ACCESS_KEY = ""
    settings.REDIS_SSL = False
    assert settings.redis_url() == "redis://cache.internal:6380"

    settings.REDIS_URL = "redis://other:1234/2"
    assert settings.redis_url() == "redis://other:1234/2"


def test_list_adapter_is_built_once_per_model():
    assert _list_adapter(Room) is _list_adapter(Room)
    assert _list_adapter(Room) is not _list_adapter(RoomMembership)


def test_validate_models_rejects_wrong_shape():
    rooms = validate_models("rooms", [{"id": "general", "name": "General"}], Room)

    assert rooms == [Room(id="general", name="General")]
    with pytest.raises(DecodeError):
        validate_models("rooms", [{"name": "General"}], Room)
