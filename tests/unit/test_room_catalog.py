import json

import pytest
import redis.asyncio as redis

from roomchat.core.errors import NotFound, StoreUnavailable
from roomchat.services.room_catalog import DEFAULT_ROOMS, RoomCatalog


@pytest.fixture
def catalog(store):
    return RoomCatalog(store)


@pytest.mark.asyncio
async def test_defaults_written_when_absent(catalog, redis_client):
    await catalog.ensure_default_rooms()

    assert json.loads(await redis_client.get("rooms")) == DEFAULT_ROOMS


@pytest.mark.asyncio
async def test_existing_catalog_is_left_alone(catalog, redis_client):
    custom = [{"id": "lobby", "name": "Lobby", "description": "Say hello"}]
    await redis_client.set("rooms", json.dumps(custom))

    await catalog.ensure_default_rooms()
    rooms = await catalog.list_rooms()

    assert [r.id for r in rooms] == ["lobby"]


@pytest.mark.asyncio
async def test_empty_catalog_is_not_reseeded(catalog, redis_client):
    await redis_client.set("rooms", "[]")

    assert await catalog.list_rooms() == []


@pytest.mark.asyncio
async def test_ensure_runs_once_per_process(catalog, redis_client):
    await catalog.ensure_default_rooms()
    await redis_client.delete("rooms")

    await catalog.ensure_default_rooms()

    assert await redis_client.get("rooms") is None


@pytest.mark.asyncio
async def test_failed_initialization_is_retried(catalog, redis_client, monkeypatch):
    original_get = redis_client.get

    async def broken_get(*args, **kwargs):
        raise redis.ConnectionError("connection refused")

    monkeypatch.setattr(redis_client, "get", broken_get)
    with pytest.raises(StoreUnavailable):
        await catalog.ensure_default_rooms()

    monkeypatch.setattr(redis_client, "get", original_get)
    rooms = await catalog.list_rooms()

    assert [r.id for r in rooms] == ["general", "random", "tech", "gaming"]


@pytest.mark.asyncio
async def test_get_room(catalog):
    room = await catalog.get_room("tech")

    assert room.name == "Tech"
    assert room.description == "Technology talk"

    with pytest.raises(NotFound):
        await catalog.get_room("nope")


@pytest.mark.asyncio
@pytest.mark.parametrize("stored", ["{corrupt", json.dumps([{"name": "no id"}]), json.dumps({"not": "a list"})])
async def test_unreadable_catalog_is_replaced(catalog, redis_client, stored):
    await redis_client.set("rooms", stored)

    rooms = await catalog.list_rooms()

    assert [r.id for r in rooms] == ["general", "random", "tech", "gaming"]
    assert json.loads(await redis_client.get("rooms")) == DEFAULT_ROOMS
