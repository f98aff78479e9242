# roomchat/services/kv_store.py
from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, List, Optional, Type, TypeVar

import redis.asyncio as redis
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as SchemaError

from roomchat.core.config import settings
from roomchat.core.errors import DecodeError, StoreUnavailable

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ROOMS_KEY = "rooms"


def room_users_key(room_id: str) -> str:
    return f"room:{room_id}:users"


def room_messages_key(room_id: str) -> str:
    return f"room:{room_id}:messages"


@lru_cache(maxsize=None)
def _list_adapter(model: Type[BaseModel]) -> TypeAdapter:
    return TypeAdapter(List[model])


def validate_models(key: str, raw: Any, model: Type[ModelT]) -> List[ModelT]:
    """Validate a decoded value as a list of model records, raising DecodeError if it isn't one."""
    try:
        return _list_adapter(model).validate_python(raw)
    except SchemaError as e:
        raise DecodeError(f"Malformed {model.__name__} list at '{key}': {e.error_count()} error(s)") from e


class RedisKeyValueStore:
    """
    Whole-value JSON key-value store backed by Redis.

    Every value is serialized with json.dumps into a plain string key, so a
    write always replaces the full value. There are no partial updates and
    no transactions: callers doing read-modify-write race with each other
    and the last writer wins.

    Redis errors are re-raised as StoreUnavailable. No retry happens here.
    """

    def __init__(self, url: Optional[str] = None, client: Optional[redis.Redis] = None):
        self.url = url or settings.redis_url()
        self.client = client

    async def connect(self) -> None:
        """Establish async connection to Redis."""
        if self.client is None:
            self.client = redis.from_url(self.url, decode_responses=True)
        try:
            await self.client.ping()
        except redis.RedisError as e:
            raise StoreUnavailable(f"Redis ping failed: {e}") from e
        logger.info("✓ Connected to key-value store")

    async def ping(self) -> bool:
        if self.client is None:
            return False
        try:
            return bool(await self.client.ping())
        except redis.RedisError:
            return False

    async def get(self, key: str) -> Any:
        """Return the decoded value stored at key, or None if absent."""
        try:
            raw = await self._require_client().get(key)
        except redis.RedisError as e:
            raise StoreUnavailable(f"Failed to read '{key}': {e}") from e

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise DecodeError(f"Value at '{key}' is not valid JSON") from e

    async def set(self, key: str, value: Any) -> None:
        try:
            await self._require_client().set(key, json.dumps(value))
        except redis.RedisError as e:
            raise StoreUnavailable(f"Failed to write '{key}': {e}") from e
        logger.debug(f"💾 Stored '{key}'")

    async def get_models(self, key: str, model: Type[ModelT]) -> List[ModelT]:
        """Read a list of records at key, validating each one. Absent key -> []."""
        raw = await self.get(key)
        if raw is None:
            return []
        return validate_models(key, raw, model)

    async def set_models(self, key: str, items: List[BaseModel]) -> None:
        await self.set(key, [item.model_dump(by_alias=True, exclude_none=True) for item in items])

    async def close(self) -> None:
        """Close connections."""
        if self.client:
            await self.client.aclose()
            self.client = None
        logger.info("Key-value store connection closed")

    def _require_client(self) -> redis.Redis:
        if self.client is None:
            raise StoreUnavailable("Key-value store not connected - call connect() first")
        return self.client
