# roomchat/api/routes/utils.py

from __future__ import annotations

import logging
from typing import Iterable, List

from fastapi import HTTPException
from pydantic import BaseModel

from roomchat.core.errors import RoomChatError

logger = logging.getLogger(__name__)


def dump(item: BaseModel) -> dict:
    """Wire form of a model: camelCase keys, absent optionals omitted."""
    return item.model_dump(by_alias=True, exclude_none=True)


def dump_all(items: Iterable[BaseModel]) -> List[dict]:
    return [dump(item) for item in items]


def storage_failure(error: RoomChatError, detail: str) -> HTTPException:
    """
    Log a store/decode failure and build the HTTPException to raise for it.

    The client only sees the operation-level detail ("Failed to send message"),
    the underlying cause goes to the log.
    """
    logger.error(f"{detail}: {error.message}")
    return HTTPException(status_code=error.status_code, detail=detail)
