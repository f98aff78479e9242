# roomchat/main.py

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roomchat.core import state
from roomchat.core.config import settings
from roomchat.core.errors import RoomChatError
from roomchat.core.logging import setup_logging, get_logger
from roomchat.services.kv_store import RedisKeyValueStore
from roomchat.api.errors import install_error_handlers
from roomchat.api.middleware import RequestLogMiddleware
from roomchat.api.routes import root, health, rooms, presence, messages

# Configure logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Application starting")

    store = RedisKeyValueStore()
    try:
        await store.connect()
    except RoomChatError as e:
        # The client reconnects on demand; requests fail with 503 until then
        logger.error(f"Key-value store not reachable at startup: {e}")

    state.init_state(store)

    try:
        await state.room_catalog.ensure_default_rooms()
    except RoomChatError as e:
        logger.error(f"Could not initialize default rooms: {e}")

    try:
        yield
    finally:
        await store.close()
        state.reset_state()
        logger.info("Application stopped")


# FastAPI app
app = FastAPI(title="Room Chat", lifespan=lifespan)

app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# REST routes
app.include_router(root.router)
app.include_router(health.router)
app.include_router(rooms.router, prefix=settings.API_PREFIX)
app.include_router(presence.router, prefix=settings.API_PREFIX)
app.include_router(messages.router, prefix=settings.API_PREFIX)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("roomchat.main:app", host=settings.HOST, port=settings.PORT)
