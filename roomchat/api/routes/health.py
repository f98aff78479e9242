# roomchat/api/routes/health.py

from fastapi import APIRouter

from roomchat.core import state

router = APIRouter()

@router.get("/health")
async def health():
    """
    Health check endpoint.

    Reports whether the key-value store answers a ping. Used by container
    health probes and monitoring.
    """
    store_ok = state.kv_store is not None and await state.kv_store.ping()
    return {
        "status": "healthy" if store_ok else "degraded",
        "store": "ok" if store_ok else "unavailable",
    }
