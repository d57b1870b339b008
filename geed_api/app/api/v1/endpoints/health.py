"""Health check reporting which storage backend is active."""

from fastapi import APIRouter, Depends

from geed_api.app.core.config import settings
from geed_api.app.stores import DataStore, get_store

router = APIRouter()


@router.get("")
async def health(store: DataStore = Depends(get_store)) -> dict:
    await store.initialize()
    return {"success": True, "backend": store.backend_name, "version": settings.api_version}
