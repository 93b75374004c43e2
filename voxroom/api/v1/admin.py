from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from voxroom.api.deps import get_registry, get_settings
from voxroom.core.config import Settings
from voxroom.runtime.registry import RoomRegistry
from voxroom.schemas.admin import AdminStatsOut
from voxroom.services.admin_service import AdminService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ws", response_model=AdminStatsOut)
async def admin_stats(
    key: str = Query(""),
    registry: RoomRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
):
    """
    Snapshot of every live room and who is in it.
    Shares its path with the WebSocket route; plain GETs land here.
    """
    svc = AdminService(registry, admin_key=settings.ADMIN_KEY)
    if not svc.is_authorized(key):
        logger.warning("Admin stats request rejected")
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "unauthorized"})
    return svc.stats()
