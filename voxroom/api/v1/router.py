from fastapi import APIRouter
from voxroom.api.v1 import admin, ws_rooms

router = APIRouter()
router.include_router(ws_rooms.router, tags=["rooms-ws"])
router.include_router(admin.router, tags=["admin"])
