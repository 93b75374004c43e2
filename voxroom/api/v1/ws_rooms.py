from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status

from voxroom.api.deps import get_registry, get_settings
from voxroom.core.config import Settings
from voxroom.core.text import clip_utf8
from voxroom.runtime.connection import Connection
from voxroom.runtime.registry import RoomRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def room_ws(
    websocket: WebSocket,
    room_id: str = Query("", alias="roomId"),
    username: str = Query(""),
    registry: RoomRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
):
    room_id = clip_utf8(room_id, settings.MAX_ROOM_ID_BYTES)
    display_name = clip_utf8(username, settings.MAX_DISPLAY_NAME_BYTES)
    if not room_id or not display_name:
        logger.info("WebSocket rejected: missing roomId or username")
        # closing before accept refuses the upgrade
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="roomId and username are required")
        return

    await websocket.accept()

    conn = Connection(
        websocket,
        display_name=display_name,
        room_id=room_id,
        outbox_max_size=settings.OUTBOX_MAX_SIZE,
    )
    conn.start()
    # A room with members is never swept, so this reference stays valid
    room = registry.join(room_id, conn)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            if raw is None:
                continue

            room.dispatch(conn, raw)

    except WebSocketDisconnect:
        pass
    finally:
        registry.leave(room_id, conn)
        await conn.close()
