from __future__ import annotations

import asyncio
import logging

from voxroom.runtime.registry import RoomRegistry

logger = logging.getLogger(__name__)


async def run_reaper(
    registry: RoomRegistry,
    *,
    interval_seconds: float = 60,
    idle_ttl_seconds: float = 600,
) -> None:
    """
    Background task: every interval_seconds, drop rooms that have had no
    members for longer than idle_ttl_seconds. Runs until cancelled.
    """
    idle_ttl_ms = int(idle_ttl_seconds * 1000)

    while True:
        await asyncio.sleep(interval_seconds)
        try:
            registry.sweep(idle_ttl_ms=idle_ttl_ms)
        except Exception:
            logger.exception("Room sweep failed")
