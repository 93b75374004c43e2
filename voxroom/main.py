from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voxroom.api.v1.router import router as v1_router
from voxroom.core import Settings, settings as default_settings, setup_logging
from voxroom.runtime.reaper import run_reaper
from voxroom.runtime.registry import RoomRegistry

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, registry: RoomRegistry | None = None) -> FastAPI:
    if settings is None:
        settings = default_settings
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(title="voxroom API", version="0.1.0")
    app.state.settings = settings
    if registry is None:
        registry = RoomRegistry(max_message_bytes=settings.MAX_MESSAGE_BYTES)
    app.state.registry = registry
    app.state.reaper_task = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(v1_router, prefix="/api")

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.on_event("startup")
    async def startup_event():
        """Start background cleanup task for empty rooms."""
        app.state.reaper_task = asyncio.create_task(run_reaper(
            app.state.registry,
            interval_seconds=settings.ROOM_SWEEP_INTERVAL_SECONDS,
            idle_ttl_seconds=settings.ROOM_IDLE_TTL_SECONDS,
        ))

    @app.on_event("shutdown")
    async def shutdown_event():
        task = app.state.reaper_task
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        app.state.reaper_task = None

    logger.info("voxroom application initialized (env=%s)", settings.ENV)
    return app


app = create_app()
