from fastapi.requests import HTTPConnection

from voxroom.core.config import Settings
from voxroom.runtime.registry import RoomRegistry


def get_registry(conn: HTTPConnection) -> RoomRegistry:
    return conn.app.state.registry


def get_settings(conn: HTTPConnection) -> Settings:
    return conn.app.state.settings
