from voxroom.runtime.connection import Connection
from voxroom.runtime.reaper import run_reaper
from voxroom.runtime.registry import RoomRegistry, RoomSummary
from voxroom.runtime.room import Room

__all__ = ["Connection", "Room", "RoomRegistry", "RoomSummary", "run_reaper"]
