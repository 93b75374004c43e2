from __future__ import annotations

import secrets

from voxroom.runtime.registry import RoomRegistry
from voxroom.schemas.admin import AdminStatsOut, RoomStatsOut


class AdminService:
    def __init__(self, registry: RoomRegistry, *, admin_key: str):
        self.registry = registry
        self.admin_key = admin_key

    def is_authorized(self, key: str | None) -> bool:
        """An empty configured key locks the admin view entirely."""
        if not self.admin_key or not key:
            return False
        return secrets.compare_digest(key.encode("utf-8"), self.admin_key.encode("utf-8"))

    def stats(self) -> AdminStatsOut:
        """Read-only view of every live room; does not touch last activity."""
        rooms = [
            RoomStatsOut(id=s.id, users=s.users, last_activity=s.last_activity)
            for s in self.registry.snapshot()
        ]
        return AdminStatsOut(
            rooms=rooms,
            total_rooms=len(rooms),
            total_users=sum(len(r.users) for r in rooms),
        )
