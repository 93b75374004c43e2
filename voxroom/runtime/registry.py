from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from voxroom.runtime.room import Member, Room, _now_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomSummary:
    id: str
    users: List[str]
    last_activity: int


class RoomRegistry:
    """
    Process-wide table of live rooms keyed by room id.

    Rooms are created on first join and removed only by sweep(), and only
    once they are empty and idle. Methods never await, so each call is
    atomic with respect to other connections and the reaper.
    """

    def __init__(self, *, clock: Callable[[], int] = _now_ms, max_message_bytes: int = 4000):
        self._rooms: Dict[str, Room] = {}
        self._clock = clock
        self._max_message_bytes = max_message_bytes

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def get(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def get_or_create(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(
                id=room_id,
                last_activity=self._clock(),
                max_message_bytes=self._max_message_bytes,
                clock=self._clock,
            )
            self._rooms[room_id] = room
            logger.info("Created room %s", room_id)
        return room

    def join(self, room_id: str, conn: Member) -> Room:
        """Look up or create the room and add conn in one step."""
        room = self.get_or_create(room_id)
        room.join(conn)
        return room

    def leave(self, room_id: str, conn: Member) -> bool:
        room = self._rooms.get(room_id)
        if room is None:
            return False
        return room.leave(conn)

    def snapshot(self) -> List[RoomSummary]:
        return [
            RoomSummary(id=room.id, users=room.usernames(), last_activity=room.last_activity)
            for room in self._rooms.values()
        ]

    def sweep(self, *, idle_ttl_ms: int, now: Optional[int] = None) -> List[str]:
        """Remove rooms with no members whose last activity is older than idle_ttl_ms."""
        if now is None:
            now = self._clock()

        removed = []
        for room_id, room in list(self._rooms.items()):
            if room.members:
                continue
            if now - room.last_activity > idle_ttl_ms:
                del self._rooms[room_id]
                removed.append(room_id)

        if removed:
            logger.info("Reaped %d idle room(s): %s", len(removed), ", ".join(removed))
        return removed
