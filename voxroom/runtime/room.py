from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol, Union

from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from voxroom.core.text import clip_utf8
from voxroom.schemas.ws import (
    ChatMessageOut,
    ChatSendIn,
    ServerToClient,
    SignalIn,
    SignalOut,
    SystemOut,
    TypingIn,
    TypingOut,
    UsersOut,
    client_event_adapter,
)

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


class Member(Protocol):
    id: str
    display_name: str

    def send(self, payload: str) -> bool: ...


@dataclass(eq=False)
class Room:
    id: str
    members: Dict[str, Member] = field(default_factory=dict)
    last_activity: int = field(default_factory=_now_ms)
    max_message_bytes: int = 4000
    clock: Callable[[], int] = _now_ms

    # Every method below is synchronous: the event loop runs each one to
    # completion, which serializes membership and last_activity updates.

    def touch(self) -> None:
        self.last_activity = self.clock()

    def usernames(self) -> List[str]:
        return [m.display_name for m in self.members.values()]

    def is_member(self, conn: Member) -> bool:
        return conn.id in self.members

    def broadcast(self, model: ServerToClient, *, exclude: Optional[Member] = None) -> int:
        """
        Serialize once and queue the frame for every member (minus `exclude`).
        Returns how many members accepted the frame.
        """
        payload = json.dumps(jsonable_encoder(model))
        delivered = 0
        for conn in list(self.members.values()):
            if conn is exclude:
                continue
            if conn.send(payload):
                delivered += 1
        return delivered

    def _announce(self, text: str) -> None:
        users = self.usernames()
        self.broadcast(SystemOut(text=text, users=users))
        self.broadcast(UsersOut(users=users))

    def join(self, conn: Member) -> None:
        if conn.id in self.members:
            return
        self.members[conn.id] = conn
        self.touch()
        logger.info("%s joined room %s (%d members)", conn.display_name, self.id, len(self.members))
        self._announce(f"{conn.display_name} joined")

    def leave(self, conn: Member) -> bool:
        """Remove conn and tell the others. Returns False if it was not a member."""
        if self.members.pop(conn.id, None) is None:
            return False
        self.touch()
        logger.info("%s left room %s (%d members)", conn.display_name, self.id, len(self.members))
        self._announce(f"{conn.display_name} left")
        if not self.members:
            # idle clock starts when the room empties
            self.touch()
        return True

    def dispatch(self, conn: Member, raw: Union[str, bytes]) -> None:
        """Handle one inbound frame from conn. Anything unparseable is dropped."""
        if conn.id not in self.members:
            return
        self.touch()

        try:
            event = client_event_adapter.validate_json(raw)
        except ValidationError as e:
            logger.debug("Dropping malformed frame from %s in room %s: %s", conn.id, self.id, e.error_count())
            return

        if isinstance(event, ChatSendIn):
            self.broadcast(ChatMessageOut(
                text=clip_utf8(event.text, self.max_message_bytes),
                username=conn.display_name,
                at=self.clock(),
            ))
        elif isinstance(event, TypingIn):
            self.broadcast(TypingOut(username=conn.display_name, is_typing=event.is_typing))
        elif isinstance(event, SignalIn):
            self.broadcast(SignalOut(from_=conn.display_name, signal=event.signal), exclude=conn)
