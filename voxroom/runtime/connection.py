from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Optional

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class Connection:
    """
    One participant's WebSocket plus a bounded outbound queue.

    send() never awaits: frames are queued and a per-connection writer task
    pushes them to the socket, so a slow or dead peer never stalls the
    connection that is broadcasting. Failed or overflowing sends are dropped.
    """

    def __init__(
        self,
        websocket: WebSocket,
        *,
        display_name: str,
        room_id: str,
        outbox_max_size: int = 256,
    ):
        self.id = str(uuid.uuid4())
        self.websocket = websocket
        self.display_name = display_name
        self.room_id = room_id
        self.closed = False

        self._outbox: asyncio.Queue[str] = asyncio.Queue(maxsize=outbox_max_size)
        self._writer: Optional[asyncio.Task] = None

    def __repr__(self) -> str:
        return f"Connection(id={self.id!r}, display_name={self.display_name!r}, room_id={self.room_id!r})"

    def start(self) -> None:
        if self._writer is None:
            self._writer = asyncio.create_task(self._drain(), name=f"outbox-{self.id}")

    def send(self, payload: str) -> bool:
        """Queue a serialized frame. Returns False if it was dropped."""
        if self.closed:
            return False
        try:
            self._outbox.put_nowait(payload)
        except asyncio.QueueFull:
            logger.debug("Outbox full for %s in room %s, dropping frame", self.id, self.room_id)
            return False
        return True

    async def _drain(self) -> None:
        while True:
            payload = await self._outbox.get()
            try:
                await self.websocket.send_text(payload)
            except Exception as e:
                # the receive loop owns teardown; just drop the frame
                logger.debug("Send to %s in room %s failed: %s", self.id, self.room_id, e)

    async def close(self) -> None:
        """Stop the writer. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        if self._writer is not None:
            self._writer.cancel()
            try:
                await self._writer
            except asyncio.CancelledError:
                pass
