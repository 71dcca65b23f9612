"""Broadcast capability backed by python-socketio rooms."""

from dataclasses import dataclass

import socketio

from whiteboard_relay.services.broadcast import Broadcaster


@dataclass
class SocketIOBroadcaster(Broadcaster):
    """Delegate fan-out to the Socket.IO server's room manager."""

    server: socketio.AsyncServer

    async def emit(
        self,
        event: str,
        payload: object,
        *,
        room: str | None = None,
        to: str | None = None,
        skip_sid: str | None = None,
    ) -> None:
        """Emit to a room or a single sid."""
        if room is None and to is None:
            raise ValueError("emit needs a room or a target sid")
        await self.server.emit(event, payload, to=to or room, skip_sid=skip_sid)

    async def enter_room(self, sid: str, room: str) -> None:
        await self.server.enter_room(sid, room)

    async def leave_room(self, sid: str, room: str) -> None:
        await self.server.leave_room(sid, room)
