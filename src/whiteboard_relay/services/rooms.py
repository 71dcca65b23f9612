"""Room membership validation and live membership changes."""

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Protocol

from whiteboard_relay.domain.errors import AccessDenied, RoomNotFound
from whiteboard_relay.domain.events import USER_JOINED, USER_LEFT
from whiteboard_relay.domain.models import RoomRecord, UserRecord
from whiteboard_relay.services.broadcast import Broadcaster

logger = logging.getLogger(__name__)


class RoomRepository(Protocol):
    """Read-only access to durable room records."""

    def get_by_code(self, room_code: str) -> RoomRecord | None:
        """Return the room for a share code, if present."""


@dataclass
class RoomMembershipService:
    """Validate room access and mutate live membership with its notices."""

    repository: RoomRepository
    broadcaster: Broadcaster
    _locks: defaultdict[str, asyncio.Lock] = field(
        default_factory=lambda: defaultdict(asyncio.Lock), init=False, repr=False
    )

    async def get_room(self, room_code: str) -> RoomRecord:
        """Return the room for a code or raise ``RoomNotFound``."""
        room = await asyncio.to_thread(self.repository.get_by_code, room_code)
        if room is None:
            raise RoomNotFound()
        return room

    async def authorize(self, user: UserRecord, room_code: str) -> RoomRecord:
        """Return the room when the user is a recorded participant."""
        room = await self.get_room(room_code)
        if not room.is_participant(user.id):
            logger.info("User %s denied access to room %s", user.username, room_code)
            raise AccessDenied()
        return room

    async def add_member(self, sid: str, user: UserRecord, room_code: str) -> None:
        """Enter the room and notify the members already present."""
        async with self._locks[room_code]:
            await self.broadcaster.enter_room(sid, room_code)
            await self.broadcaster.emit(
                USER_JOINED,
                user.presence_payload(),
                room=room_code,
                skip_sid=sid,
            )

    async def remove_member(self, sid: str, user: UserRecord, room_code: str) -> None:
        """Leave the room and notify the remaining members."""
        async with self._locks[room_code]:
            await self.broadcaster.leave_room(sid, room_code)
            await self.broadcaster.emit(
                USER_LEFT,
                {"userId": str(user.id), "username": user.username},
                room=room_code,
                skip_sid=sid,
            )
