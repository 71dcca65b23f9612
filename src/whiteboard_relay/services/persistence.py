"""Durable side effects performed alongside relay."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from whiteboard_relay.domain.chat import ChatMessage
from whiteboard_relay.domain.errors import BoardNotFound, PersistenceFailure
from whiteboard_relay.domain.models import UserRecord
from whiteboard_relay.services.audit import AuditService
from whiteboard_relay.services.rooms import RoomMembershipService

logger = logging.getLogger(__name__)


class ChatRepository(Protocol):
    """Persistence interface for chat messages."""

    def create_message(self, room_id: UUID, sender_id: UUID, message: str) -> UUID:
        """Insert a chat message and return its id."""

    def get_message(self, message_id: UUID) -> ChatMessage | None:
        """Return a message joined with its sender's display fields."""


class BoardRepository(Protocol):
    """Persistence interface for board snapshots."""

    def get_board_id(self, room_id: UUID) -> UUID | None:
        """Return the board id for a room, if present."""

    def clear_board(self, board_id: UUID, actor_id: UUID) -> None:
        """Reset the board's elements and snapshot."""


@dataclass
class DurableWriter:
    """Write chat messages and board clears before or alongside relay."""

    rooms: RoomMembershipService
    chat_repository: ChatRepository
    board_repository: BoardRepository
    audit_service: AuditService

    async def persist_chat(
        self, room_code: str, sender: UserRecord, text: str
    ) -> ChatMessage:
        """Store a chat message and return it enriched with sender fields."""
        room = await self.rooms.get_room(room_code)
        try:
            message_id = await asyncio.to_thread(
                self.chat_repository.create_message, room.id, sender.id, text
            )
            message = await asyncio.to_thread(
                self.chat_repository.get_message, message_id
            )
        except Exception as exc:
            logger.exception("Failed to store chat message in room %s", room_code)
            raise PersistenceFailure("Failed to send message") from exc
        if message is None:
            logger.error("Stored chat message %s could not be re-read", message_id)
            raise PersistenceFailure("Failed to send message")
        return message

    async def clear_board(self, room_code: str, actor: UserRecord) -> UUID:
        """Reset the room's board snapshot and audit the actor."""
        room = await self.rooms.get_room(room_code)
        board_id = await asyncio.to_thread(self.board_repository.get_board_id, room.id)
        if board_id is None:
            raise BoardNotFound()
        try:
            await asyncio.to_thread(
                self.board_repository.clear_board, board_id, actor.id
            )
            await asyncio.to_thread(
                self.audit_service.record_board_cleared, actor.id, board_id, room_code
            )
        except Exception as exc:
            logger.exception("Failed to clear board for room %s", room_code)
            raise PersistenceFailure("Failed to update drawing") from exc
        logger.info("Board %s cleared by %s", board_id, actor.username)
        return board_id
