"""Domain models for persisted chat messages."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from whiteboard_relay.domain.models import UserRecord


@dataclass(frozen=True)
class ChatMessage:
    """A chat message joined with its sender's display fields."""

    id: UUID
    room_id: UUID
    sender: UserRecord
    message: str
    created_at: datetime

    def to_payload(self) -> dict[str, object]:
        """Return the broadcast form of the message."""
        return {
            "_id": str(self.id),
            "roomId": str(self.room_id),
            "sender": {
                "_id": str(self.sender.id),
                "username": self.sender.username,
                "avatar": self.sender.avatar,
            },
            "message": self.message,
            "createdAt": self.created_at.isoformat(),
        }
