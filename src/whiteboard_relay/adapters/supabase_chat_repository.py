"""Supabase-backed chat message repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from whiteboard_relay.adapters.supabase_user_repository import user_from_row
from whiteboard_relay.domain.chat import ChatMessage
from whiteboard_relay.services.persistence import ChatRepository

_MESSAGE_COLUMNS = "id, room_id, message, created_at, sender:users(id, username, avatar)"


@dataclass
class SupabaseChatRepository(ChatRepository):
    """Supabase implementation for chat messages."""

    client: Client

    def create_message(self, room_id: UUID, sender_id: UUID, message: str) -> UUID:
        """Insert a chat message row and return its id."""
        response = (
            self.client.table("chat_messages")
            .insert(
                {
                    "room_id": str(room_id),
                    "sender_id": str(sender_id),
                    "message": message,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create chat message")
        return UUID(response.data[0]["id"])

    def get_message(self, message_id: UUID) -> ChatMessage | None:
        """Return a message with the sender's username and avatar."""
        response = (
            self.client.table("chat_messages")
            .select(_MESSAGE_COLUMNS)
            .eq("id", str(message_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return ChatMessage(
            id=UUID(row["id"]),
            room_id=UUID(row["room_id"]),
            sender=user_from_row(row["sender"]),
            message=row["message"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
