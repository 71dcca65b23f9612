"""Domain models for the whiteboard relay."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents an authenticated user and the fields peers display."""

    id: UUID
    username: str
    avatar: str | None = None

    def presence_payload(self) -> dict[str, object]:
        """Return the identity payload used by presence notices."""
        return {
            "userId": str(self.id),
            "username": self.username,
            "avatar": self.avatar,
        }


@dataclass(frozen=True)
class RoomRecord:
    """Represents a room stored in the database."""

    id: UUID
    room_code: str
    participant_ids: frozenset[UUID] = field(default_factory=frozenset)

    def is_participant(self, user_id: UUID) -> bool:
        """Return True when the user is a recorded participant."""
        return user_id in self.participant_ids
