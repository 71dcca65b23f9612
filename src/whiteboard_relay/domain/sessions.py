"""Domain models for live connection sessions."""

from dataclasses import dataclass
from enum import Enum

from whiteboard_relay.domain.models import UserRecord


class SessionState(Enum):
    """Lifecycle states of a connection session."""

    CONNECTING = "connecting"
    AUTHENTICATED = "authenticated"
    JOINED = "joined"
    CLOSED = "closed"


@dataclass
class ConnectionSession:
    """Mutable per-connection state owned by the session manager."""

    sid: str
    user: UserRecord
    state: SessionState = SessionState.AUTHENTICATED
    room_code: str | None = None

    @property
    def is_closed(self) -> bool:
        return self.state is SessionState.CLOSED

    @property
    def active_room(self) -> str | None:
        """Return the joined room code, or None when events must be dropped."""
        if self.state is SessionState.JOINED:
            return self.room_code
        return None

    def summary(self) -> dict[str, object]:
        """Return a serializable summary for admin listings."""
        return {
            "sid": self.sid,
            "user_id": str(self.user.id),
            "username": self.user.username,
            "room_code": self.room_code,
            "state": self.state.value,
        }
