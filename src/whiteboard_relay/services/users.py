"""User lookup interface."""

from typing import Protocol
from uuid import UUID

from whiteboard_relay.domain.models import UserRecord


class UserRepository(Protocol):
    """Persistence interface for user identities."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with its display fields, if present."""
