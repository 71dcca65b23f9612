"""Audit trail for durable board changes."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


class AuditRepository(Protocol):
    """Persistence interface for board audit events."""

    def create_board_cleared(
        self, actor_id: UUID, board_id: UUID, room_code: str
    ) -> None:
        """Record that a board was reset by a user."""


@dataclass
class AuditService:
    """Record who changed durable room state."""

    repository: AuditRepository

    def record_board_cleared(
        self, actor_id: UUID, board_id: UUID, room_code: str
    ) -> None:
        """Attribute a board reset to the user who triggered it."""
        self.repository.create_board_cleared(
            actor_id=actor_id, board_id=board_id, room_code=room_code
        )
