"""Supabase repository for board audit events."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from whiteboard_relay.services.audit import AuditRepository

_BOARD_CLEARED = "board_cleared"


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Append board changes to the ``audit_events`` table."""

    client: Client

    def create_board_cleared(
        self, actor_id: UUID, board_id: UUID, room_code: str
    ) -> None:
        """Insert a ``board_cleared`` row attributed to the actor."""
        self.client.table("audit_events").insert(
            {
                "user_id": str(actor_id),
                "entity_type": "board",
                "entity_id": str(board_id),
                "event_type": _BOARD_CLEARED,
                "after_json": {"room_code": room_code, "elements": []},
            }
        ).execute()
