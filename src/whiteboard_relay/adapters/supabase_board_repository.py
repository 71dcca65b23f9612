"""Supabase-backed board snapshot repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from whiteboard_relay.services.persistence import BoardRepository


@dataclass
class SupabaseBoardRepository(BoardRepository):
    """Supabase implementation for board snapshots."""

    client: Client

    def get_board_id(self, room_id: UUID) -> UUID | None:
        """Return the board id for a room, if present."""
        response = (
            self.client.table("boards")
            .select("id")
            .eq("room_id", str(room_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return UUID(response.data[0]["id"])

    def clear_board(self, board_id: UUID, actor_id: UUID) -> None:
        """Reset elements and snapshot, recording who cleared the board."""
        self.client.table("boards").update(
            {
                "elements": [],
                "snapshot": None,
                "last_modified_by": str(actor_id),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(board_id)).execute()
