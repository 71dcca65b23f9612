"""Supabase-backed room repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from whiteboard_relay.domain.models import RoomRecord
from whiteboard_relay.services.rooms import RoomRepository


@dataclass
class SupabaseRoomRepository(RoomRepository):
    """Supabase implementation for room lookups."""

    client: Client

    def get_by_code(self, room_code: str) -> RoomRecord | None:
        """Return the room for a share code, if present."""
        response = (
            self.client.table("rooms")
            .select("id, room_code, participant_ids")
            .eq("room_code", room_code)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        participants = row.get("participant_ids") or []
        return RoomRecord(
            id=UUID(row["id"]),
            room_code=row["room_code"],
            participant_ids=frozenset(UUID(str(value)) for value in participants),
        )
