"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from whiteboard_relay.domain.models import UserRecord
from whiteboard_relay.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for identity lookups."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with display fields, if present."""
        response = (
            self.client.table("users")
            .select("id, username, avatar")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return user_from_row(response.data[0])


def user_from_row(row: dict[str, object]) -> UserRecord:
    """Build a user record from a users row or an embedded sender."""
    return UserRecord(
        id=UUID(str(row["id"])),
        username=str(row["username"]),
        avatar=row.get("avatar"),
    )
