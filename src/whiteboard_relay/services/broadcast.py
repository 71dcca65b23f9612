"""Broadcast capability provided by the transport."""

from typing import Protocol


class Broadcaster(Protocol):
    """Fan-out primitive over live room membership.

    ``room`` targets the current members of a room at send time, ``to``
    targets one session, and ``skip_sid`` excludes the sender.
    """

    async def emit(
        self,
        event: str,
        payload: object,
        *,
        room: str | None = None,
        to: str | None = None,
        skip_sid: str | None = None,
    ) -> None:
        """Emit an event to a room or a single session."""

    async def enter_room(self, sid: str, room: str) -> None:
        """Add a session to a room's live membership."""

    async def leave_room(self, sid: str, room: str) -> None:
        """Remove a session from a room's live membership."""
