"""Relay error taxonomy.

Every error carries the string reported to the originating session in an
``error`` event.
"""


class RelayError(Exception):
    """Base class for failures reported back to the acting session."""

    default_message = "Failed to relay event"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationError(RelayError):
    default_message = "Authentication error"


class RoomNotFound(RelayError):
    default_message = "Room not found"


class AccessDenied(RelayError):
    default_message = "Access denied"


class PersistenceFailure(RelayError):
    default_message = "Failed to persist event"


class BoardNotFound(PersistenceFailure):
    default_message = "Board not found"


class InvalidPayload(RelayError):
    default_message = "Invalid payload"
