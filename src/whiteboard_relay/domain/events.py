"""Inbound relay events and outbound event names."""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar
from uuid import UUID

USER_JOINED = "user-joined"
USER_LEFT = "user-left"
CHAT_MESSAGE = "chat-message"
DRAWING_UPDATE = "drawing-update"
ERROR = "error"

DRAWING_CLEAR = "clear"


class EventKind(Enum):
    """Client-to-server event names accepted on a socket."""

    JOIN_ROOM = "join-room"
    LEAVE_ROOM = "leave-room"
    DRAWING_UPDATE = "drawing-update"
    CHAT_MESSAGE = "chat-message"
    VOICE_TOGGLE = "voice-toggle"
    VOICE_READY = "voice-ready"
    WEBRTC_OFFER = "webrtc-offer"
    WEBRTC_ANSWER = "webrtc-answer"
    WEBRTC_ICE_CANDIDATE = "webrtc-ice-candidate"


@dataclass(frozen=True)
class JoinRoom:
    kind: ClassVar[EventKind] = EventKind.JOIN_ROOM

    room_code: str


@dataclass(frozen=True)
class LeaveRoom:
    kind: ClassVar[EventKind] = EventKind.LEAVE_ROOM


@dataclass(frozen=True)
class DrawingUpdate:
    """A stroke, shape, cursor or clear update.

    ``fields`` holds every other attribute the client sent; they are
    relayed as-is except ``userId``, which the server always stamps.
    """

    kind: ClassVar[EventKind] = EventKind.DRAWING_UPDATE

    type: str
    fields: dict[str, object] = field(default_factory=dict)

    @property
    def is_clear(self) -> bool:
        return self.type == DRAWING_CLEAR

    def relay_payload(self, user_id: UUID) -> dict[str, object]:
        payload = {key: value for key, value in self.fields.items() if key != "userId"}
        payload["type"] = self.type
        payload["userId"] = str(user_id)
        return payload


@dataclass(frozen=True)
class ChatSend:
    kind: ClassVar[EventKind] = EventKind.CHAT_MESSAGE

    text: str


@dataclass(frozen=True)
class VoiceToggle:
    kind: ClassVar[EventKind] = EventKind.VOICE_TOGGLE

    is_enabled: bool


@dataclass(frozen=True)
class VoiceReady:
    kind: ClassVar[EventKind] = EventKind.VOICE_READY


@dataclass(frozen=True)
class PeerSignal:
    """An offer, answer or ICE candidate relayed without inspection."""

    kind: EventKind
    field_name: str
    value: object

    def relay_payload(self, user_id: UUID) -> dict[str, object]:
        return {"userId": str(user_id), self.field_name: self.value}


InboundEvent = (
    JoinRoom
    | LeaveRoom
    | DrawingUpdate
    | ChatSend
    | VoiceToggle
    | VoiceReady
    | PeerSignal
)
