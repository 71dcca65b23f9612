"""Pydantic models for inbound socket payloads."""

from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from whiteboard_relay.domain.errors import InvalidPayload
from whiteboard_relay.domain.events import (
    ChatSend,
    DrawingUpdate,
    EventKind,
    InboundEvent,
    JoinRoom,
    LeaveRoom,
    PeerSignal,
    VoiceReady,
    VoiceToggle,
)


class DrawingUpdatePayload(BaseModel):
    """Drawing update payload; unknown attributes are relayed untouched."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: Literal["draw", "clear", "shape", "cursor"]
    x: float | None = None
    y: float | None = None
    prev_x: float | None = Field(default=None, alias="prevX")
    prev_y: float | None = Field(default=None, alias="prevY")
    width: float | None = None
    height: float | None = None
    color: str | None = None
    stroke_width: float | None = Field(default=None, alias="strokeWidth")
    tool: str | None = None

    def to_event(self) -> DrawingUpdate:
        fields = self.model_dump(by_alias=True, exclude={"type"}, exclude_none=True)
        return DrawingUpdate(type=self.type, fields=fields)


class ChatMessagePayload(BaseModel):
    """Chat message payload."""

    text: str = Field(min_length=1)


class VoiceTogglePayload(BaseModel):
    """Voice presence toggle payload."""

    model_config = ConfigDict(populate_by_name=True)

    is_enabled: bool = Field(alias="isEnabled")


class OfferPayload(BaseModel):
    offer: Any


class AnswerPayload(BaseModel):
    answer: Any


class IceCandidatePayload(BaseModel):
    candidate: Any


def _join_room(data: object) -> JoinRoom:
    if not isinstance(data, str) or not data.strip():
        raise InvalidPayload()
    return JoinRoom(room_code=data.strip())


def _drawing_update(data: object) -> DrawingUpdate:
    return DrawingUpdatePayload.model_validate(data).to_event()


def _chat_message(data: object) -> ChatSend:
    return ChatSend(text=ChatMessagePayload.model_validate(data).text)


def _voice_toggle(data: object) -> VoiceToggle:
    return VoiceToggle(is_enabled=VoiceTogglePayload.model_validate(data).is_enabled)


def _offer(data: object) -> PeerSignal:
    payload = OfferPayload.model_validate(data)
    return PeerSignal(kind=EventKind.WEBRTC_OFFER, field_name="offer", value=payload.offer)


def _answer(data: object) -> PeerSignal:
    payload = AnswerPayload.model_validate(data)
    return PeerSignal(
        kind=EventKind.WEBRTC_ANSWER, field_name="answer", value=payload.answer
    )


def _ice_candidate(data: object) -> PeerSignal:
    payload = IceCandidatePayload.model_validate(data)
    return PeerSignal(
        kind=EventKind.WEBRTC_ICE_CANDIDATE,
        field_name="candidate",
        value=payload.candidate,
    )


_PARSERS: dict[EventKind, Callable[[object], InboundEvent]] = {
    EventKind.JOIN_ROOM: _join_room,
    EventKind.LEAVE_ROOM: lambda _data: LeaveRoom(),
    EventKind.DRAWING_UPDATE: _drawing_update,
    EventKind.CHAT_MESSAGE: _chat_message,
    EventKind.VOICE_TOGGLE: _voice_toggle,
    EventKind.VOICE_READY: lambda _data: VoiceReady(),
    EventKind.WEBRTC_OFFER: _offer,
    EventKind.WEBRTC_ANSWER: _answer,
    EventKind.WEBRTC_ICE_CANDIDATE: _ice_candidate,
}


def parse_event(kind: EventKind, data: object) -> InboundEvent:
    """Validate a raw socket payload into a typed event."""
    try:
        return _PARSERS[kind](data)
    except ValidationError as exc:
        raise InvalidPayload() from exc
