"""Tests for inbound payload validation."""

import pytest

from whiteboard_relay.api.socket_models import parse_event
from whiteboard_relay.domain.errors import InvalidPayload
from whiteboard_relay.domain.events import (
    ChatSend,
    DrawingUpdate,
    EventKind,
    JoinRoom,
    LeaveRoom,
    PeerSignal,
    VoiceReady,
    VoiceToggle,
)


def test_join_room_takes_a_plain_code() -> None:
    assert parse_event(EventKind.JOIN_ROOM, " ROOM42 ") == JoinRoom(room_code="ROOM42")


@pytest.mark.parametrize("data", [None, "", "   ", {"roomCode": "ROOM42"}, 42])
def test_join_room_rejects_non_strings(data) -> None:
    with pytest.raises(InvalidPayload):
        parse_event(EventKind.JOIN_ROOM, data)


def test_drawing_update_keeps_client_fields_with_wire_names() -> None:
    event = parse_event(
        EventKind.DRAWING_UPDATE,
        {
            "type": "draw",
            "x": 10,
            "y": 12,
            "prevX": 9,
            "prevY": 11,
            "color": "#000",
            "strokeWidth": 2,
            "pressure": 0.5,
        },
    )
    assert isinstance(event, DrawingUpdate)
    assert event.type == "draw"
    assert event.fields == {
        "x": 10,
        "y": 12,
        "prevX": 9,
        "prevY": 11,
        "color": "#000",
        "strokeWidth": 2,
        "pressure": 0.5,
    }


@pytest.mark.parametrize("data", [{"type": "erase"}, {"x": 1}, "clear", None])
def test_drawing_update_rejects_unknown_types(data) -> None:
    with pytest.raises(InvalidPayload):
        parse_event(EventKind.DRAWING_UPDATE, data)


def test_chat_message_requires_text() -> None:
    assert parse_event(EventKind.CHAT_MESSAGE, {"text": "hi"}) == ChatSend(text="hi")
    with pytest.raises(InvalidPayload):
        parse_event(EventKind.CHAT_MESSAGE, {"text": ""})
    with pytest.raises(InvalidPayload):
        parse_event(EventKind.CHAT_MESSAGE, {})


def test_voice_events() -> None:
    assert parse_event(EventKind.VOICE_TOGGLE, {"isEnabled": False}) == VoiceToggle(
        is_enabled=False
    )
    assert parse_event(EventKind.VOICE_READY, {"userId": "spoofed"}) == VoiceReady()
    assert parse_event(EventKind.LEAVE_ROOM, None) == LeaveRoom()


def test_signaling_payloads_are_opaque() -> None:
    answer = {"type": "answer", "sdp": "v=0\r\n"}
    event = parse_event(EventKind.WEBRTC_ANSWER, {"answer": answer})
    assert event == PeerSignal(
        kind=EventKind.WEBRTC_ANSWER, field_name="answer", value=answer
    )
    with pytest.raises(InvalidPayload):
        parse_event(EventKind.WEBRTC_ICE_CANDIDATE, {"offer": {}})
