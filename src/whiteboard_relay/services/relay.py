"""Event relay: one dispatch table keyed by event kind."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from whiteboard_relay.domain.errors import RelayError
from whiteboard_relay.domain.events import (
    CHAT_MESSAGE,
    DRAWING_UPDATE,
    ERROR,
    ChatSend,
    DrawingUpdate,
    EventKind,
    InboundEvent,
    JoinRoom,
    PeerSignal,
    VoiceToggle,
)
from whiteboard_relay.domain.sessions import ConnectionSession
from whiteboard_relay.services.broadcast import Broadcaster
from whiteboard_relay.services.persistence import DurableWriter
from whiteboard_relay.services.sessions import SessionManager

logger = logging.getLogger(__name__)

Handler = Callable[[ConnectionSession, InboundEvent], Awaitable[None]]

_FAILURE_MESSAGES = {
    EventKind.JOIN_ROOM: "Failed to join room",
    EventKind.DRAWING_UPDATE: "Failed to update drawing",
    EventKind.CHAT_MESSAGE: "Failed to send message",
}
_DEFAULT_FAILURE = "Failed to relay event"


@dataclass
class EventRelay:
    """Route inbound events to the right peer set."""

    sessions: SessionManager
    writer: DurableWriter
    broadcaster: Broadcaster
    _handlers: dict[EventKind, Handler] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._handlers = {
            EventKind.JOIN_ROOM: self._join_room,
            EventKind.LEAVE_ROOM: self._leave_room,
            EventKind.DRAWING_UPDATE: self._drawing_update,
            EventKind.CHAT_MESSAGE: self._chat_message,
            EventKind.VOICE_TOGGLE: self._voice_toggle,
            EventKind.VOICE_READY: self._voice_ready,
            EventKind.WEBRTC_OFFER: self._peer_signal,
            EventKind.WEBRTC_ANSWER: self._peer_signal,
            EventKind.WEBRTC_ICE_CANDIDATE: self._peer_signal,
        }
        missing = set(EventKind) - set(self._handlers)
        if missing:
            names = ", ".join(sorted(kind.value for kind in missing))
            raise RuntimeError(f"No relay handler for: {names}")

    async def dispatch(self, session: ConnectionSession, event: InboundEvent) -> None:
        """Handle one event; failures are reported to the sender only."""
        if session.is_closed:
            return
        handler = self._handlers[event.kind]
        try:
            await handler(session, event)
        except RelayError as exc:
            await self.report_error(session.sid, exc.message)
        except Exception:
            logger.exception(
                "Unexpected error handling %s from %s",
                event.kind.value,
                session.user.username,
            )
            await self.report_error(
                session.sid, _FAILURE_MESSAGES.get(event.kind, _DEFAULT_FAILURE)
            )

    async def report_error(self, sid: str, message: str) -> None:
        """Send a targeted error notice to one session."""
        try:
            await self.broadcaster.emit(ERROR, message, to=sid)
        except Exception:
            logger.exception("Could not deliver error notice to %s", sid)

    async def _relay_to_peers(
        self, session: ConnectionSession, event_name: str, payload: dict[str, object]
    ) -> None:
        room_code = session.active_room
        if room_code is None:
            return
        await self.broadcaster.emit(
            event_name, payload, room=room_code, skip_sid=session.sid
        )

    async def _join_room(self, session: ConnectionSession, event: JoinRoom) -> None:
        logger.info(
            "User %s attempting to join room: %s", session.user.username, event.room_code
        )
        await self.sessions.join(session, event.room_code)

    async def _leave_room(self, session: ConnectionSession, event: InboundEvent) -> None:
        await self.sessions.leave(session)

    async def _drawing_update(
        self, session: ConnectionSession, event: DrawingUpdate
    ) -> None:
        room_code = session.active_room
        if room_code is None:
            logger.debug("Dropping drawing update from %s outside a room", session.sid)
            return
        await self.broadcaster.emit(
            DRAWING_UPDATE,
            event.relay_payload(session.user.id),
            room=room_code,
            skip_sid=session.sid,
        )
        if event.is_clear:
            await self.writer.clear_board(room_code, session.user)

    async def _chat_message(self, session: ConnectionSession, event: ChatSend) -> None:
        room_code = session.active_room
        if room_code is None:
            logger.debug("Dropping chat message from %s outside a room", session.sid)
            return
        message = await self.writer.persist_chat(room_code, session.user, event.text)
        await self.broadcaster.emit(CHAT_MESSAGE, message.to_payload(), room=room_code)

    async def _voice_toggle(self, session: ConnectionSession, event: VoiceToggle) -> None:
        await self._relay_to_peers(
            session,
            EventKind.VOICE_TOGGLE.value,
            {
                "userId": str(session.user.id),
                "username": session.user.username,
                "isEnabled": event.is_enabled,
            },
        )

    async def _voice_ready(self, session: ConnectionSession, event: InboundEvent) -> None:
        await self._relay_to_peers(
            session,
            EventKind.VOICE_READY.value,
            {"userId": str(session.user.id), "username": session.user.username},
        )

    async def _peer_signal(self, session: ConnectionSession, event: PeerSignal) -> None:
        await self._relay_to_peers(
            session, event.kind.value, event.relay_payload(session.user.id)
        )
