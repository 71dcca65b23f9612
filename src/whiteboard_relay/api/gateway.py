"""Socket.IO event wiring for the relay."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import socketio
from socketio import exceptions as socketio_exceptions

from whiteboard_relay.api.socket_models import parse_event
from whiteboard_relay.domain.errors import AuthenticationError, InvalidPayload
from whiteboard_relay.domain.events import EventKind
from whiteboard_relay.services.auth import ConnectionAuthenticator
from whiteboard_relay.services.relay import EventRelay
from whiteboard_relay.services.sessions import SessionManager

logger = logging.getLogger(__name__)


@dataclass
class SocketGateway:
    """Translate transport callbacks into session and relay calls."""

    authenticator: ConnectionAuthenticator
    session_manager: SessionManager
    relay: EventRelay

    async def connect(
        self, sid: str, environ: dict[str, object], auth: object = None
    ) -> None:
        """Authenticate the handshake or refuse the connection."""
        try:
            user = await self.authenticator.authenticate(_extract_token(auth))
        except AuthenticationError as exc:
            raise socketio_exceptions.ConnectionRefusedError(exc.message) from exc
        self.session_manager.open(sid, user, self.relay.dispatch)
        logger.info("User %s connected", user.username)

    async def disconnect(self, sid: str, reason: object = None) -> None:
        await self.session_manager.disconnect(sid)

    async def receive(self, kind: EventKind, sid: str, data: object = None) -> None:
        """Validate an inbound payload and queue it on the session's mailbox."""
        if self.session_manager.get(sid) is None:
            return
        try:
            event = parse_event(kind, data)
        except InvalidPayload as exc:
            logger.info("Invalid %s payload from %s", kind.value, sid)
            await self.relay.report_error(sid, exc.message)
            return
        self.session_manager.submit(sid, event)


def _extract_token(auth: object) -> str | None:
    if isinstance(auth, dict):
        token = auth.get("token")
        if isinstance(token, str):
            return token
    return None


def register_gateway(server: socketio.AsyncServer, gateway: SocketGateway) -> None:
    """Register connect, disconnect and every relay event on the server."""
    server.on("connect", handler=gateway.connect)
    server.on("disconnect", handler=gateway.disconnect)
    for kind in EventKind:
        server.on(kind.value, handler=_event_handler(gateway, kind))


def _event_handler(
    gateway: SocketGateway, kind: EventKind
) -> Callable[[str, object], Awaitable[None]]:
    async def handler(sid: str, data: object = None) -> None:
        await gateway.receive(kind, sid, data)

    return handler
