"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import socketio
from supabase import create_client

from whiteboard_relay.adapters.socketio_broadcaster import SocketIOBroadcaster
from whiteboard_relay.adapters.supabase_audit_repository import SupabaseAuditRepository
from whiteboard_relay.adapters.supabase_board_repository import SupabaseBoardRepository
from whiteboard_relay.adapters.supabase_chat_repository import SupabaseChatRepository
from whiteboard_relay.adapters.supabase_room_repository import SupabaseRoomRepository
from whiteboard_relay.adapters.supabase_user_repository import SupabaseUserRepository
from whiteboard_relay.config import Settings, parse_allowed_origins
from whiteboard_relay.services.audit import AuditService
from whiteboard_relay.services.auth import ConnectionAuthenticator
from whiteboard_relay.services.broadcast import Broadcaster
from whiteboard_relay.services.persistence import DurableWriter
from whiteboard_relay.services.relay import EventRelay
from whiteboard_relay.services.rooms import RoomMembershipService
from whiteboard_relay.services.sessions import SessionManager


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    socket_server: socketio.AsyncServer
    broadcaster: Broadcaster
    authenticator: ConnectionAuthenticator
    membership: RoomMembershipService
    session_manager: SessionManager
    writer: DurableWriter
    relay: EventRelay
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    socket_server = socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=parse_allowed_origins(
            resolved_settings.cors_allowed_origins
        ),
    )
    broadcaster = SocketIOBroadcaster(socket_server)
    authenticator = ConnectionAuthenticator(
        user_repository=SupabaseUserRepository(supabase_client),
        secret=resolved_settings.access_token_secret,
        algorithm=resolved_settings.jwt_algorithm,
    )
    membership = RoomMembershipService(
        repository=SupabaseRoomRepository(supabase_client),
        broadcaster=broadcaster,
    )
    session_manager = SessionManager(membership)
    writer = DurableWriter(
        rooms=membership,
        chat_repository=SupabaseChatRepository(supabase_client),
        board_repository=SupabaseBoardRepository(supabase_client),
        audit_service=AuditService(SupabaseAuditRepository(supabase_client)),
    )
    relay = EventRelay(
        sessions=session_manager,
        writer=writer,
        broadcaster=broadcaster,
    )

    async def close_resources() -> None:
        await session_manager.shutdown()

    return AppContainer(
        settings=resolved_settings,
        socket_server=socket_server,
        broadcaster=broadcaster,
        authenticator=authenticator,
        membership=membership,
        session_manager=session_manager,
        writer=writer,
        relay=relay,
        close_resources=close_resources,
    )
