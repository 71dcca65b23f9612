"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import jwt
import pytest
import socketio

from whiteboard_relay.config import Settings
from whiteboard_relay.containers import AppContainer
from whiteboard_relay.domain.chat import ChatMessage
from whiteboard_relay.domain.models import RoomRecord, UserRecord
from whiteboard_relay.services.audit import AuditRepository, AuditService
from whiteboard_relay.services.auth import ConnectionAuthenticator
from whiteboard_relay.services.persistence import (
    BoardRepository,
    ChatRepository,
    DurableWriter,
)
from whiteboard_relay.services.relay import EventRelay
from whiteboard_relay.services.rooms import RoomMembershipService, RoomRepository
from whiteboard_relay.services.sessions import SessionManager
from whiteboard_relay.services.users import UserRepository

SECRET = "test-access-token-secret-0123456789abcdef"

ALICE = UserRecord(
    id=UUID("00000000-0000-4000-8000-00000000a11c"),
    username="alice",
    avatar="alice.png",
)
BOB = UserRecord(id=UUID("00000000-0000-4000-8000-000000000b0b"), username="bob")
CAROL = UserRecord(id=UUID("00000000-0000-4000-8000-0000000ca201"), username="carol")


def make_token(user_id: UUID | str, secret: str = SECRET) -> str:
    return jwt.encode({"_id": str(user_id)}, secret, algorithm="HS256")


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)


@dataclass
class InMemoryRoomRepository(RoomRepository):
    """In-memory room repository for tests."""

    rooms: dict[str, RoomRecord] = field(default_factory=dict)
    lookups: list[str] = field(default_factory=list)

    def get_by_code(self, room_code: str) -> RoomRecord | None:
        self.lookups.append(room_code)
        return self.rooms.get(room_code)

    def add_room(self, room_code: str, *participants: UserRecord) -> RoomRecord:
        room = RoomRecord(
            id=uuid4(),
            room_code=room_code,
            participant_ids=frozenset(user.id for user in participants),
        )
        self.rooms[room_code] = room
        return room

    def add_participant(self, room_code: str, user: UserRecord) -> None:
        room = self.rooms[room_code]
        self.rooms[room_code] = RoomRecord(
            id=room.id,
            room_code=room.room_code,
            participant_ids=room.participant_ids | {user.id},
        )


@dataclass
class InMemoryChatRepository(ChatRepository):
    """In-memory chat repository that joins sender fields on read."""

    users: InMemoryUserRepository
    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)
    fail_inserts: bool = False

    def create_message(self, room_id: UUID, sender_id: UUID, message: str) -> UUID:
        if self.fail_inserts:
            raise RuntimeError("insert failed")
        message_id = uuid4()
        self.rows[message_id] = {
            "room_id": room_id,
            "sender_id": sender_id,
            "message": message,
            "created_at": datetime.now(tz=UTC),
        }
        return message_id

    def get_message(self, message_id: UUID) -> ChatMessage | None:
        row = self.rows.get(message_id)
        if row is None:
            return None
        return ChatMessage(
            id=message_id,
            room_id=row["room_id"],
            sender=self.users.users[row["sender_id"]],
            message=row["message"],
            created_at=row["created_at"],
        )


@dataclass
class InMemoryBoardRepository(BoardRepository):
    """In-memory board repository for tests."""

    boards: dict[UUID, UUID] = field(default_factory=dict)
    cleared: list[tuple[UUID, UUID]] = field(default_factory=list)
    fail_clears: bool = False

    def get_board_id(self, room_id: UUID) -> UUID | None:
        return self.boards.get(room_id)

    def clear_board(self, board_id: UUID, actor_id: UUID) -> None:
        if self.fail_clears:
            raise RuntimeError("update failed")
        self.cleared.append((board_id, actor_id))


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    events: list[dict[str, object]] = field(default_factory=list)

    def create_board_cleared(
        self, actor_id: UUID, board_id: UUID, room_code: str
    ) -> None:
        self.events.append(
            {
                "user_id": actor_id,
                "entity_id": board_id,
                "event_type": "board_cleared",
                "room_code": room_code,
            }
        )


@dataclass
class FakeBroadcaster:
    """Broadcaster that tracks room membership and records deliveries."""

    rooms: dict[str, set[str]] = field(default_factory=dict)
    emitted: list[dict[str, object]] = field(default_factory=list)
    inboxes: dict[str, list[tuple[str, object]]] = field(default_factory=dict)

    async def emit(
        self,
        event: str,
        payload: object,
        *,
        room: str | None = None,
        to: str | None = None,
        skip_sid: str | None = None,
    ) -> None:
        self.emitted.append(
            {
                "event": event,
                "payload": payload,
                "room": room,
                "to": to,
                "skip_sid": skip_sid,
            }
        )
        recipients = {to} if to is not None else set(self.rooms.get(room or "", set()))
        recipients.discard(skip_sid)
        for sid in recipients:
            self.inboxes.setdefault(sid, []).append((event, payload))

    async def enter_room(self, sid: str, room: str) -> None:
        self.rooms.setdefault(room, set()).add(sid)

    async def leave_room(self, sid: str, room: str) -> None:
        self.rooms.get(room, set()).discard(sid)

    def received(self, sid: str, event: str | None = None) -> list[object]:
        return [
            payload
            for name, payload in self.inboxes.get(sid, [])
            if event is None or name == event
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        access_token_secret=SECRET,
        admin_token="admin-token",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository(
        users={user.id: user for user in (ALICE, BOB, CAROL)}
    )


@pytest.fixture
def room_repository() -> InMemoryRoomRepository:
    repository = InMemoryRoomRepository()
    repository.add_room("ROOM42", ALICE, CAROL)
    return repository


@pytest.fixture
def chat_repository(user_repository: InMemoryUserRepository) -> InMemoryChatRepository:
    return InMemoryChatRepository(users=user_repository)


@pytest.fixture
def board_repository(room_repository: InMemoryRoomRepository) -> InMemoryBoardRepository:
    room = room_repository.rooms["ROOM42"]
    return InMemoryBoardRepository(boards={room.id: uuid4()})


@pytest.fixture
def audit_repository() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def broadcaster() -> FakeBroadcaster:
    return FakeBroadcaster()


@pytest.fixture
def membership(
    room_repository: InMemoryRoomRepository, broadcaster: FakeBroadcaster
) -> RoomMembershipService:
    return RoomMembershipService(repository=room_repository, broadcaster=broadcaster)


@pytest.fixture
def session_manager(membership: RoomMembershipService) -> SessionManager:
    return SessionManager(membership)


@pytest.fixture
def writer(
    membership: RoomMembershipService,
    chat_repository: InMemoryChatRepository,
    board_repository: InMemoryBoardRepository,
    audit_repository: InMemoryAuditRepository,
) -> DurableWriter:
    return DurableWriter(
        rooms=membership,
        chat_repository=chat_repository,
        board_repository=board_repository,
        audit_service=AuditService(audit_repository),
    )


@pytest.fixture
def relay(
    session_manager: SessionManager,
    writer: DurableWriter,
    broadcaster: FakeBroadcaster,
) -> EventRelay:
    return EventRelay(sessions=session_manager, writer=writer, broadcaster=broadcaster)


@pytest.fixture
def authenticator(user_repository: InMemoryUserRepository) -> ConnectionAuthenticator:
    return ConnectionAuthenticator(user_repository=user_repository, secret=SECRET)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    broadcaster: FakeBroadcaster,
    authenticator: ConnectionAuthenticator,
    membership: RoomMembershipService,
    session_manager: SessionManager,
    writer: DurableWriter,
    relay: EventRelay,
) -> AppContainer:
    async def close_resources() -> None:
        await session_manager.shutdown()

    return AppContainer(
        settings=settings,
        socket_server=socketio.AsyncServer(async_mode="asgi"),
        broadcaster=broadcaster,
        authenticator=authenticator,
        membership=membership,
        session_manager=session_manager,
        writer=writer,
        relay=relay,
        close_resources=close_resources,
    )
