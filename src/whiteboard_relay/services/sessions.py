"""Session lifecycle: connect, join, leave and disconnect."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from whiteboard_relay.domain.events import InboundEvent
from whiteboard_relay.domain.models import UserRecord
from whiteboard_relay.domain.sessions import ConnectionSession, SessionState
from whiteboard_relay.services.rooms import RoomMembershipService

logger = logging.getLogger(__name__)

Dispatch = Callable[[ConnectionSession, InboundEvent], Awaitable[None]]


@dataclass
class SessionMailbox:
    """Inbound queue and worker that process one session's events in order."""

    session: ConnectionSession
    dispatch: Dispatch
    queue: asyncio.Queue = field(default_factory=asyncio.Queue)
    task: asyncio.Task | None = None

    def start(self) -> None:
        self.task = asyncio.get_running_loop().create_task(
            self._run(), name=f"mailbox-{self.session.sid}"
        )

    def put(self, event: InboundEvent) -> bool:
        """Queue an event; returns False once the session is closed."""
        if self.session.is_closed:
            return False
        self.queue.put_nowait(event)
        return True

    def close(self) -> None:
        self.queue.put_nowait(None)

    async def drain(self) -> None:
        """Wait until every queued event has been handled."""
        await self.queue.join()

    async def join(self) -> None:
        """Wait for the worker to finish."""
        if self.task is not None:
            await self.task

    async def _run(self) -> None:
        while True:
            event = await self.queue.get()
            try:
                if event is None or self.session.is_closed:
                    return
                await self.dispatch(self.session, event)
            except Exception:
                logger.exception(
                    "Dispatch failed for %s on %s",
                    event.kind.value,
                    self.session.sid,
                )
            finally:
                self.queue.task_done()


@dataclass
class SessionManager:
    """Own per-connection state and its transitions."""

    membership: RoomMembershipService
    sessions: dict[str, ConnectionSession] = field(default_factory=dict)
    mailboxes: dict[str, SessionMailbox] = field(default_factory=dict)
    closing: set[asyncio.Task] = field(default_factory=set)

    def open(self, sid: str, user: UserRecord, dispatch: Dispatch) -> ConnectionSession:
        """Register an authenticated connection and start its mailbox."""
        session = ConnectionSession(sid=sid, user=user)
        mailbox = SessionMailbox(session=session, dispatch=dispatch)
        self.sessions[sid] = session
        self.mailboxes[sid] = mailbox
        mailbox.start()
        return session

    def get(self, sid: str) -> ConnectionSession | None:
        """Return the live session for a sid, if any."""
        return self.sessions.get(sid)

    def submit(self, sid: str, event: InboundEvent) -> bool:
        """Queue an inbound event for a live session."""
        mailbox = self.mailboxes.get(sid)
        if mailbox is None:
            return False
        return mailbox.put(event)

    def list_sessions(self, room_code: str | None = None) -> list[ConnectionSession]:
        """Return live sessions, optionally only those joined to a room."""
        sessions = list(self.sessions.values())
        if room_code is None:
            return sessions
        return [session for session in sessions if session.active_room == room_code]

    async def join(self, session: ConnectionSession, room_code: str) -> None:
        """Join a room, leaving the previous one on a room switch."""
        await self.membership.authorize(session.user, room_code)
        if session.is_closed:
            return
        previous = session.active_room
        if previous is not None and previous != room_code:
            await self.leave(session)
            if session.is_closed:
                return
        session.room_code = room_code
        session.state = SessionState.JOINED
        await self.membership.add_member(session.sid, session.user, room_code)
        logger.info("%s joined room %s", session.user.username, room_code)

    async def leave(self, session: ConnectionSession) -> str | None:
        """Leave the current room; returns the room left, if any."""
        room_code = session.active_room
        if room_code is None:
            return None
        session.room_code = None
        session.state = SessionState.AUTHENTICATED
        await self.membership.remove_member(session.sid, session.user, room_code)
        logger.info("%s left room %s", session.user.username, room_code)
        return room_code

    async def disconnect(self, sid: str) -> ConnectionSession | None:
        """Close a session and notify its last room, if it had joined one."""
        session = self.sessions.pop(sid, None)
        mailbox = self.mailboxes.pop(sid, None)
        if session is None:
            return None
        room_code = session.active_room
        session.state = SessionState.CLOSED
        if mailbox is not None:
            mailbox.close()
            self._track_closing(mailbox)
        if room_code is not None:
            await self.membership.remove_member(sid, session.user, room_code)
        logger.info("User %s disconnected", session.user.username)
        return session

    def _track_closing(self, mailbox: SessionMailbox) -> None:
        """Hold a closed mailbox's worker until its in-flight event finishes."""
        task = mailbox.task
        if task is None or task.done():
            return
        self.closing.add(task)
        task.add_done_callback(self.closing.discard)

    async def shutdown(self) -> None:
        """Close every session without notices and stop the workers."""
        mailboxes = list(self.mailboxes.values())
        for session in self.sessions.values():
            session.state = SessionState.CLOSED
        self.sessions.clear()
        self.mailboxes.clear()
        for mailbox in mailboxes:
            mailbox.close()
            if mailbox.task is not None:
                mailbox.task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await mailbox.task
        for task in list(self.closing):
            with contextlib.suppress(asyncio.CancelledError):
                await task
