"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from whiteboard_relay.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health(request: Request) -> dict[str, object]:
    """Admin health check with the live session count."""
    container: AppContainer = request.app.state.container
    return {
        "status": "ok",
        "sessions": len(container.session_manager.list_sessions()),
    }


@router.get("/sessions", dependencies=[Depends(require_admin)])
async def list_sessions(request: Request) -> dict[str, object]:
    """Return every live socket session."""
    container: AppContainer = request.app.state.container
    sessions = container.session_manager.list_sessions()
    return {"sessions": [session.summary() for session in sessions]}


@router.get("/rooms/{room_code}/sessions", dependencies=[Depends(require_admin)])
async def list_room_sessions(room_code: str, request: Request) -> dict[str, object]:
    """Return the live sessions joined to one room."""
    container: AppContainer = request.app.state.container
    sessions = container.session_manager.list_sessions(room_code)
    return {
        "room_code": room_code,
        "sessions": [session.summary() for session in sessions],
    }
