"""Application factory: FastAPI routes with the Socket.IO relay in front."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import socketio
from fastapi import FastAPI

from whiteboard_relay.api.admin import router as admin_router
from whiteboard_relay.api.gateway import SocketGateway, register_gateway
from whiteboard_relay.app_logging import configure_logging
from whiteboard_relay.containers import AppContainer


def create_api(container: AppContainer) -> FastAPI:
    """Create the HTTP side of the service."""
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Relay starting in %s", container.settings.environment)
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def create_app(container: AppContainer) -> socketio.ASGIApp:
    """Create the ASGI app serving Socket.IO and the HTTP routes."""
    configure_logging()
    gateway = SocketGateway(
        authenticator=container.authenticator,
        session_manager=container.session_manager,
        relay=container.relay,
    )
    register_gateway(container.socket_server, gateway)
    return socketio.ASGIApp(
        container.socket_server,
        other_asgi_app=create_api(container),
        socketio_path=container.settings.socketio_path,
    )
