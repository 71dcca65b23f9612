"""ASGI entrypoint for the whiteboard relay."""

from whiteboard_relay.api.app import create_app
from whiteboard_relay.containers import build_container

app = create_app(build_container())
