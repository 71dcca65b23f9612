"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    access_token_secret: str
    jwt_algorithm: str = "HS256"
    admin_token: str
    cors_allowed_origins: str = "*"
    socketio_path: str = "socket.io"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> str | list[str]:
    """Parse the CORS origin list; ``*`` or empty allows every origin."""
    if raw is None:
        return "*"
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return "*"
    origins = [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
    return origins or "*"
