"""Connection authentication for socket handshakes."""

import asyncio
import logging
from dataclasses import dataclass
from uuid import UUID

import jwt

from whiteboard_relay.domain.errors import AuthenticationError
from whiteboard_relay.domain.models import UserRecord
from whiteboard_relay.services.users import UserRepository

logger = logging.getLogger(__name__)

_USER_ID_CLAIMS = ("_id", "sub")


@dataclass
class ConnectionAuthenticator:
    """Validate bearer tokens presented at connect time."""

    user_repository: UserRepository
    secret: str
    algorithm: str = "HS256"

    async def authenticate(self, token: str | None) -> UserRecord:
        """Return the user for a valid token.

        Every failure raises the same ``AuthenticationError`` so clients
        cannot tell a bad signature from an unknown identity.
        """
        if not token:
            raise AuthenticationError()
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as exc:
            logger.info("Rejected socket token: %s", exc)
            raise AuthenticationError() from exc

        user_id = _extract_user_id(claims)
        if user_id is None:
            raise AuthenticationError()
        try:
            user = await asyncio.to_thread(self.user_repository.get_user, user_id)
        except Exception as exc:
            logger.exception("User lookup failed during socket authentication")
            raise AuthenticationError() from exc
        if user is None:
            raise AuthenticationError()
        return user


def _extract_user_id(claims: dict[str, object]) -> UUID | None:
    for claim in _USER_ID_CLAIMS:
        value = claims.get(claim)
        if value is None:
            continue
        try:
            return UUID(str(value))
        except ValueError:
            return None
    return None
