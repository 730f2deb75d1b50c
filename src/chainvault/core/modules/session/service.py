from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt

from chainvault.core.core import Service
from chainvault.core.modules.session.models import AuthToken, SessionClaims
from chainvault.errors import InvalidTokenError
from chainvault.utils import now


class SessionService(Service):
    """Mints and verifies self-contained session tokens (JWT).

    Tokens are not stored server-side and cannot be revoked before expiry.
    """

    def create_token(self, user_id: UUID) -> AuthToken:
        """Create a signed token for the user, valid for `token_expire_seconds`."""
        config = self.core.config
        issued_at = now()
        payload: dict[str, Any] = {
            "user_id": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + timedelta(seconds=config.token_expire_seconds)).timestamp()),
        }
        return AuthToken(jwt.encode(payload, config.token_secret_key, algorithm=config.token_algorithm))

    def decode_token(self, auth_token: AuthToken) -> SessionClaims:
        """Verify signature and expiry and return the token claims.

        Raises:
            InvalidTokenError: If the token is malformed, tampered with, expired,
                or missing the user_id claim
        """
        config = self.core.config
        try:
            payload = jwt.decode(
                auth_token,
                config.token_secret_key,
                algorithms=[config.token_algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError from e

        try:
            user_id = UUID(str(payload["user_id"]))
        except (KeyError, ValueError) as e:
            raise InvalidTokenError("Invalid token payload") from e

        return SessionClaims(
            user_id=user_id,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
