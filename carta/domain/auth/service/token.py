"""Token service for session JWT creation and validation."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from carta.config import JwtConfig
from carta.domain.auth.model.value import UserId
from carta.domain.shared.service import Service

logger = logging.getLogger(__name__)

AUDIENCE = "authenticated"


class TokenService(Service):
    """Issues and validates HS256 access tokens.

    Tokens carry only the subject. The role is never read from a token; it is
    looked up from the user record on every request.
    """

    _config: JwtConfig

    def create_access_token(
        self,
        user_id: UserId,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        """Create a JWT access token for the given user."""
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._config.access_token_expire_minutes)

        payload = {
            "sub": str(user_id),
            "aud": AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }

        if additional_claims:
            payload.update(additional_claims)

        return jwt.encode(
            payload,
            self._config.secret,
            algorithm=self._config.algorithm,
        )

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate and decode a JWT access token.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        return jwt.decode(
            token,
            self._config.secret,
            algorithms=[self._config.algorithm],
            audience=AUDIENCE,
        )
