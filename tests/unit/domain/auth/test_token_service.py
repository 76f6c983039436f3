"""Unit tests for access token signing/verification."""

import jwt
import pytest

from carta.config import JwtConfig
from carta.domain.auth.model.value import UserId
from carta.domain.auth.service.token import TokenService


@pytest.fixture
def token_service() -> TokenService:
    config = JwtConfig(
        secret="test-secret-key-for-signing-min-32",
        algorithm="HS256",
        access_token_expire_minutes=15,
    )
    return TokenService(_config=config)


class TestAccessToken:
    def test_round_trip_subject(self, token_service: TokenService) -> None:
        token = token_service.create_access_token(UserId("usr_ana"))

        payload = token_service.validate_access_token(token)

        assert payload["sub"] == "usr_ana"
        assert payload["aud"] == "authenticated"

    def test_rejects_other_secret(self, token_service: TokenService) -> None:
        other = TokenService(_config=JwtConfig(secret="a-completely-different-secret-32b"))
        token = other.create_access_token(UserId("usr_ana"))

        with pytest.raises(jwt.InvalidTokenError):
            token_service.validate_access_token(token)

    def test_rejects_expired(self) -> None:
        service = TokenService(
            _config=JwtConfig(
                secret="test-secret-key-for-signing-min-32",
                access_token_expire_minutes=-1,
            )
        )
        token = service.create_access_token(UserId("usr_ana"))

        with pytest.raises(jwt.ExpiredSignatureError):
            service.validate_access_token(token)
