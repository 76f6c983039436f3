"""DI provider for auth domain."""

import logging

import jwt
from dishka import Provider, from_context, provide
from starlette.requests import Request

from carta.config import Config
from carta.domain.auth.model.identity import Anonymous, Identity
from carta.domain.auth.model.principal import Principal
from carta.domain.auth.model.value import UserId
from carta.domain.auth.port.repository import UserRepository
from carta.domain.auth.service.role import RoleService
from carta.domain.auth.service.token import TokenService
from carta.domain.shared.authorization.policy_set import POLICY_SET, PolicySet
from carta.util.di.scope import Scope

logger = logging.getLogger(__name__)


class AuthProvider(Provider):
    """DI provider for auth domain services and request identity."""

    request = from_context(provides=Request, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_policy_set(self) -> PolicySet:
        return POLICY_SET

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    def get_role_service(self, user_repo: UserRepository) -> RoleService:
        return RoleService(_user_repo=user_repo)

    @provide(scope=Scope.UOW)
    async def get_identity(
        self,
        request: Request,
        token_service: TokenService,
        user_repo: UserRepository,
    ) -> Identity:
        """Resolve Identity from the bearer token plus a user record lookup.

        Returns Anonymous for missing, invalid or expired tokens and for
        tokens whose subject no longer exists. The role always comes from
        the user record, never from the token.
        """
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return Anonymous()

        token = auth_header[7:]  # Remove "Bearer " prefix

        try:
            payload = token_service.validate_access_token(token)
            user_id = UserId(payload["sub"])
        except (jwt.InvalidTokenError, KeyError, ValueError):
            logger.debug("Rejected bearer token on %s", request.url.path)
            return Anonymous()

        user = await user_repo.get(user_id)
        if user is None:
            logger.info("Token subject %s has no user record", user_id)
            return Anonymous()

        logger.debug(
            "Identity resolved: user_id=%s, role=%s",
            user.id,
            user.role.name if user.role else None,
        )
        return Principal(user_id=user.id, username=user.username, role=user.role)
