"""Role service: reads and changes the role stored on user records."""

import logging
from typing import Any

from pydantic import BaseModel

from carta.domain.auth.model.role import Role
from carta.domain.auth.model.user import User
from carta.domain.auth.port.repository import UserRepository
from carta.domain.auth.model.value import UserId
from carta.domain.shared.error import ConflictError, NotFoundError, ValidationError
from carta.domain.shared.service import Service

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 500


class RoleChange(BaseModel):
    """Outcome of a role update."""

    username: str
    previous: Role | None
    current: Role


class RoleService(Service):
    """Manages the role of existing users."""

    _user_repo: UserRepository

    async def get_user(self, username: str) -> User:
        """Load a user by username. Raises NotFoundError if missing."""
        user = await self._user_repo.get_by_username(username)
        if user is None:
            raise NotFoundError(f'User "{username}" not found', code="user_not_found")
        return user

    async def get_role(self, username: str) -> Role | None:
        user = await self.get_user(username)
        return user.role

    async def set_role(
        self, username: str, role: Any, *, actor: UserId | None = None
    ) -> RoleChange:
        """Set the role of a user.

        ``role`` is parsed strictly: anything other than USER, MODERATOR or
        ADMIN raises ValidationError before the user is looked up.
        ``actor`` is the admin making the change; an admin cannot take
        ADMIN away from themselves (ConflictError).
        """
        new_role = Role.from_token(role)
        user = await self.get_user(username)

        if actor is not None and actor == user.id and new_role is not Role.ADMIN:
            raise ConflictError("Admins cannot remove their own ADMIN role", code="self_demotion")

        if user.role is not new_role:
            await self._user_repo.update_role(user.id, new_role)

        logger.info(
            "Role updated: username=%s previous=%s current=%s",
            username,
            user.role.name if user.role else None,
            new_role.name,
        )
        return RoleChange(username=user.username, previous=user.role, current=new_role)

    async def list_users(self, search: str | None = None, limit: int = 100) -> list[User]:
        if limit < 1 or limit > MAX_LIST_LIMIT:
            raise ValidationError(
                f"limit must be between 1 and {MAX_LIST_LIMIT}", field="limit"
            )
        return await self._user_repo.list(search=search or None, limit=limit)
