"""Repository ports for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from carta.domain.auth.model.role import Role
from carta.domain.auth.model.user import User
from carta.domain.auth.model.value import UserId
from carta.domain.shared.port import Port


class UserRepository(Port, Protocol):
    """Read/write access to the role-bearing part of user records."""

    @abstractmethod
    async def get(self, user_id: UserId) -> User | None:
        """Get a user by ID."""
        ...

    @abstractmethod
    async def get_by_username(self, username: str) -> User | None:
        """Get a user by exact username."""
        ...

    @abstractmethod
    async def list(self, search: str | None = None, limit: int = 100) -> list[User]:
        """List users, newest first, optionally filtered by a case-insensitive
        substring of the username."""
        ...

    @abstractmethod
    async def update_role(self, user_id: UserId, role: Role) -> None:
        """Persist a new role for the user."""
        ...
