"""SQL implementation of UserRepository."""

import logging

from sqlalchemy import Executable, Result, select, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from carta.domain.auth.model.role import Role
from carta.domain.auth.model.user import User
from carta.domain.auth.model.value import UserId
from carta.domain.auth.port.repository import UserRepository
from carta.domain.shared.error import StorageUnavailableError
from carta.infrastructure.persistence.tables import users_table

logger = logging.getLogger(__name__)


def _escape_like(text: str) -> str:
    """Escape LIKE wildcards so the search matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _row_to_user(row: dict) -> User:
    """Convert a database row to a User model.

    The role column is passed through raw; User maps unknown values to None.
    """
    return User(
        id=UserId(row["id"]),
        username=row["username"],
        role=row["role"],
        created_at=row["created_at"],
    )


class SqlUserRepository(UserRepository):
    """SQLAlchemy Core implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _execute(self, stmt: Executable) -> Result:
        try:
            return await self.session.execute(stmt)
        except OperationalError as e:
            logger.error("User store unavailable: %s", e.orig)
            raise StorageUnavailableError("User store unavailable") from e

    async def get(self, user_id: UserId) -> User | None:
        result = await self._execute(select(users_table).where(users_table.c.id == str(user_id)))
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def get_by_username(self, username: str) -> User | None:
        result = await self._execute(
            select(users_table).where(users_table.c.username == username)
        )
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def list(self, search: str | None = None, limit: int = 100) -> list[User]:
        stmt = select(users_table).order_by(users_table.c.created_at.desc()).limit(limit)
        if search:
            stmt = stmt.where(
                users_table.c.username.ilike(f"%{_escape_like(search)}%", escape="\\")
            )
        result = await self._execute(stmt)
        return [_row_to_user(dict(row)) for row in result.mappings().all()]

    async def update_role(self, user_id: UserId, role: Role) -> None:
        await self._execute(
            update(users_table).where(users_table.c.id == str(user_id)).values(role=role.name)
        )
        await self.session.flush()
