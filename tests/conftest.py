"""Global test fixtures."""

import os
from datetime import UTC, datetime, timedelta

import pytest
from dishka import Provider, provide

# Set before any test module builds a Config
os.environ.setdefault("CARTA_AUTH__JWT__SECRET", "test-secret-for-unit-tests-min-32")
os.environ.setdefault("CARTA_DATABASE__URL", "sqlite+aiosqlite:///:memory:")

from carta.domain.auth.model.role import Role  # noqa: E402
from carta.domain.auth.model.user import User  # noqa: E402
from carta.domain.auth.model.value import UserId  # noqa: E402
from carta.domain.auth.port.repository import UserRepository  # noqa: E402
from carta.util.di.scope import Scope  # noqa: E402


class InMemoryUserRepository(UserRepository):
    """Dict-backed UserRepository for unit tests."""

    def __init__(self, users: list[User] | None = None) -> None:
        self.users: dict[str, User] = {str(u.id): u for u in users or []}
        self.role_updates: list[tuple[UserId, Role]] = []

    async def get(self, user_id: UserId) -> User | None:
        return self.users.get(str(user_id))

    async def get_by_username(self, username: str) -> User | None:
        return next((u for u in self.users.values() if u.username == username), None)

    async def list(self, search: str | None = None, limit: int = 100) -> list[User]:
        users = sorted(
            self.users.values(),
            key=lambda u: u.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )
        if search:
            users = [u for u in users if search.lower() in u.username.lower()]
        return users[:limit]

    async def update_role(self, user_id: UserId, role: Role) -> None:
        self.role_updates.append((user_id, role))
        user = self.users[str(user_id)]
        self.users[str(user_id)] = user.model_copy(update={"role": role})


class StaticUserRepositoryProvider(Provider):
    """Overrides the SQL repository with a fixed in-memory instance."""

    def __init__(self, repo: UserRepository) -> None:
        super().__init__()
        self._repo = repo

    @provide(scope=Scope.UOW)
    def get_user_repo(self) -> UserRepository:
        return self._repo


def make_user(username: str, role: Role | str | None, *, days_ago: int = 0) -> User:
    return User(
        id=UserId(f"usr_{username}"),
        username=username,
        role=role,
        created_at=datetime.now(UTC) - timedelta(days=days_ago),
    )


@pytest.fixture
def users() -> list[User]:
    return [
        make_user("ana", Role.ADMIN, days_ago=30),
        make_user("mod", Role.MODERATOR, days_ago=20),
        make_user("bob", Role.USER, days_ago=10),
        make_user("norole", None, days_ago=5),
        make_user("legacy", "SUPERUSER", days_ago=1),
    ]


@pytest.fixture
def user_repo(users: list[User]) -> InMemoryUserRepository:
    return InMemoryUserRepository(users)


@pytest.fixture
def repo_provider(user_repo: InMemoryUserRepository) -> StaticUserRepositoryProvider:
    return StaticUserRepositoryProvider(user_repo)
