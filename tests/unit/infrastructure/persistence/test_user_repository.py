"""SqlUserRepository against in-memory SQLite."""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from sqlalchemy import insert, select

from carta.config import Config, DatabaseConfig
from carta.domain.auth.model.role import Role
from carta.domain.auth.model.value import UserId
from carta.domain.shared.error import StorageUnavailableError
from carta.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from carta.infrastructure.persistence.repository.user import SqlUserRepository
from carta.infrastructure.persistence.tables import users_table

NOW = datetime(2025, 1, 1, tzinfo=UTC)

ROWS = [
    {"id": "usr_ana", "username": "ana", "role": "ADMIN", "created_at": NOW},
    {"id": "usr_bob", "username": "bob", "role": "USER", "created_at": NOW + timedelta(days=1)},
    {"id": "usr_old", "username": "old", "role": None, "created_at": NOW + timedelta(days=2)},
    {"id": "usr_odd", "username": "Oddity", "role": "root", "created_at": NOW + timedelta(days=3)},
]


@pytest_asyncio.fixture
async def session():
    config = Config(database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
    engine = create_db_engine(config)
    await init_db(engine)
    async with engine.begin() as conn:
        await conn.execute(insert(users_table), ROWS)

    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
    await engine.dispose()


class TestReads:
    @pytest.mark.asyncio
    async def test_get_by_id(self, session) -> None:
        repo = SqlUserRepository(session)

        user = await repo.get(UserId("usr_ana"))

        assert user is not None
        assert user.username == "ana"
        assert user.role is Role.ADMIN

    @pytest.mark.asyncio
    async def test_get_missing(self, session) -> None:
        repo = SqlUserRepository(session)
        assert await repo.get(UserId("usr_nobody")) is None
        assert await repo.get_by_username("nobody") is None

    @pytest.mark.asyncio
    async def test_null_and_unknown_roles_load_as_none(self, session) -> None:
        repo = SqlUserRepository(session)

        assert (await repo.get_by_username("old")).role is None
        assert (await repo.get_by_username("Oddity")).role is None

    @pytest.mark.asyncio
    async def test_list_newest_first(self, session) -> None:
        repo = SqlUserRepository(session)

        users = await repo.list()

        assert [u.username for u in users] == ["Oddity", "old", "bob", "ana"]

    @pytest.mark.asyncio
    async def test_list_search_case_insensitive(self, session) -> None:
        repo = SqlUserRepository(session)

        users = await repo.list(search="od", limit=10)

        assert [u.username for u in users] == ["Oddity"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("search", ["a_b", "a%b"])
    async def test_list_search_wildcards_match_literally(self, session, search: str) -> None:
        await session.execute(
            insert(users_table),
            [
                {"id": "usr_lit", "username": search, "role": None, "created_at": NOW},
                {"id": "usr_axb", "username": "axb", "role": None, "created_at": NOW},
            ],
        )
        repo = SqlUserRepository(session)

        users = await repo.list(search=search, limit=10)

        assert [u.username for u in users] == [search]

    @pytest.mark.asyncio
    async def test_list_limit(self, session) -> None:
        repo = SqlUserRepository(session)
        assert len(await repo.list(limit=2)) == 2


class TestUpdateRole:
    @pytest.mark.asyncio
    async def test_stores_role_name(self, session) -> None:
        repo = SqlUserRepository(session)

        await repo.update_role(UserId("usr_bob"), Role.MODERATOR)

        stored = (
            await session.execute(select(users_table.c.role).where(users_table.c.id == "usr_bob"))
        ).scalar_one()
        assert stored == "MODERATOR"
        assert (await repo.get(UserId("usr_bob"))).role is Role.MODERATOR


class TestStorageFailures:
    @pytest.mark.asyncio
    async def test_missing_schema_is_storage_unavailable(self) -> None:
        config = Config(database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"))
        engine = create_db_engine(config)
        factory = create_session_factory(engine)

        async with factory() as session:
            with pytest.raises(StorageUnavailableError):
                await SqlUserRepository(session).get(UserId("usr_ana"))
        await engine.dispose()
