"""Engine, sessions and schema bootstrap for the user store."""

from pathlib import Path
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from carta.config import Config
from carta.infrastructure.persistence.tables import metadata


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_sqlite(url: str) -> bool:
    return _is_sqlite(url) and make_url(url).database in (None, "", ":memory:")


def _resolve_sqlite_file(url: str) -> str:
    """Make a file-backed SQLite URL absolute (``~`` expanded) and create its directory."""
    if not _is_sqlite(url) or _is_memory_sqlite(url):
        return url

    parsed = make_url(url)
    db_file = Path(parsed.database).expanduser().resolve()
    db_file.parent.mkdir(parents=True, exist_ok=True)
    return parsed.set(database=str(db_file)).render_as_string(hide_password=False)


def _engine_options(url: str, echo: bool) -> dict[str, Any]:
    if _is_memory_sqlite(url):
        # One shared connection, otherwise each session sees its own empty database
        return {
            "echo": echo,
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    if _is_sqlite(url):
        return {"echo": echo}
    return {"echo": echo, "pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


def create_db_engine(config: Config) -> AsyncEngine:
    """Engine for ``config.database.url``: SQLite (aiosqlite) or PostgreSQL (asyncpg)."""
    url = _resolve_sqlite_file(config.database.url)
    return create_async_engine(url, **_engine_options(url, config.database.echo))


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create missing tables. Local/dev convenience; production schemas are managed elsewhere."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
