"""Tests for engine construction."""

from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool

from carta.config import Config, DatabaseConfig
from carta.infrastructure.persistence.database import create_db_engine


def _engine(url: str):
    return create_db_engine(Config(database=DatabaseConfig(url=url)))


class TestCreateDbEngine:
    @pytest.mark.asyncio
    async def test_memory_sqlite_shares_one_connection(self) -> None:
        engine = _engine("sqlite+aiosqlite:///:memory:")

        assert isinstance(engine.pool, StaticPool)
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_file_sqlite_uses_regular_pool(self, tmp_path: Path) -> None:
        engine = _engine(f"sqlite+aiosqlite:///{tmp_path / 'carta.db'}")

        assert not isinstance(engine.pool, StaticPool)
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_file_sqlite_path_made_absolute(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))

        engine = _engine("sqlite+aiosqlite:///~/.carta/carta.db")

        assert engine.url.database == str((tmp_path / ".carta" / "carta.db").resolve())
        assert (tmp_path / ".carta").is_dir()
        await engine.dispose()
