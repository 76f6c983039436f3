"""Database commands."""

import asyncio

import cyclopts
from sqlalchemy.ext.asyncio import AsyncEngine

from carta.cli.commands.uow import unit_of_work
from carta.cli.console import get_console
from carta.infrastructure.persistence.database import init_db

app = cyclopts.App(name="db", help="Database management")


async def _init() -> None:
    async with unit_of_work() as uow:
        engine = await uow.get(AsyncEngine)
        await init_db(engine)


@app.command
def init() -> None:
    """Create missing tables in the configured database."""
    asyncio.run(_init())
    get_console().success("Database initialized")
