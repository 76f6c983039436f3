"""Run a single unit of work against the configured database."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer

from carta.application.di import create_container
from carta.config import Config, configure_logging
from carta.util.di.scope import Scope


@asynccontextmanager
async def unit_of_work(config: Config | None = None) -> AsyncIterator[AsyncContainer]:
    """Open the app container and one UOW scope; commits when the block exits cleanly."""
    config = config or Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    container = create_container(config)
    try:
        async with container(scope=Scope.UOW) as uow:
            yield uow
    finally:
        await container.close()
