import logging
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from carta.application.api.v1.errors import map_carta_error
from carta.application.api.v1.routes import admin, auth, health
from carta.application.di import create_container
from carta.config import Config, configure_logging
from carta.domain.shared.authorization.policy_set import POLICY_SET
from carta.domain.shared.error import CartaError
from carta.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.dishka_container.close()


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    configure_logging(config.logging)
    logger.info("Starting %s server v%s", config.server.name, config.server.version)

    # Every action must have a policy rule (fail fast)
    POLICY_SET.validate_coverage()

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Spans for every request; exported only when a Logfire token is configured
    logfire.configure(
        service_name="carta",
        send_to_logfire="if-token-present",
        console=False,
    )
    logfire.instrument_fastapi(app_instance)

    setup_dishka(container or create_container(config), app_instance)

    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(auth.router, prefix="/api/v1")
    app_instance.include_router(admin.router, prefix="/api/v1")

    # Global Carta error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(CartaError)
    async def carta_error_handler(request: Request, exc: CartaError):
        http_exc = map_carta_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            headers=http_exc.headers,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance
