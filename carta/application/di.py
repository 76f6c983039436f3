from dishka import AsyncContainer, Provider, from_context, make_async_container

from carta.config import Config
from carta.domain.auth.util.di.provider import AuthProvider
from carta.infrastructure.persistence import PersistenceProvider
from carta.util.di.scope import Scope


class ConfigProvider(Provider):
    """Exposes the Config passed as container context."""

    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None, *overrides: Provider) -> AsyncContainer:
    """Build the application container.

    Providers passed in ``overrides`` are registered last and win over the
    defaults (tests use this to swap the user repository).
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        AuthProvider(),
        *overrides,
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
