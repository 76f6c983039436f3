"""Custom Dishka scopes for Carta."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Carta dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, session factory, config)
    - UOW: Unit of Work (one HTTP request or one CLI command)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
