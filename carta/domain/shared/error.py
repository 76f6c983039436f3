"""Errors raised at Carta's boundaries.

DomainError covers requests the domain refuses (mapped to 4xx);
InfrastructureError covers backends that failed (mapped to 503).
The access evaluator itself never raises.
"""

MISSING_TOKEN = "missing_token"
ACCESS_DENIED = "access_denied"


class CartaError(Exception):
    """Base class for all Carta errors. ``code`` defaults to the class name."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or type(self).__name__
        super().__init__(message)


class DomainError(CartaError):
    pass


class NotFoundError(DomainError):
    """A referenced record does not exist."""


class ValidationError(DomainError):
    """Input rejected. ``field`` names the offending parameter when known."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class ConflictError(DomainError):
    """The request contradicts the current state of a record."""


class AuthorizationError(DomainError):
    """The caller may not perform the operation.

    Two flavours, told apart by ``code``: nobody is signed in
    (``missing_token``, 401) or the signed-in user's tier is too low
    (``access_denied``, 403).
    """

    @classmethod
    def missing_token(cls) -> "AuthorizationError":
        return cls("Authentication required", code=MISSING_TOKEN)

    @classmethod
    def access_denied(cls, reason: str) -> "AuthorizationError":
        return cls(f"Access denied: {reason}", code=ACCESS_DENIED)

    @property
    def is_unauthenticated(self) -> bool:
        return self.code == MISSING_TOKEN


class InfrastructureError(CartaError):
    pass


class StorageUnavailableError(InfrastructureError):
    """The user store could not be reached."""


class ConfigurationError(InfrastructureError):
    """Startup found an inconsistent setup, e.g. an action without policy rules."""
