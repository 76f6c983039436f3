"""Tests for error → HTTP status mapping: pin 401 vs 403."""

from carta.application.api.v1.errors import map_carta_error
from carta.domain.shared.error import (
    AuthorizationError,
    CartaError,
    ConfigurationError,
    ConflictError,
    DomainError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)


class TestMapCartaError:
    def test_missing_token_is_401_with_challenge(self) -> None:
        exc = map_carta_error(AuthorizationError.missing_token())

        assert exc.status_code == 401
        assert exc.headers == {"WWW-Authenticate": "Bearer"}
        assert exc.detail == {"code": "missing_token", "message": "Authentication required"}

    def test_access_denied_is_403(self) -> None:
        exc = map_carta_error(AuthorizationError.access_denied("user:list"))

        assert exc.status_code == 403
        assert exc.detail == {"code": "access_denied", "message": "Access denied: user:list"}

    def test_not_found(self) -> None:
        exc = map_carta_error(NotFoundError('User "x" not found', code="user_not_found"))
        assert exc.status_code == 404
        assert exc.detail["code"] == "user_not_found"

    def test_validation_error_carries_field(self) -> None:
        exc = map_carta_error(ValidationError("Invalid role", field="role"))
        assert exc.status_code == 422
        assert exc.detail == {"code": "VALIDATION_ERROR", "message": "Invalid role", "field": "role"}

    def test_conflict_is_409(self) -> None:
        exc = map_carta_error(ConflictError("Cannot remove own ADMIN role", code="self_demotion"))
        assert exc.status_code == 409
        assert exc.detail["code"] == "self_demotion"

    def test_unmapped_domain_error_is_400(self) -> None:
        exc = map_carta_error(DomainError("nope"))
        assert exc.status_code == 400
        assert exc.detail["code"] == "DomainError"

    def test_infrastructure_errors_are_503(self) -> None:
        assert map_carta_error(StorageUnavailableError("db down")).status_code == 503
        assert map_carta_error(ConfigurationError("bad")).status_code == 503

    def test_base_error_is_500(self) -> None:
        assert map_carta_error(CartaError("boom")).status_code == 500
