"""Translate Carta errors into HTTP responses.

The body is always ``{code, message}``; validation errors add ``field``.
"""

from typing import Any

from fastapi import HTTPException

from carta.domain.shared.error import (
    AuthorizationError,
    CartaError,
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    ConflictError: 409,
    AuthorizationError: 403,
}


def map_carta_error(error: CartaError) -> HTTPException:
    detail: dict[str, Any] = {"code": error.code, "message": error.message}

    if isinstance(error, AuthorizationError) and error.is_unauthenticated:
        return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})

    if isinstance(error, ValidationError) and error.field is not None:
        detail["field"] = error.field

    if isinstance(error, DomainError):
        return HTTPException(status_code=STATUS_BY_ERROR.get(type(error), 400), detail=detail)
    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=503, detail=detail)
    return HTTPException(status_code=500, detail=detail)
