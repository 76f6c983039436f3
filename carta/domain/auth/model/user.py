"""User projection for the auth domain."""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from carta.domain.auth.model.role import Role, parse_role
from carta.domain.auth.model.value import UserId

logger = logging.getLogger(__name__)


class User(BaseModel):
    """The slice of a Carta user record that authorization depends on.

    The full profile (email, avatar, decks, ...) belongs to the persistence
    collaborator. A stored role that is not recognized loads as ``None``.
    """

    id: UserId
    username: str
    role: Role | None = None
    created_at: datetime | None = None

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, v: Any) -> Role | None:
        role = parse_role(v)
        if role is None and v is not None:
            logger.warning("Unrecognized stored role %r treated as no role", v)
        return role
