"""Auth domain models."""

from .identity import Anonymous, Identity
from .principal import Principal
from .role import Role, parse_role, role_rank
from .user import User
from .value import UserId

__all__ = [
    "Anonymous",
    "Identity",
    "Principal",
    "Role",
    "User",
    "UserId",
    "parse_role",
    "role_rank",
]
