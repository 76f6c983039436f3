"""Role hierarchy for authorization."""

from enum import IntEnum
from typing import Any


class Role(IntEnum):
    """Hierarchical roles with numeric ordering.

    Higher values inherit all permissions of lower values.
    Absence of a role is ``None``, never a member of this enum.
    """

    USER = 1
    MODERATOR = 2
    ADMIN = 3

    @classmethod
    def from_token(cls, token: Any) -> "Role":
        """Strict parse for user-supplied input (CLI args, request bodies).

        Raises ValidationError for anything that is not a known role.
        """
        role = parse_role(token)
        if role is None:
            from carta.domain.shared.error import ValidationError

            valid = ", ".join(r.name for r in cls)
            raise ValidationError(f"Invalid role: {token!r}. Valid roles: {valid}", field="role")
        return role


_ROLES_BY_NAME: dict[str, Role] = {role.name: role for role in Role}

UNRANKED = 0
"""Rank of an absent or unrecognized role token."""


def parse_role(token: Any) -> Role | None:
    """Map an external role token to a Role, or None when it is not recognized.

    Only exact role names are accepted ("ADMIN", not "admin"). Never raises.
    """
    if isinstance(token, Role):
        return token
    if isinstance(token, str):
        return _ROLES_BY_NAME.get(token)
    return None


def role_rank(token: Any) -> int:
    """Numeric rank of a role token: USER=1, MODERATOR=2, ADMIN=3, otherwise 0."""
    role = parse_role(token)
    return int(role) if role is not None else UNRANKED
