"""Access evaluator: pure role checks used by guards, policies and the UI summary.

Every function is total: absent, unrecognized or malformed role tokens rank
as 0 and fail every check instead of raising.
"""

from typing import Any

from carta.domain.auth.model.role import UNRANKED, Role, parse_role, role_rank


def is_admin(role: Any) -> bool:
    """True iff the role is exactly ADMIN."""
    return parse_role(role) is Role.ADMIN


def is_moderator(role: Any) -> bool:
    """True for MODERATOR and ADMIN."""
    return parse_role(role) in (Role.MODERATOR, Role.ADMIN)


def has_admin_access(role: Any) -> bool:
    """Alias of is_admin for call sites guarding admin-only operations."""
    return is_admin(role)


def has_moderator_access(role: Any) -> bool:
    """Alias of is_moderator for call sites guarding the moderation panel."""
    return is_moderator(role)


def has_role_or_higher(role: Any, required: Any) -> bool:
    """True iff role ranks at or above the required tier.

    An absent or unrecognized role never satisfies any tier, USER included.
    An unrecognized required tier is never satisfied either.
    """
    rank = role_rank(role)
    required_rank = role_rank(required)
    if rank == UNRANKED or required_rank == UNRANKED:
        return False
    return rank >= required_rank
