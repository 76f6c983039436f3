"""PolicySet: declarative authorization rules and the Relationship enum.

This is the single source of truth for "who can do what on which resource".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from carta.domain.auth.model.role import Role
from carta.domain.auth.service.access import has_role_or_higher
from carta.domain.shared.authorization.action import Action

if TYPE_CHECKING:
    from carta.domain.auth.model.principal import Principal

logger = logging.getLogger("carta.authz")


class Relationship(StrEnum):
    """Relationships between a principal and a resource."""

    OWNER = "owner"


@dataclass(frozen=True)
class PolicyRule:
    """A single authorization rule in the policy set.

    ``role=None`` makes the rule public.
    """

    action: Action
    role: Role | None = None
    relationship: Relationship | None = None


def allow(
    action: Action,
    *,
    role: Role | None = None,
    relationship: Relationship | None = None,
) -> PolicyRule:
    """Convenience constructor for a policy rule."""
    return PolicyRule(action=action, role=role, relationship=relationship)


class PolicySet:
    """Declarative set of all authorization rules.

    Evaluation: for a given action, rules are tried in order.
    First match wins (allow). No match means deny.
    """

    def __init__(self, rules: list[PolicyRule]) -> None:
        self._rules = rules
        self._by_action: dict[Action, list[PolicyRule]] = {}
        for rule in rules:
            self._by_action.setdefault(rule.action, []).append(rule)

    def allows(
        self,
        principal: "Principal | None",
        action: Action,
        resource: Any = None,
    ) -> bool:
        """Boolean form of guard(); never raises."""
        return any(
            self._matches(rule, principal, resource) for rule in self._by_action.get(action, [])
        )

    def guard(
        self,
        principal: "Principal | None",
        action: Action,
        resource: Any = None,
    ) -> None:
        """Raise AuthorizationError if no rule allows this access."""
        from carta.domain.shared.error import AuthorizationError

        principal_id = str(principal.user_id) if principal else "anonymous"

        if self.allows(principal, action, resource):
            logger.info(
                "Authorization allowed: principal=%s action=%s",
                principal_id,
                action,
            )
            return

        logger.warning(
            "Authorization denied: principal=%s action=%s",
            principal_id,
            action,
        )
        if principal is None:
            raise AuthorizationError.missing_token()
        raise AuthorizationError.access_denied(str(action))

    def _matches(
        self,
        rule: PolicyRule,
        principal: "Principal | None",
        resource: Any,
    ) -> bool:
        # Public rule (no role required)
        if rule.role is None:
            return True
        # Must be authenticated
        if principal is None:
            return False
        # Role hierarchy check; unrecognized/absent role never passes
        if not has_role_or_higher(principal.role, rule.role):
            return False
        # Relationship check (if required)
        if rule.relationship == Relationship.OWNER:
            owner_id = getattr(resource, "owner_id", None)
            if owner_id is None or owner_id != principal.user_id:
                return False
        return True

    def validate_coverage(self) -> None:
        """Startup check: every Action enum member must have at least one rule."""
        from carta.domain.shared.error import ConfigurationError

        covered = {r.action for r in self._rules}
        missing = set(Action) - covered
        if missing:
            raise ConfigurationError(
                f"Actions without policy rules: {sorted(str(a) for a in missing)}"
            )


POLICY_SET = PolicySet(
    [
        # Public catalogue
        allow(Action.CARD_READ),
        allow(Action.DECK_READ),
        allow(Action.BAN_LIST_READ),
        # Community
        allow(Action.DECK_CREATE, role=Role.USER),
        allow(Action.COMMENT_CREATE, role=Role.USER),
        allow(Action.VOTE_CAST, role=Role.USER),
        # Ownership-scoped
        allow(Action.DECK_UPDATE, role=Role.USER, relationship=Relationship.OWNER),
        allow(Action.DECK_DELETE, role=Role.USER, relationship=Relationship.OWNER),
        allow(Action.COMMENT_DELETE, role=Role.USER, relationship=Relationship.OWNER),
        # Moderators can remove any comment
        allow(Action.COMMENT_DELETE, role=Role.MODERATOR),
        # Moderation panel
        allow(Action.ADMIN_PANEL_VIEW, role=Role.MODERATOR),
        allow(Action.STATS_READ, role=Role.MODERATOR),
        allow(Action.COMMENT_LIST, role=Role.MODERATOR),
        allow(Action.COMMENT_MODERATE, role=Role.MODERATOR),
        # Administration (admin-only)
        allow(Action.USER_LIST, role=Role.ADMIN),
        allow(Action.USER_UPDATE, role=Role.ADMIN),
        allow(Action.ROLE_ASSIGN, role=Role.ADMIN),
        allow(Action.BAN_LIST_UPDATE, role=Role.ADMIN),
        allow(Action.CARD_CREATE, role=Role.ADMIN),
        allow(Action.CARD_UPDATE, role=Role.ADMIN),
        allow(Action.CARD_DELETE, role=Role.ADMIN),
        allow(Action.BANNER_UPDATE, role=Role.ADMIN),
        allow(Action.BANNER_UPLOAD, role=Role.ADMIN),
    ]
)
