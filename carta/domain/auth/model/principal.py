"""Principal: authenticated identity with its role, resolved per-request."""

from dataclasses import dataclass

from carta.domain.auth.model.identity import Identity
from carta.domain.auth.model.role import Role, role_rank
from carta.domain.auth.model.value import UserId
from carta.domain.auth.service import access


@dataclass(frozen=True)
class Principal(Identity):
    """The authenticated identity of the current requester.

    Resolved per-request from the JWT subject plus a user record lookup.
    ``role`` is None when the record carries no recognized role.
    """

    user_id: UserId
    username: str
    role: Role | None = None

    @property
    def rank(self) -> int:
        return role_rank(self.role)

    @property
    def is_admin(self) -> bool:
        return access.is_admin(self.role)

    @property
    def is_moderator(self) -> bool:
        return access.is_moderator(self.role)

    def has_role(self, required: Role) -> bool:
        """Check that the role ranks at or above ``required`` (hierarchy comparison)."""
        return access.has_role_or_higher(self.role, required)
