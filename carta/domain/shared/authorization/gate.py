"""Route-level authorization gates: public() and at_least(Role)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from carta.domain.auth.model.identity import Identity
    from carta.domain.auth.model.role import Role


class Gate(ABC):
    """Base for coarse authorization gates evaluated before any resource is loaded."""

    @abstractmethod
    def check(self, identity: "Identity") -> None:
        """Raise AuthorizationError if the identity does not pass the gate."""


@dataclass(frozen=True)
class Public(Gate):
    """No authentication required."""

    def check(self, identity: "Identity") -> None:
        return None


@dataclass(frozen=True)
class AtLeast(Gate):
    """Gate that requires the principal to have at least the given role."""

    role: "Role"

    def check(self, identity: "Identity") -> None:
        from carta.domain.auth.model.principal import Principal
        from carta.domain.shared.error import AuthorizationError

        if not isinstance(identity, Principal):
            raise AuthorizationError.missing_token()

        if not identity.has_role(self.role):
            raise AuthorizationError.access_denied(f"requires role {self.role.name}")


_PUBLIC = Public()


def public() -> Public:
    """Mark a route as publicly accessible (no auth required)."""
    return _PUBLIC


def at_least(role: "Role") -> AtLeast:
    """Mark a route as requiring at least the given role."""
    return AtLeast(role=role)
