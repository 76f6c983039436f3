"""FastAPI dependencies for request identity and authorization.

These read from the per-request dishka container opened by ContainerMiddleware,
so they can be attached to routers as plain ``Depends``.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request

from carta.domain.auth.model.identity import Identity
from carta.domain.auth.model.principal import Principal
from carta.domain.shared.authorization.action import Action
from carta.domain.shared.authorization.gate import Gate
from carta.domain.shared.authorization.policy_set import PolicySet


async def get_identity(request: Request) -> Identity:
    """Identity of the caller: Principal, or Anonymous when not signed in."""
    return await request.state.dishka_container.get(Identity)


async def get_policy_set(request: Request) -> PolicySet:
    return await request.state.dishka_container.get(PolicySet)


def require_gate(gate: Gate) -> Callable[..., Awaitable[Identity]]:
    """Dependency enforcing a coarse gate, e.g. ``at_least(Role.MODERATOR)``."""

    async def dependency(identity: Annotated[Identity, Depends(get_identity)]) -> Identity:
        gate.check(identity)
        return identity

    return dependency


def require(action: Action) -> Callable[..., Awaitable[Principal | None]]:
    """Dependency enforcing the policy rules for ``action``.

    Returns the Principal (or None for public actions reached anonymously).
    Only for actions that do not need a loaded resource; ownership-scoped
    actions are guarded after the resource is loaded.
    """

    async def dependency(
        identity: Annotated[Identity, Depends(get_identity)],
        policy_set: Annotated[PolicySet, Depends(get_policy_set)],
    ) -> Principal | None:
        principal = identity if isinstance(identity, Principal) else None
        policy_set.guard(principal, action)
        return principal

    return dependency
