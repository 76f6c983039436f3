"""Admin routes: panel sections, user listing and role management.

The whole router sits behind the moderator gate, mirroring the /admin area
of the web client. Individual endpoints then apply their own policy rule.
"""

import logging
from datetime import datetime
from typing import Annotated

from dishka import FromDishka
from dishka.integrations.fastapi import DishkaRoute
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from carta.application.api.v1.deps import require, require_gate
from carta.domain.auth.model.identity import Identity
from carta.domain.auth.model.principal import Principal
from carta.domain.auth.model.role import Role
from carta.domain.auth.model.user import User
from carta.domain.auth.service.role import MAX_LIST_LIMIT, RoleService
from carta.domain.shared.authorization.action import Action
from carta.domain.shared.authorization.gate import at_least
from carta.domain.shared.authorization.policy_set import PolicySet
from carta.domain.shared.error import AuthorizationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    route_class=DishkaRoute,
    dependencies=[Depends(require_gate(at_least(Role.MODERATOR)))],
)

# Admin panel sections and the action that unlocks each one
PANEL_SECTIONS: dict[str, Action] = {
    "dashboard": Action.STATS_READ,
    "comments": Action.COMMENT_MODERATE,
    "users": Action.USER_LIST,
    "ban_list": Action.BAN_LIST_UPDATE,
    "cards": Action.CARD_UPDATE,
    "banners": Action.BANNER_UPDATE,
}


class PanelResponse(BaseModel):
    """Admin panel sections the caller may open."""

    role: str
    sections: list[str]


class UserResponse(BaseModel):
    id: str
    username: str
    role: str | None
    created_at: datetime | None


class UserListResponse(BaseModel):
    users: list[UserResponse]


class SetRoleRequest(BaseModel):
    """Request body for changing a role. Validated by the role service."""

    role: str


class RoleChangeResponse(BaseModel):
    username: str
    previous: str | None
    current: str


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        username=user.username,
        role=user.role.name if user.role else None,
        created_at=user.created_at,
    )


@router.get("/panel", response_model=PanelResponse)
async def get_panel(
    identity: FromDishka[Identity],
    policy_set: FromDishka[PolicySet],
) -> PanelResponse:
    """List the admin panel sections available to the caller."""
    if not isinstance(identity, Principal) or identity.role is None:
        raise AuthorizationError.missing_token()
    sections = [
        name for name, action in PANEL_SECTIONS.items() if policy_set.allows(identity, action)
    ]
    return PanelResponse(role=identity.role.name, sections=sections)


@router.get(
    "/users",
    response_model=UserListResponse,
    dependencies=[Depends(require(Action.USER_LIST))],
)
async def list_users(
    role_service: FromDishka[RoleService],
    search: Annotated[str | None, Query(max_length=64)] = None,
    limit: Annotated[int, Query(ge=1, le=MAX_LIST_LIMIT)] = 100,
) -> UserListResponse:
    """List users, newest first. Requires ADMIN."""
    users = await role_service.list_users(search=search, limit=limit)
    return UserListResponse(users=[_user_response(u) for u in users])


@router.put(
    "/users/{username}/role",
    response_model=RoleChangeResponse,
)
async def set_user_role(
    username: str,
    body: SetRoleRequest,
    role_service: FromDishka[RoleService],
    principal: Annotated[Principal | None, Depends(require(Action.ROLE_ASSIGN))],
) -> RoleChangeResponse:
    """Change a user's role. Requires ADMIN."""
    change = await role_service.set_role(
        username, body.role, actor=principal.user_id if principal else None
    )
    logger.info(
        "Role of %s set to %s by %s",
        change.username,
        change.current.name,
        principal.username if principal else None,
    )
    return RoleChangeResponse(
        username=change.username,
        previous=change.previous.name if change.previous else None,
        current=change.current.name,
    )
