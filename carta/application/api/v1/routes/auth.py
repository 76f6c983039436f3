"""Access summary for the signed-in user.

The web client uses this to decide whether to render the admin panel link
and which admin sections to show; it never evaluates roles itself.
"""

from dishka import FromDishka
from dishka.integrations.fastapi import DishkaRoute
from fastapi import APIRouter
from pydantic import BaseModel

from carta.domain.auth.model.identity import Identity
from carta.domain.auth.model.principal import Principal
from carta.domain.auth.model.role import UNRANKED

router = APIRouter(prefix="/auth", tags=["Authentication"], route_class=DishkaRoute)


class AccessSummaryResponse(BaseModel):
    """Access tiers of the caller."""

    authenticated: bool
    user_id: str | None = None
    username: str | None = None
    role: str | None = None
    rank: int = UNRANKED
    is_admin: bool = False
    is_moderator: bool = False


@router.get("/access", response_model=AccessSummaryResponse)
async def get_access(identity: FromDishka[Identity]) -> AccessSummaryResponse:
    """Describe what the caller may access. Anonymous callers get rank 0."""
    if not isinstance(identity, Principal):
        return AccessSummaryResponse(authenticated=False)

    return AccessSummaryResponse(
        authenticated=True,
        user_id=str(identity.user_id),
        username=identity.username,
        role=identity.role.name if identity.role else None,
        rank=identity.rank,
        is_admin=identity.is_admin,
        is_moderator=identity.is_moderator,
    )
