"""User role commands."""

import asyncio
import sys
from collections.abc import Coroutine
from typing import Any, TypeVar

import cyclopts

from carta.cli.commands.uow import unit_of_work
from carta.cli.console import get_console
from carta.domain.auth.model.role import Role
from carta.domain.auth.model.user import User
from carta.domain.auth.service import access
from carta.domain.auth.service.role import RoleChange, RoleService
from carta.domain.shared.error import NotFoundError, StorageUnavailableError, ValidationError

T = TypeVar("T")

app = cyclopts.App(name="users", help="Inspect and change user roles")

VALID_ROLES = ", ".join(r.name for r in Role)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run one command against the store, exiting 1 when it is unreachable."""
    try:
        return asyncio.run(coro)
    except StorageUnavailableError as e:
        get_console().error(e.message, hint="Check CARTA_DATABASE__URL and run `carta db init`")
        sys.exit(1)


async def _set_role(username: str, role: str) -> RoleChange:
    async with unit_of_work() as uow:
        service = await uow.get(RoleService)
        return await service.set_role(username, role)


async def _get_user(username: str) -> User:
    async with unit_of_work() as uow:
        service = await uow.get(RoleService)
        return await service.get_user(username)


async def _list_users(search: str | None, limit: int) -> list[User]:
    async with unit_of_work() as uow:
        service = await uow.get(RoleService)
        return await service.list_users(search=search, limit=limit)


@app.command(name="set-role")
def set_role(username: str, role: str) -> None:
    """Assign a role to a user.

    Args:
        username: Exact username of the account.
        role: One of USER, MODERATOR, ADMIN.
    """
    console = get_console()
    try:
        change = _run(_set_role(username, role))
    except ValidationError:
        console.error(f"Invalid role: {role}", hint=f"Valid roles: {VALID_ROLES}")
        sys.exit(1)
    except NotFoundError:
        console.error(f'User "{username}" not found')
        sys.exit(1)

    console.success(f'User "{change.username}" now has role: {change.current.name}')
    console.print(f"  [dim]Previous role:[/dim] {change.previous.name if change.previous else '-'}")
    console.print(f"  [dim]New role:[/dim] {change.current.name}")


@app.command
def show(username: str) -> None:
    """Show a user's role and the access tiers it grants."""
    console = get_console()
    try:
        user = _run(_get_user(username))
    except NotFoundError:
        console.error(f'User "{username}" not found')
        sys.exit(1)

    console.print(f"[bold]{user.username}[/bold] ({user.id})")
    console.print(f"  [dim]Role:[/dim] {user.role.name if user.role else '-'}")
    console.print(f"  [dim]Moderator access:[/dim] {access.has_moderator_access(user.role)}")
    console.print(f"  [dim]Admin access:[/dim] {access.has_admin_access(user.role)}")


@app.command(name="list")
def list_users(search: str | None = None, limit: int = 100) -> None:
    """List users, newest first.

    Args:
        search: Case-insensitive substring of the username.
        limit: Maximum number of users to show.
    """
    console = get_console()
    try:
        users = _run(_list_users(search, limit))
    except ValidationError as e:
        console.error(e.message)
        sys.exit(1)

    console.table(
        [
            {
                "username": u.username,
                "role": u.role.name if u.role else "-",
                "created_at": u.created_at or "",
            }
            for u in users
        ],
        [("username", "Username"), ("role", "Role"), ("created_at", "Created")],
        title="Users",
    )
