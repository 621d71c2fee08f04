"""User management commands.

Passwords are stored as given; there is no authentication hardening.
"""

import typer

from tasktrack.models import USERS
from tasktrack.utils import exit_codes
from tasktrack.utils.typer_helpers import SuggestingGroup
from tasktrack.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import AppError, command_wrapper
from .utils import get_repository

app = typer.Typer(cls=SuggestingGroup, help="User management commands")

USER_ROLES = ("admin", "user")


@app.command("add")
@command_wrapper
async def add_user(
    username: str = typer.Argument(..., help="Username"),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
    display_name: str | None = typer.Option(None, "--name", help="Display name"),
    email: str | None = typer.Option(None, "--email", help="Email address"),
    role: str = typer.Option("user", "--role", help="admin or user"),
) -> None:
    """Create a user."""
    if role not in USER_ROLES:
        raise AppError(f"Invalid role '{role}'", exit_codes.ERROR_INVALID_ARGS)

    repo = get_repository()
    if await repo.get_user_by_username(username) is not None:
        format_warning(f"A user named '{username}' already exists")

    user = await repo.create_user(
        {
            "username": username,
            "password": password,
            "displayName": display_name or username,
            "email": email,
            "role": role,
        }
    )
    format_success(f"User created: {user['id']}")


@app.command("list")
@command_wrapper
async def list_users(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List users (passwords are never shown)."""
    users = await get_repository().get_users()
    visible = [{k: v for k, v in user.items() if k != "password"} for user in users]
    format_output({USERS: visible}, output)


@app.command("delete")
@command_wrapper
async def delete_user(
    user_id: str = typer.Argument(..., help="User ID"),
) -> None:
    """Delete a user."""
    await get_repository().delete_user(user_id)
    format_success(f"User deleted: {user_id}")
