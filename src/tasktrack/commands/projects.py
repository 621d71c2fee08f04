"""Project management commands."""

from typing import Any

import typer

from tasktrack.exceptions import PartialDeleteError
from tasktrack.models import PROJECTS
from tasktrack.utils import exit_codes
from tasktrack.utils.typer_helpers import SuggestingGroup
from tasktrack.utils.ui.formatters import (
    format_error,
    format_output,
    format_success,
    format_warning,
)

from .decorators import AppError, command_wrapper
from .utils import get_repository

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


@app.command("add")
@command_wrapper
async def add_project(
    name: str = typer.Argument(..., help="Project name"),
    description: str = typer.Option("", "--description", "-d", help="Project description"),
    status: str = typer.Option("active", "--status", "-s", help="Project status"),
    color: str | None = typer.Option(None, "--color", help="Project color"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD)"),
    end: str | None = typer.Option(None, "--end", help="End date (YYYY-MM-DD)"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Create a new project."""
    if not name.strip():
        raise AppError("Project name is required", exit_codes.ERROR_INVALID_ARGS)

    project = await get_repository().create_project(
        {
            "name": name.strip(),
            "description": description,
            "status": status,
            "color": color,
            "startDate": start,
            "endDate": end,
        }
    )
    format_success(f"Project created: {project['id']}")
    format_output(project, output)


@app.command("list")
@command_wrapper
async def list_projects(
    status: str | None = typer.Option(None, "--status", "-s", help="Filter by status"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List projects."""
    filters = {"status": status} if status else None
    projects = await get_repository().get_projects(filters)
    format_output({PROJECTS: projects}, output)


@app.command("update")
@command_wrapper
async def update_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    name: str | None = typer.Option(None, "--name", help="Project name"),
    description: str | None = typer.Option(None, "--description", "-d", help="Project description"),
    status: str | None = typer.Option(None, "--status", "-s", help="Project status"),
    color: str | None = typer.Option(None, "--color", help="Project color"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Update a project."""
    updates: dict[str, Any] = {
        key: value
        for key, value in (
            ("name", name),
            ("description", description),
            ("status", status),
            ("color", color),
        )
        if value is not None
    }
    if not updates:
        raise AppError("No updates specified", exit_codes.ERROR_INVALID_ARGS)

    project = await get_repository().update_project(project_id, updates)
    format_success(f"Project updated: {project_id}")
    format_output(project, output)


@app.command("delete")
@command_wrapper
async def delete_project(
    project_id: str = typer.Argument(..., help="Project ID"),
) -> None:
    """Delete a project, detaching its tasks."""
    try:
        await get_repository().delete_project(project_id)
    except PartialDeleteError as e:
        format_warning(
            f"{len(e.detached_task_ids)} task(s) were detached before the failure: "
            + ", ".join(e.detached_task_ids)
        )
        format_error(str(e))
        raise typer.Exit(exit_codes.ERROR_GENERAL) from e
    format_success(f"Project deleted: {project_id}")
