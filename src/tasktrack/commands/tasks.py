"""Task management commands."""

from typing import Any

import typer

from tasktrack.exceptions import NotFoundError
from tasktrack.models import TASKS
from tasktrack.models.core import TASK_PRIORITIES, TASK_STATUSES
from tasktrack.utils import exit_codes
from tasktrack.utils.typer_helpers import SuggestingGroup
from tasktrack.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper
from .utils import get_repository

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


def _check_choice(name: str, value: str | None, choices: tuple[str, ...]) -> None:
    if value is not None and value not in choices:
        raise AppError(
            f"Invalid {name} '{value}'. Choose from: {', '.join(choices)}",
            exit_codes.ERROR_INVALID_ARGS,
        )


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    status: str = typer.Option("pending", "--status", "-s", help="pending, in-progress or completed"),
    priority: str = typer.Option("medium", "--priority", "-p", help="low, medium or high"),
    project: str | None = typer.Option(None, "--project", help="Project ID"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Create a new task."""
    if not title.strip():
        raise AppError("Task title is required", exit_codes.ERROR_INVALID_ARGS)
    _check_choice("status", status, TASK_STATUSES)
    _check_choice("priority", priority, TASK_PRIORITIES)

    repo = get_repository()
    if project and await repo.get_project_by_id(project) is None:
        raise NotFoundError("projects", project)

    task = await repo.create_task(
        {
            "title": title.strip(),
            "description": description,
            "status": status,
            "priority": priority,
            "project": project,
            "dueDate": due,
        }
    )
    format_success(f"Task created: {task['id']}")
    format_output(task, output)


@app.command("list")
@command_wrapper
async def list_tasks(
    status: str | None = typer.Option(None, "--status", "-s", help="Filter by status"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="Filter by priority"),
    project: str | None = typer.Option(None, "--project", help="Filter by project ID"),
    recent: int | None = typer.Option(
        None, "--recent", min=0, help="Show only the N newest tasks"
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List tasks."""
    _check_choice("status", status, TASK_STATUSES)
    _check_choice("priority", priority, TASK_PRIORITIES)
    repo = get_repository()

    if recent is not None:
        tasks = await repo.get_recent_tasks(recent)
    else:
        filters: dict[str, Any] = {}
        if status:
            filters["status"] = status
        if priority:
            filters["priority"] = priority
        if project:
            filters["project"] = project
        tasks = await repo.get_tasks(filters)

    format_output({TASKS: tasks}, output)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", help="Task title"),
    description: str | None = typer.Option(None, "--description", "-d", help="Task description"),
    status: str | None = typer.Option(None, "--status", "-s", help="Task status"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="Task priority"),
    project: str | None = typer.Option(None, "--project", help="Project ID ('none' to detach)"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Update a task."""
    _check_choice("status", status, TASK_STATUSES)
    _check_choice("priority", priority, TASK_PRIORITIES)

    updates: dict[str, Any] = {}
    if title is not None:
        updates["title"] = title
    if description is not None:
        updates["description"] = description
    if status is not None:
        updates["status"] = status
    if priority is not None:
        updates["priority"] = priority
    if project is not None:
        updates["project"] = None if project.lower() == "none" else project
    if due is not None:
        updates["dueDate"] = due

    if not updates:
        raise AppError("No updates specified", exit_codes.ERROR_INVALID_ARGS)

    task = await get_repository().update_task(task_id, updates)
    format_success(f"Task updated: {task_id}")
    format_output(task, output)


@app.command("complete")
@command_wrapper
async def complete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
) -> None:
    """Mark a task as completed."""
    task = await get_repository().update_task(task_id, {"status": "completed"})
    format_success(f"Task completed at {task['completedAt']}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
) -> None:
    """Delete a task."""
    await get_repository().delete_task(task_id)
    format_success(f"Task deleted: {task_id}")
