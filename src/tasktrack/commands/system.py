"""Top-level commands: init, stats and version."""

import typer

from tasktrack import __version__
from tasktrack.adapters.factory import resolve_backend
from tasktrack.services.config_service import get_config_service
from tasktrack.services.initializer import SystemInitializer
from tasktrack.utils.ui.console import get_console
from tasktrack.utils.ui.formatters import (
    format_counts,
    format_info,
    format_output,
    format_success,
    format_warning,
)

from .decorators import command_wrapper
from .utils import get_migration, get_repository

console = get_console(highlight=False)


@command_wrapper
async def init(
    storage: str | None = typer.Option(
        None,
        "--storage",
        help="Switch to this backend first (migrating if auto-migrate is enabled)",
    ),
) -> None:
    """Initialize storage, seeding sample data into an empty store."""
    config_svc = get_config_service()

    if storage and storage != config_svc.config.storage.type:
        resolve_backend(storage)
        if await get_migration().auto_migrate(storage):
            format_success(f"Data migrated to {storage}")
        config_svc.set_storage_type(storage)
        format_info(f"Storage backend set to {storage}")

    initializer = SystemInitializer(config_svc.config)
    result = await initializer.initialize()

    for warning in result.config_warnings:
        format_warning(warning)
    if result.fell_back:
        format_warning(f"Backend unavailable, using {result.storage_type} instead")
    for issue in result.integrity.issues:
        format_warning(f"Integrity: {issue}")

    format_success(
        f"Initialized {result.storage_type} storage "
        f"({result.environment}) in {result.initialization_time_ms}ms"
    )
    if result.seeded:
        format_info("Created a default project and a welcome task")

    await initializer.repository.disconnect()


@command_wrapper
async def stats(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show task and project statistics."""
    result = await get_repository().get_stats()
    if output != "table":
        format_output(result.model_dump(), output)
        return

    format_counts(
        "Statistics",
        {
            "Tasks": result.total_tasks,
            "Completed": result.completed_tasks,
            "In progress": result.in_progress_tasks,
            "Pending": result.pending_tasks,
            "High priority": result.high_priority_tasks,
            "Medium priority": result.medium_priority_tasks,
            "Low priority": result.low_priority_tasks,
            "Projects": result.total_projects,
            "Users": result.total_users,
        },
    )
    console.print(f"[dim]Last updated: {result.last_updated}[/dim]")


def version() -> None:
    """Show version information"""
    console.print(__version__)
