"""Command 'migrate' of tasktrack: move data between storage backends."""

import platform

import typer

from tasktrack.adapters.factory import resolve_backend
from tasktrack.exceptions import TaskTrackError
from tasktrack.services.config_service import get_config_service
from tasktrack.services.migration_service import DataMigration
from tasktrack.utils import exit_codes
from tasktrack.utils.logger import log_file_path
from tasktrack.utils.ui.console import get_console
from tasktrack.utils.ui.formatters import (
    format_counts,
    format_error,
    format_info,
    format_success,
    format_warning,
)

from .decorators import AppError, command_wrapper
from .utils import get_migration, get_repository

console = get_console()

MIGRATION_TIPS = (
    "Check the storage settings in config.json or the TASKTRACK_* variables",
    "Make sure the target backend is reachable",
    "Run 'tasktrack migrate --test' to check connectivity",
)


async def show_status() -> None:
    config = get_config_service().config
    console.print("\n[bold]System Status[/bold]\n")
    console.print(f"Storage backend: [cyan]{config.storage.type}[/cyan]")
    console.print(f"Environment: [cyan]{config.environment}[/cyan]")
    console.print(f"Python: [cyan]{platform.python_version()}[/cyan]")

    stats = await get_repository().get_stats()
    format_counts(
        "Data",
        {
            "Tasks": stats.total_tasks,
            "Projects": stats.total_projects,
            "Completed tasks": stats.completed_tasks,
            "Pending tasks": stats.pending_tasks,
            "In-progress tasks": stats.in_progress_tasks,
        },
    )


async def test_connections(migration: DataMigration) -> None:
    console.print("\n[bold]Testing connectivity...[/bold]\n")
    results = await migration.test_connections()
    for token, result in results.items():
        mark = "[green]✓[/green]" if result.status == "success" else "[red]✗[/red]"
        console.print(f"{mark} {token:<15} - {result.message}")


def list_backups(migration: DataMigration) -> None:
    console.print("\n[bold]Available backups[/bold]\n")
    backups = migration.list_backups()
    if not backups:
        format_info("No backups found")
        return

    for index, backup in enumerate(backups, 1):
        console.print(f"{index}. [cyan]{backup.key}[/cyan]")
        console.print(f"   Created: {backup.created_at or 'N/A'}")
        console.print(f"   Tasks: {backup.tasks_count}, Projects: {backup.projects_count}")


async def run_migration(
    migration: DataMigration,
    from_type: str,
    to_type: str,
    create_backup: bool,
    clear_target: bool,
) -> None:
    console.print(f"\n[bold]Starting migration: {from_type} → {to_type}[/bold]\n")
    resolve_backend(from_type)
    resolve_backend(to_type)

    if from_type == to_type:
        format_warning("Source and target are the same. Nothing to migrate.")
        return

    try:
        record = await migration.migrate(
            from_type, to_type, create_backup=create_backup, clear_target=clear_target
        )
    except TaskTrackError:
        console.print("\n[bold]Tips:[/bold]")
        for tip in MIGRATION_TIPS:
            console.print(f"  • {tip}")
        console.print(f"  • See {log_file_path()} for details")
        raise

    format_success("Migration completed")
    counts = record.records_count
    format_counts(
        "Migration Summary",
        {
            "Tasks": counts.tasks,
            "Projects": counts.projects,
            "Users": counts.users,
        },
    )
    console.print(f"Migration ID: [cyan]{record.id}[/cyan]")
    console.print(f"Duration: {record.duration_ms}ms")
    if record.backup_key:
        format_info(f"Backup created before migration: {record.backup_key}")


@command_wrapper
async def migrate(
    ctx: typer.Context,
    from_type: str | None = typer.Option(
        None, "--from", help="Source backend (local-kv, document-store, relational, cloud-document)"
    ),
    to_type: str | None = typer.Option(
        None, "--to", help="Target backend (also the restore target)"
    ),
    backup: bool = typer.Option(
        True, "--backup/--no-backup", help="Back up the source data before migrating"
    ),
    clear_target: bool = typer.Option(
        False, "--clear-target", help="Delete the target's tasks and projects first"
    ),
    test: bool = typer.Option(False, "--test", help="Test connectivity to every backend"),
    list_backups_flag: bool = typer.Option(
        False, "--list-backups", help="List available backups"
    ),
    restore: str | None = typer.Option(None, "--restore", help="Restore the backup with this key"),
    cleanup: bool = typer.Option(False, "--cleanup", help="Delete old backups"),
    status: bool = typer.Option(False, "--status", help="Show the current system status"),
) -> None:
    """
    Migrate data between storage backends and manage migration backups.

    Examples:
        tasktrack migrate --from local-kv --to document-store
        tasktrack migrate --test
        tasktrack migrate --list-backups
        tasktrack migrate --restore migration_backup_<id> --to local-kv
    """
    if not any([from_type, to_type, test, list_backups_flag, restore, cleanup, status]):
        typer.echo(ctx.get_help())
        return

    if bool(from_type) != bool(to_type) and not (restore and to_type):
        raise AppError("Both --from and --to are required to migrate", exit_codes.ERROR_GENERAL)

    migration = get_migration()
    try:
        if status:
            await show_status()
        if test:
            await test_connections(migration)
        if list_backups_flag:
            list_backups(migration)
        if cleanup:
            cleaned = migration.cleanup_backups()
            format_success(f"{cleaned} old backup(s) removed")
        if restore:
            target = to_type or get_config_service().config.storage.type
            await migration.restore_backup(restore, target)
            format_success(f"Backup {restore} restored into {target}")
        if from_type and to_type:
            await run_migration(migration, from_type, to_type, backup, clear_target)
    except TaskTrackError as e:
        format_error(str(e))
        raise typer.Exit(exit_codes.ERROR_GENERAL) from e
