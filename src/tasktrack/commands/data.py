"""Data management commands (export, import, clear)."""

import gzip
import json
from datetime import datetime
from pathlib import Path

import typer
from rich.prompt import Confirm

from tasktrack.utils import exit_codes
from tasktrack.utils.typer_helpers import SuggestingGroup
from tasktrack.utils.ui.formatters import (
    format_counts,
    format_error,
    format_info,
    format_success,
)

from .decorators import command_wrapper
from .utils import get_migration, get_repository

app = typer.Typer(cls=SuggestingGroup, help="Data management commands")


def _snapshot_counts(data: dict) -> dict[str, int]:
    return {
        "Tasks": len(data.get("tasks") or []),
        "Projects": len(data.get("projects") or []),
        "Users": len(data.get("users") or []),
    }


@app.command("export")
@command_wrapper
async def export_data(
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (default: tasktrack-export-{timestamp}.json)",
    ),
    compress: bool = typer.Option(
        False,
        "--compress",
        "-z",
        help="Compress output with gzip",
    ),
) -> None:
    """
    Export all tasks, projects and users to a JSON snapshot.

    Examples:
        tasktrack data export
        tasktrack data export --output backup.json
        tasktrack data export --compress
    """
    format_info("Exporting your data...")
    data = await get_repository().export_data()

    if output is None:
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        extension = ".json.gz" if compress else ".json"
        output = f"tasktrack-export-{timestamp}{extension}"

    output_path = Path(output)
    json_str = json.dumps(data, indent=2, default=str)
    if compress:
        output_path.write_bytes(gzip.compress(json_str.encode("utf-8")))
    else:
        output_path.write_text(json_str, encoding="utf-8")

    format_counts("Export Summary", _snapshot_counts(data))
    format_success(f"Data exported to: {output_path.absolute()}")


@app.command("import")
@command_wrapper
async def import_data(
    file: str = typer.Argument(..., help="Snapshot file to import"),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt",
    ),
) -> None:
    """
    Import a snapshot produced by 'data export'.

    Existing tasks and projects are replaced; users are merged by id.

    Examples:
        tasktrack data import backup.json
        tasktrack data import backup.json.gz --yes
    """
    file_path = Path(file)
    if not file_path.exists():
        format_error(f"File not found: {file}")
        raise typer.Exit(exit_codes.ERROR_NOT_FOUND)

    try:
        if file_path.suffix == ".gz":
            with gzip.open(file_path, "rt", encoding="utf-8") as f:
                data = json.load(f)
        else:
            with file_path.open(encoding="utf-8") as f:
                data = json.load(f)
    except json.JSONDecodeError as e:
        format_error(f"Invalid JSON file: {str(e)}")
        raise typer.Exit(exit_codes.ERROR_INVALID_ARGS) from e

    get_migration().validate_migration_data(data)
    format_counts("Import Preview", _snapshot_counts(data))

    if not yes and not Confirm.ask("Replace existing tasks and projects with this data?"):
        format_info("Import cancelled")
        raise typer.Exit(exit_codes.SUCCESS)

    await get_repository().import_data(data)
    format_success(f"Data imported from: {file_path}")


@app.command("clear")
@command_wrapper
async def clear_data(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
) -> None:
    """Delete all tasks and projects. Users are kept."""
    if not yes and not Confirm.ask("Delete ALL tasks and projects?"):
        format_info("Clear cancelled")
        raise typer.Exit(exit_codes.SUCCESS)

    await get_repository().clear_all_data()
    format_success("All tasks and projects deleted")
