"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from tasktrack.models.core import TASK_STATUSES
from tasktrack.utils.ui.console import get_console

# Columns shown for records in table output, in display order
RECORD_COLUMNS = {
    "tasks": ["id", "title", "status", "priority", "project", "dueDate", "completedAt"],
    "projects": ["id", "name", "status", "color", "startDate", "endDate"],
    "users": ["id", "username", "displayName", "email", "role"],
}


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    console = get_console()
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, dict):
        for collection, columns in RECORD_COLUMNS.items():
            if collection in data and isinstance(data[collection], list):
                format_dict_table(data[collection], columns)
                return
        format_single_item(data)
    elif isinstance(data, list):
        format_dict_table(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def _styled_cell(column: str, value: Any) -> Text | str:
    if column == "status" and value in TASK_STATUSES:
        return Text(value, style=f"status.{value}")
    return _cell(value)


def format_dict_table(items: list[dict], columns: list[str] | None = None) -> None:
    """Format a list of dictionaries as a table."""
    console = get_console()
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = columns or list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col)
    for item in items:
        table.add_row(*(_styled_cell(col, item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key, _cell(value))

    get_console().print(table)


def format_counts(title: str, counts: dict[str, Any]) -> None:
    """Display a two-column summary table."""
    table = Table(title=title, show_header=True)
    table.add_column("Type", style="cyan")
    table.add_column("Count", justify="right", style="green")
    for label, value in counts.items():
        table.add_row(label, str(value))
    get_console().print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[error]Error:[/error] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[success]Success:[/success] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[warning]Warning:[/warning] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[info]Info:[/info] {message}")
