"""Console utilities for tasktrack."""

from functools import lru_cache

from rich.console import Console
from rich.theme import Theme

TASKTRACK_THEME = Theme(
    {
        "error": "bold red",
        "success": "bold green",
        "warning": "bold yellow",
        "info": "bold blue",
        "status.pending": "yellow",
        "status.in-progress": "cyan",
        "status.completed": "green",
    }
)


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Shared rich Console with the tasktrack message and status styles."""
    return Console(highlight=highlight, theme=TASKTRACK_THEME)
