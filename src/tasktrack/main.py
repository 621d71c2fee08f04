"""Main entry point for the tasktrack CLI."""

import typer

from tasktrack.commands import data, projects, system, tasks, users
from tasktrack.commands.migrate import migrate
from tasktrack.utils.typer_helpers import SuggestingGroup

# Create main app with custom group class
app = typer.Typer(
    name="tasktrack",
    cls=SuggestingGroup,
    help="Task and project tracker with pluggable storage backends",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(users.app, name="users", help="User management commands")
app.add_typer(data.app, name="data", help="Data management (export, import, clear)")

# Add top-level commands
app.command("migrate")(migrate)
app.command("init")(system.init)
app.command("stats")(system.stats)
app.command("version")(system.version)


if __name__ == "__main__":
    app()
