"""Tests for the typo-suggesting typer group."""

from typer.testing import CliRunner

from tasktrack.main import app
from tasktrack.utils import exit_codes
from tasktrack.utils.typer_helpers import suggest_commands

runner = CliRunner()


def test_suggest_commands_close_match():
    assert suggest_commands("task", ["tasks", "projects", "users"]) == ["tasks"]


def test_suggest_commands_no_match():
    assert suggest_commands("zzz", ["tasks", "projects"]) == []


def test_unknown_command_prints_suggestion():
    result = runner.invoke(app, ["migrat"])

    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
    assert "Did you mean this?" in result.output
    assert "migrate" in result.output


def test_unknown_command_without_match_is_usage_error():
    result = runner.invoke(app, ["qqqqqq"])

    assert result.exit_code == 2
    assert "Did you mean" not in result.output
