"""Tests for output formatters."""

import json

import yaml

from tasktrack.utils.ui.formatters import format_output


def test_json_output(capsys):
    format_output({"tasks": [{"id": "t1", "title": "a"}]}, "json")
    assert json.loads(capsys.readouterr().out) == {"tasks": [{"id": "t1", "title": "a"}]}


def test_yaml_output(capsys):
    format_output({"id": "p1", "name": "Home"}, "yaml")
    assert yaml.safe_load(capsys.readouterr().out) == {"id": "p1", "name": "Home"}


def test_table_uses_record_columns(capsys):
    format_output({"tasks": [{"id": "t1", "title": "Walk", "secret": "hidden"}]})
    out = capsys.readouterr().out
    assert "Walk" in out
    assert "hidden" not in out


def test_empty_table(capsys):
    format_output({"projects": []})
    assert "No items found" in capsys.readouterr().out


def test_single_item(capsys):
    format_output({"id": "p1", "name": "Home", "archived": False})
    out = capsys.readouterr().out
    assert "Home" in out
    assert "✗" in out


def test_console_theme_has_status_styles():
    from tasktrack.utils.ui.console import get_console

    console = get_console()
    for status in ("pending", "in-progress", "completed"):
        assert console.get_style(f"status.{status}") is not None
    assert console.get_style("error").bold
