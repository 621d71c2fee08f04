"""Tests for exit code helpers."""

import pytest

from tasktrack.utils import exit_codes


@pytest.mark.parametrize(
    ("code", "name"),
    [
        (exit_codes.SUCCESS, "SUCCESS"),
        (exit_codes.ERROR_GENERAL, "ERROR_GENERAL"),
        (exit_codes.ERROR_INVALID_ARGS, "ERROR_INVALID_ARGS"),
        (exit_codes.ERROR_BACKEND, "ERROR_BACKEND"),
        (exit_codes.ERROR_NOT_FOUND, "ERROR_NOT_FOUND"),
    ],
)
def test_exit_code_names(code, name):
    assert exit_codes.get_exit_code_name(code) == name


def test_unknown_code():
    assert exit_codes.get_exit_code_name(42) == "UNKNOWN(42)"
    assert exit_codes.get_exit_code_description(42) == "Unknown error"


def test_descriptions():
    assert exit_codes.get_exit_code_description(exit_codes.ERROR_NOT_FOUND) == "Resource not found"
    assert "backend" in exit_codes.get_exit_code_description(exit_codes.ERROR_BACKEND)
