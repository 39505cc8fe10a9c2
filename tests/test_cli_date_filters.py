"""Tests for CLI date filter helpers."""

from datetime import date

import click
import pytest

from fintrack.cli.date_filters import (
    resolve_date_option,
    resolve_month_option,
    resolve_year_option,
)


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_date_option_defaults_to_today():
    assert resolve_date_option(_ctx(), None) == date.today()
    assert resolve_date_option(_ctx(), "2024-02-29") == date(2024, 2, 29)


def test_resolve_date_option_rejects_garbage(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_date_option(_ctx(), "not a date at all", "due date")

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Invalid due date" in err


def test_resolve_month_option():
    assert resolve_month_option(_ctx(), None) == date.today().replace(day=1)
    assert resolve_month_option(_ctx(), "2024-03") == date(2024, 3, 1)


def test_resolve_month_option_rejects_garbage(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_month_option(_ctx(), "someday")

    assert excinfo.value.exit_code == 1
    assert "Invalid month" in capsys.readouterr().err


def test_resolve_year_option():
    assert resolve_year_option(2020, date(2024, 5, 1)) == 2020
    assert resolve_year_option(None, date(2024, 5, 1)) == 2024
