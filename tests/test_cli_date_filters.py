"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from bizledger.cli.date_filters import pop_period_flags, resolve_cli_date_range
from bizledger.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    period_flags = {"this-month": True, "last-month": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags=period_flags,
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Only one period option" in err


def test_resolve_cli_date_range_rejects_period_with_start_end(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period_flags={"this-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_resolve_cli_date_range_returns_period_range():
    expected = get_date_range("last-year")
    result = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"last-year": True},
    )
    assert result == expected


def test_resolve_cli_date_range_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-01",
        end_date="2024-01-31",
        period_flags={},
    )
    assert (start, end) == (date(2024, 1, 1), date(2024, 1, 31))


def test_resolve_cli_date_range_default_range():
    default = (date(2024, 5, 1), date(2024, 5, 31))
    result = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={},
        default_range=default,
    )
    assert result == default


def test_resolve_cli_date_range_rejects_inverted_range(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-02-01",
            end_date="2024-01-01",
            period_flags={},
        )
    assert "is after end date" in capsys.readouterr().err


def test_resolve_cli_date_range_invalid_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(),
            start_date="whenever",
            end_date=None,
            period_flags={},
        )
    assert "Invalid start date" in capsys.readouterr().err


def test_pop_period_flags():
    kwargs = {"this_month": True, "last_week": False, "category": "Rent"}
    flags = pop_period_flags(kwargs)

    assert flags["this-month"] is True
    assert flags["last-week"] is False
    assert flags["this-year"] is False
    assert kwargs == {"category": "Rent"}
