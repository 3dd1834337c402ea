"""Tests for date parsing and period helpers."""

import pytest
from datetime import date, timedelta

from bizledger.domain.entities import Granularity, PeriodBounds
from bizledger.domain.errors import ValidationError
from bizledger.utils.date_parser import (
    get_date_range,
    parse_date,
    parse_month,
    period_bounds,
    period_label,
    previous_period,
    range_label,
    shift_period,
)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_relative_dates():
    """Test parsing 'today', 'yesterday' and 'this month'."""
    today = date.today()
    assert parse_date("today") == today
    assert parse_date("Yesterday") == today - timedelta(days=1)
    assert parse_date("this month") == today.replace(day=1)


def test_parse_invalid_date():
    """Test that garbage raises ValidationError."""
    with pytest.raises(ValidationError, match="Could not parse date"):
        parse_date("not a date")


def test_parse_month():
    assert parse_month("2024-03") == date(2024, 3, 1)
    assert parse_month("2024-03-17") == date(2024, 3, 1)


def test_get_date_range_last_month():
    start, end = get_date_range("last-month")
    assert start.day == 1
    assert end == date.today().replace(day=1) - timedelta(days=1)
    assert start <= end


def test_get_date_range_unknown():
    with pytest.raises(ValidationError, match="Unknown period"):
        get_date_range("next-decade")


class TestPeriodBounds:
    """Tests for calendar period bounds."""

    def test_month(self):
        bounds = period_bounds(date(2024, 2, 10))
        assert bounds == PeriodBounds(start=date(2024, 2, 1), end=date(2024, 2, 29))

    def test_year(self):
        bounds = period_bounds(date(2023, 7, 4), Granularity.YEAR)
        assert bounds == PeriodBounds(start=date(2023, 1, 1), end=date(2023, 12, 31))

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValidationError, match="is after end date"):
            PeriodBounds(start=date(2024, 3, 2), end=date(2024, 3, 1))

    def test_contains_is_inclusive(self):
        bounds = PeriodBounds(start=date(2024, 3, 1), end=date(2024, 3, 31))
        assert bounds.contains(date(2024, 3, 1))
        assert bounds.contains(date(2024, 3, 31))
        assert not bounds.contains(date(2024, 4, 1))


class TestPreviousPeriod:
    """Tests for previous_period."""

    def test_previous_month(self):
        march = PeriodBounds(start=date(2024, 3, 1), end=date(2024, 3, 31))
        assert previous_period(march) == PeriodBounds(
            start=date(2024, 2, 1), end=date(2024, 2, 29)
        )

    def test_previous_month_across_year(self):
        january = PeriodBounds(start=date(2024, 1, 1), end=date(2024, 1, 31))
        assert previous_period(january) == PeriodBounds(
            start=date(2023, 12, 1), end=date(2023, 12, 31)
        )

    def test_previous_quarter(self):
        q2 = PeriodBounds(start=date(2024, 4, 1), end=date(2024, 6, 30))
        assert previous_period(q2) == PeriodBounds(
            start=date(2024, 1, 1), end=date(2024, 3, 31)
        )

    def test_previous_custom_range_same_length(self):
        custom = PeriodBounds(start=date(2024, 3, 10), end=date(2024, 3, 19))
        assert previous_period(custom) == PeriodBounds(
            start=date(2024, 2, 29), end=date(2024, 3, 9)
        )


def test_shift_period():
    assert shift_period(date(2024, 1, 31), -1) == PeriodBounds(
        start=date(2023, 12, 1), end=date(2023, 12, 31)
    )
    assert shift_period(date(2024, 6, 15), -2, Granularity.YEAR) == PeriodBounds(
        start=date(2022, 1, 1), end=date(2022, 12, 31)
    )


def test_period_labels():
    assert period_label(date(2024, 10, 1)) == "Oct 2024"
    assert period_label(date(2024, 1, 1), Granularity.YEAR) == "2024"
    assert range_label(PeriodBounds(start=date(2024, 3, 1), end=date(2024, 3, 31))) == "Mar 2024"
    assert (
        range_label(PeriodBounds(start=date(2024, 3, 1), end=date(2024, 3, 15)))
        == "2024-03-01 to 2024-03-15"
    )
