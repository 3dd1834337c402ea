"""Date parsing and period utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from bizledger.domain.entities import Granularity, PeriodBounds
from bizledger.domain.errors import ValidationError


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValidationError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str) -> date:
    """Parse "YYYY-MM" (or any date) into the first day of that month."""
    text = month_str.strip()
    if len(text) == 7 and text[4] == "-":
        text = f"{text}-01"
    return parse_date(text).replace(day=1)


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, this-year, this-week, last-month,
            last-year, last-week

    Returns:
        Tuple of (start_date, end_date). "this-*" periods end today.

    Raises:
        ValidationError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "this-week":
        return (today - timedelta(days=today.weekday()), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        return (start_date, start_date + timedelta(days=6))

    raise ValidationError(
        f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
        "this-week, last-month, last-year, last-week"
    )


def period_bounds(
    reference_date: date, granularity: Granularity = Granularity.MONTH
) -> PeriodBounds:
    """Return the calendar month (or year) containing ``reference_date``."""
    if granularity == Granularity.YEAR:
        return PeriodBounds(
            start=reference_date.replace(month=1, day=1),
            end=reference_date.replace(month=12, day=31),
        )
    start = reference_date.replace(day=1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return PeriodBounds(start=start, end=end)


def shift_period(
    reference_date: date, offset: int, granularity: Granularity = Granularity.MONTH
) -> PeriodBounds:
    """Bounds of the period ``offset`` periods away from the one containing the date."""
    if granularity == Granularity.YEAR:
        shifted = reference_date.replace(day=1) + relativedelta(years=offset)
    else:
        shifted = reference_date.replace(day=1) + relativedelta(months=offset)
    return period_bounds(shifted, granularity)


def _whole_months(bounds: PeriodBounds) -> int:
    """Number of calendar months spanned, or 0 if not month-aligned."""
    if bounds.start.day != 1:
        return 0
    if (bounds.end + timedelta(days=1)).day != 1:
        return 0
    return (
        (bounds.end.year - bounds.start.year) * 12
        + bounds.end.month
        - bounds.start.month
        + 1
    )


def previous_period(bounds: PeriodBounds) -> PeriodBounds:
    """Return the immediately preceding period of equivalent length.

    Month-aligned ranges move back by whole months (so March 1-31 maps to
    February 1-28/29). Other ranges move back by their length in days.
    """
    months = _whole_months(bounds)
    if months:
        start = bounds.start - relativedelta(months=months)
        return PeriodBounds(start=start, end=bounds.start - timedelta(days=1))

    length = (bounds.end - bounds.start).days + 1
    return PeriodBounds(
        start=bounds.start - timedelta(days=length),
        end=bounds.start - timedelta(days=1),
    )


def period_label(start: date, granularity: Granularity = Granularity.MONTH) -> str:
    """Display label for a period, e.g. "Oct 2024" or "2024"."""
    if granularity == Granularity.YEAR:
        return start.strftime("%Y")
    return start.strftime("%b %Y")


def range_label(bounds: PeriodBounds) -> str:
    """Label for an arbitrary range, collapsing to a month label when aligned."""
    if _whole_months(bounds) == 1:
        return period_label(bounds.start)
    return f"{bounds.start.isoformat()} to {bounds.end.isoformat()}"
