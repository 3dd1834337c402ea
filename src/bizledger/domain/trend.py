"""Trend series over trailing periods."""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from bizledger.domain.aggregation import ensure_single_currency, summarize_period
from bizledger.domain.entities import (
    Granularity,
    LedgerEntry,
    PeriodSummary,
    TrendAverages,
)
from bizledger.domain.errors import ValidationError
from bizledger.utils.date_parser import period_label, shift_period


def build_trend(
    entries: Sequence[LedgerEntry],
    window_end_date: date,
    period_count: int,
    granularity: Granularity = Granularity.MONTH,
    currency: Optional[str] = None,
) -> list[PeriodSummary]:
    """Build one summary per period, oldest first.

    The window ends with the period containing ``window_end_date`` and
    walks back ``period_count`` periods. Periods without entries are
    included as all-zero summaries so the series is contiguous.

    Args:
        entries: Ledger entries (any dates; outside the window are ignored)
        window_end_date: Date inside the last period of the window
        period_count: Number of periods, at least 1
        granularity: Month or year periods
        currency: Reporting currency the entries must use

    Returns:
        List of ``period_count`` PeriodSummary records

    Raises:
        ValidationError: If period_count is less than 1
    """
    if period_count < 1:
        raise ValidationError(f"Period count must be at least 1 (got {period_count})")

    periods = [
        shift_period(window_end_date, -offset, granularity)
        for offset in range(period_count - 1, -1, -1)
    ]
    in_window = [
        entry for entry in entries if periods[0].start <= entry.date <= periods[-1].end
    ]
    ensure_single_currency(in_window, currency)

    return [
        summarize_period(
            in_window, bounds, label=period_label(bounds.start, granularity)
        )
        for bounds in periods
    ]


def trend_averages(series: Sequence[PeriodSummary]) -> TrendAverages:
    """Mean income, expenses and net per period. Empty series gives zeros."""
    if not series:
        zero = Decimal("0")
        return TrendAverages(income=zero, expenses=zero, net=zero)

    count = len(series)
    income = sum((item.total_income for item in series), Decimal("0")) / count
    expenses = sum((item.total_expenses for item in series), Decimal("0")) / count
    return TrendAverages(income=income, expenses=expenses, net=income - expenses)
