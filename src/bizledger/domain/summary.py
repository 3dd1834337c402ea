"""Summary reports built from stored ledger entries."""

from datetime import date
from typing import Optional

from bizledger.database.base import Database
from bizledger.domain.aggregation import (
    compare_to_previous_period,
    savings_rate,
    summarize_period,
    top_categories,
)
from bizledger.domain.entities import (
    Granularity,
    MonthlyAudit,
    PeriodBounds,
    PeriodSummary,
)
from bizledger.domain.trend import build_trend
from bizledger.utils.date_parser import period_bounds, period_label, previous_period, shift_period


class SummaryService:
    """Service for building period reports."""

    def __init__(self, db: Database, currency: Optional[str] = None):
        """Initialize summary service.

        Args:
            db: Database instance
            currency: Reporting currency; entries in other currencies are
                rejected when set
        """
        self.db = db
        self.currency = currency

    def summarize(self, bounds: PeriodBounds, label: Optional[str] = None) -> PeriodSummary:
        """Summary for an arbitrary inclusive period."""
        entries = self.db.list_entries(start_date=bounds.start, end_date=bounds.end)
        return summarize_period(entries, bounds, label=label, currency=self.currency)

    def monthly_audit(self, reference_date: date, top_n: int = 5) -> MonthlyAudit:
        """Compare the month containing ``reference_date`` with the month before.

        Args:
            reference_date: Any date inside the audited month
            top_n: Number of top categories to include per kind

        Returns:
            MonthlyAudit report
        """
        bounds = period_bounds(reference_date, Granularity.MONTH)
        current = self.summarize(bounds, label=period_label(bounds.start))
        return self._audit(current, previous_period(bounds), top_n)

    def range_audit(self, bounds: PeriodBounds, top_n: int = 5) -> MonthlyAudit:
        """Compare a custom range with the equivalent range right before it."""
        return self._audit(self.summarize(bounds), previous_period(bounds), top_n)

    def _audit(
        self, current: PeriodSummary, previous_bounds: PeriodBounds, top_n: int
    ) -> MonthlyAudit:
        previous = self.summarize(previous_bounds)
        return MonthlyAudit(
            current=current,
            previous=previous,
            comparison=compare_to_previous_period(current, previous),
            savings_rate=savings_rate(current.total_income, current.total_expenses),
            top_income=tuple(top_categories(current.income_by_category, top_n)),
            top_expenses=tuple(top_categories(current.expenses_by_category, top_n)),
        )

    def trend(
        self,
        window_end_date: date,
        period_count: int = 12,
        granularity: Granularity = Granularity.MONTH,
    ) -> list[PeriodSummary]:
        """Trailing trend series ending with the period containing the date."""
        first = shift_period(window_end_date, -(max(period_count, 1) - 1), granularity)
        last = period_bounds(window_end_date, granularity)
        entries = self.db.list_entries(start_date=first.start, end_date=last.end)
        return build_trend(
            entries,
            window_end_date,
            period_count,
            granularity=granularity,
            currency=self.currency,
        )
