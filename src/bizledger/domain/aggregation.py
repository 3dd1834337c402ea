"""Period aggregation over ledger entries."""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from bizledger.domain.entities import (
    CategoryAmount,
    EntryKind,
    LedgerEntry,
    PeriodBounds,
    PeriodComparison,
    PeriodSummary,
    rank_categories,
)
from bizledger.domain.errors import (
    CurrencyMismatchError,
    ValidationError,
    currency_mismatch,
    mixed_currencies,
)
from bizledger.utils.date_parser import range_label
from bizledger.utils.money import HUNDRED, percent_change

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def ensure_single_currency(
    entries: Iterable[LedgerEntry], expected: Optional[str] = None
) -> Optional[str]:
    """Check that all entries share one currency.

    Args:
        entries: Entries about to be aggregated
        expected: Reporting currency the entries must be in, if known

    Returns:
        The shared currency code, or ``expected`` when there are no entries

    Raises:
        CurrencyMismatchError: On mixed currencies or a reporting mismatch
    """
    currencies = {entry.currency.upper() for entry in entries}
    if len(currencies) > 1:
        raise CurrencyMismatchError(mixed_currencies(currencies))
    if not currencies:
        return expected.upper() if expected else None

    found = currencies.pop()
    if expected is not None and found != expected.upper():
        raise CurrencyMismatchError(currency_mismatch(expected.upper(), found))
    return found


def summarize_period(
    entries: Iterable[LedgerEntry],
    bounds: PeriodBounds,
    label: Optional[str] = None,
    currency: Optional[str] = None,
) -> PeriodSummary:
    """Summarize the entries whose date falls inside ``bounds`` (inclusive).

    Args:
        entries: Ledger entries, in any order and any period
        bounds: Inclusive period
        label: Display label; derived from the bounds when omitted
        currency: Reporting currency the period's entries must use

    Returns:
        PeriodSummary with totals and per-kind category breakdowns
    """
    in_period = [entry for entry in entries if bounds.contains(entry.date)]
    ensure_single_currency(in_period, currency)

    total_income = ZERO
    total_expenses = ZERO
    income_by_category: dict[str, Decimal] = defaultdict(lambda: ZERO)
    expenses_by_category: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for entry in in_period:
        if entry.kind == EntryKind.INCOME:
            total_income += entry.amount
            income_by_category[entry.category] += entry.amount
        else:
            total_expenses += entry.amount
            expenses_by_category[entry.category] += entry.amount

    count = len(in_period)
    average = (total_income + total_expenses) / count if count else ZERO

    return PeriodSummary(
        start=bounds.start,
        end=bounds.end,
        label=label if label is not None else range_label(bounds),
        total_income=total_income,
        total_expenses=total_expenses,
        net_balance=total_income - total_expenses,
        transaction_count=count,
        average_transaction_amount=average,
        income_by_category=income_by_category,
        expenses_by_category=expenses_by_category,
    )


def compare_to_previous_period(
    current: PeriodSummary, previous: PeriodSummary
) -> PeriodComparison:
    """Component-wise percent change between two summaries."""
    return PeriodComparison(
        income_change=percent_change(current.total_income, previous.total_income),
        expense_change=percent_change(
            current.total_expenses, previous.total_expenses
        ),
        net_change=percent_change(current.net_balance, previous.net_balance),
    )


def top_categories(
    breakdown: Mapping[str, Decimal], n: int
) -> list[CategoryAmount]:
    """Largest categories first, ties broken by category name ascending.

    Raises:
        ValidationError: If ``n`` is negative
    """
    if n < 0:
        raise ValidationError(f"Category count must not be negative (got {n})")
    return rank_categories(breakdown)[:n]


def sorted_breakdown(breakdown: Mapping[str, Decimal]) -> list[CategoryAmount]:
    """Entire breakdown in presentation order."""
    return rank_categories(breakdown)


def savings_rate(total_income: Decimal, total_expenses: Decimal) -> Decimal:
    """Share of income kept, in percent. Zero income gives 0."""
    if total_income == 0:
        return ZERO
    return (total_income - total_expenses) / total_income * HUNDRED


def category_share(amount: Decimal, total: Decimal) -> Decimal:
    """Percent of ``total`` represented by ``amount``. Zero total gives 0."""
    if total == 0:
        return ZERO
    return amount / total * HUNDRED


def summarize_all(
    entries: Sequence[LedgerEntry], currency: Optional[str] = None
) -> Optional[PeriodSummary]:
    """Summary over the full date span of ``entries``; None when empty."""
    if not entries:
        return None
    bounds = PeriodBounds(
        start=min(entry.date for entry in entries),
        end=max(entry.date for entry in entries),
    )
    logger.debug("Summarizing %d entries over %s", len(entries), bounds)
    return summarize_period(entries, bounds, currency=currency)
