"""Ledger filtering and sorting."""

from typing import Iterable, Optional, Sequence

from bizledger.domain.entities import (
    EntryKind,
    FilterSpec,
    LedgerEntry,
    SortField,
    SortOrder,
)
from bizledger.domain.errors import ValidationError, invalid_date_range


def _amount_texts(entry: LedgerEntry) -> tuple[str, ...]:
    # "50.00" as stored and "50" as typed
    return (str(entry.amount), format(entry.amount.normalize(), "f"))


def matches_search(entry: LedgerEntry, search_text: str) -> bool:
    """Case-insensitive substring match on description, category and amount."""
    needle = search_text.strip().lower()
    if not needle:
        return True
    haystacks = [
        entry.description or "",
        entry.category,
        entry.sub_category or "",
        *_amount_texts(entry),
    ]
    return any(needle in text.lower() for text in haystacks)


def validate_filter_spec(spec: FilterSpec) -> None:
    """Reject inverted date ranges."""
    if (
        spec.date_from is not None
        and spec.date_to is not None
        and spec.date_from > spec.date_to
    ):
        raise ValidationError(invalid_date_range(spec.date_from, spec.date_to))


def filter_entries(
    entries: Iterable[LedgerEntry], spec: FilterSpec
) -> list[LedgerEntry]:
    """Return entries matching every predicate in ``spec``, in input order.

    Args:
        entries: Ledger entries to filter
        spec: Filter specification; sort settings are ignored here

    Returns:
        New list of matching entries

    Raises:
        ValidationError: If the date range is inverted
    """
    validate_filter_spec(spec)

    result = []
    for entry in entries:
        if spec.kind is not None and entry.kind != spec.kind:
            continue
        if spec.category is not None and entry.category != spec.category:
            continue
        if spec.date_from is not None and entry.date < spec.date_from:
            continue
        if spec.date_to is not None and entry.date > spec.date_to:
            continue
        if spec.search_text and not matches_search(entry, spec.search_text):
            continue
        result.append(entry)
    return result


def sort_entries(
    entries: Iterable[LedgerEntry],
    sort_by: SortField = SortField.DATE,
    sort_order: SortOrder = SortOrder.DESC,
) -> list[LedgerEntry]:
    """Stable sort of ledger entries.

    Entries with equal keys keep their original relative order in both
    directions (``sorted(reverse=True)`` preserves stability).
    """
    if sort_by == SortField.AMOUNT:
        key = lambda entry: entry.amount
    elif sort_by == SortField.CATEGORY:
        key = lambda entry: entry.category.casefold()
    else:
        key = lambda entry: entry.date
    return sorted(entries, key=key, reverse=sort_order == SortOrder.DESC)


def apply_filter_spec(
    entries: Iterable[LedgerEntry], spec: FilterSpec
) -> list[LedgerEntry]:
    """Filter then sort according to ``spec``."""
    return sort_entries(filter_entries(entries, spec), spec.sort_by, spec.sort_order)


def available_categories(
    entries: Sequence[LedgerEntry], kind: Optional[EntryKind] = None
) -> list[str]:
    """Sorted unique categories, optionally limited to one kind."""
    return sorted(
        {entry.category for entry in entries if kind is None or entry.kind == kind}
    )
