"""Ledger entry domain service."""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from bizledger.database.base import Database
from bizledger.domain.entities import EntryKind, FilterSpec, LedgerEntry
from bizledger.domain.errors import (
    NotFoundError,
    ValidationError,
    entry_not_found,
    negative_value,
)
from bizledger.domain.filtering import (
    apply_filter_spec,
    available_categories,
    validate_filter_spec,
)

logger = logging.getLogger(__name__)


def _validate_amount(amount: Decimal) -> None:
    if amount < 0:
        raise ValidationError(negative_value("amount", amount))


def _validate_exchange_rate(exchange_rate: Optional[Decimal]) -> None:
    if exchange_rate is not None and exchange_rate < 0:
        raise ValidationError(negative_value("exchange_rate", exchange_rate))


def _validate_category(category: str) -> str:
    if not category or not category.strip():
        raise ValidationError("Category is required")
    return category.strip()


class LedgerService:
    """Service for managing ledger entries."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_entry(
        self,
        kind: EntryKind,
        amount: Decimal,
        category: str,
        date: date,
        description: Optional[str] = None,
        currency: str = "USD",
        sub_category: Optional[str] = None,
        exchange_rate: Optional[Decimal] = None,
    ) -> str:
        """Record an income or expense entry.

        Args:
            kind: Income or expense
            amount: Non-negative amount
            category: Category label
            date: Date the entry is attributed to
            description: Optional description
            currency: Currency code
            sub_category: Optional secondary category
            exchange_rate: Optional rate to the reporting currency (stored only)

        Returns:
            Entry ID

        Raises:
            ValidationError: If amount or exchange rate is negative or category is empty
        """
        _validate_amount(amount)
        _validate_exchange_rate(exchange_rate)
        category = _validate_category(category)
        entry_id = uuid.uuid4().hex
        self.db.create_entry(
            entry_id=entry_id,
            kind=kind,
            amount=amount,
            category=category,
            date=date,
            currency=currency.upper(),
            description=description,
            sub_category=sub_category,
            exchange_rate=exchange_rate,
        )
        logger.info("Created %s entry %s for %s", kind.value, entry_id, amount)
        return entry_id

    def get_entry(self, entry_id: str) -> Optional[LedgerEntry]:
        """Get entry by ID.

        Args:
            entry_id: Entry ID

        Returns:
            LedgerEntry or None if not found
        """
        return self.db.get_entry(entry_id)

    def require_entry(self, entry_id: str) -> LedgerEntry:
        """Get entry by ID, raising NotFoundError if missing."""
        entry = self.db.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def update_entry(
        self,
        entry_id: str,
        kind: Optional[EntryKind] = None,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
        date: Optional[date] = None,
        description: Optional[str] = None,
        currency: Optional[str] = None,
        sub_category: Optional[str] = None,
        exchange_rate: Optional[Decimal] = None,
        clear_description: bool = False,
        clear_sub_category: bool = False,
        clear_exchange_rate: bool = False,
    ) -> None:
        """Update entry fields. ``id`` and ``created_at`` never change.

        Only the fields that are provided are updated.

        Args:
            clear_description: If True, clear the description (description must be None)
            clear_sub_category: If True, clear the sub-category (sub_category must be None)
            clear_exchange_rate: If True, clear the exchange rate (exchange_rate must be None)

        Raises:
            NotFoundError: If the entry doesn't exist
            ValidationError: If a new amount or exchange rate is negative, the
                category is empty, or a field is both set and cleared
        """
        self.require_entry(entry_id)
        if amount is not None:
            _validate_amount(amount)
        if category is not None:
            category = _validate_category(category)
        _validate_exchange_rate(exchange_rate)
        for field_name, value, clear in (
            ("description", description, clear_description),
            ("sub_category", sub_category, clear_sub_category),
            ("exchange_rate", exchange_rate, clear_exchange_rate),
        ):
            if clear and value is not None:
                raise ValidationError(f"Cannot set and clear {field_name} at once")

        self.db.update_entry(
            entry_id=entry_id,
            kind=kind,
            amount=amount,
            category=category,
            date=date,
            description=description,
            currency=currency.upper() if currency else None,
            sub_category=sub_category,
            exchange_rate=exchange_rate,
            clear_description=clear_description,
            clear_sub_category=clear_sub_category,
            clear_exchange_rate=clear_exchange_rate,
        )
        logger.info("Updated entry %s", entry_id)

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        self.require_entry(entry_id)
        self.db.delete_entry(entry_id)
        logger.info("Deleted entry %s", entry_id)

    def list_entries(self, spec: Optional[FilterSpec] = None) -> list[LedgerEntry]:
        """List entries matching a filter spec, sorted as the spec asks.

        The date range and kind narrow the database query; the remaining
        predicates and the sort run in memory.
        """
        spec = spec or FilterSpec()
        validate_filter_spec(spec)
        entries = self.db.list_entries(
            start_date=spec.date_from, end_date=spec.date_to, kind=spec.kind
        )
        return apply_filter_spec(entries, spec)

    def list_categories(self, kind: Optional[EntryKind] = None) -> list[str]:
        """Sorted unique categories in use."""
        return available_categories(self.db.list_entries(kind=kind), kind)
