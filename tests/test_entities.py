"""Tests for domain entities."""

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from bizledger.domain.entities import (
    DiscountType,
    EntryKind,
    FilterSpec,
    InvoiceSettings,
    LedgerEntry,
    LineItem,
    SortField,
    SortOrder,
)
from bizledger.domain.errors import ValidationError


class TestLedgerEntry:
    """Tests for LedgerEntry entity."""

    def test_create_entry(self):
        entry = LedgerEntry(
            id="a1",
            kind=EntryKind.INCOME,
            amount=Decimal("100"),
            category="Sales",
            date=date(2024, 1, 1),
            created_at=datetime.now(UTC),
        )
        assert entry.currency == "USD"
        assert entry.description is None
        assert entry.exchange_rate is None

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="amount must not be negative"):
            LedgerEntry(
                id="a1",
                kind=EntryKind.EXPENSE,
                amount=Decimal("-1"),
                category="Rent",
                date=date(2024, 1, 1),
                created_at=datetime.now(UTC),
            )

    def test_entry_immutability(self):
        entry = LedgerEntry(
            id="a1",
            kind=EntryKind.INCOME,
            amount=Decimal("1"),
            category="Sales",
            date=date(2024, 1, 1),
            created_at=datetime.now(UTC),
        )
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            entry.amount = Decimal("2")


def test_enum_values_are_strings():
    assert EntryKind("income") is EntryKind.INCOME
    assert DiscountType("fixed") is DiscountType.FIXED
    assert EntryKind.EXPENSE == "expense"


def test_defaults():
    spec = FilterSpec()
    assert spec.kind is None
    assert spec.sort_by == SortField.DATE
    assert spec.sort_order == SortOrder.DESC

    settings = InvoiceSettings()
    assert settings.discount_type == DiscountType.PERCENTAGE
    assert settings.shipping_amount == Decimal("0")

    item = LineItem(quantity=Decimal("1"), rate=Decimal("2"))
    assert item.tax_rate == Decimal("0")
    assert item.id is None
