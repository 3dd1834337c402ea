"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from bizledger.database.models import (
    LedgerEntry as ORMLedgerEntry,
    Invoice as ORMInvoice,
    InvoiceLineItem as ORMLineItem,
    InvoicePayment as ORMPayment,
)
from bizledger.database.mappers import (
    entry_to_domain,
    invoice_to_domain,
    line_item_to_domain,
    payment_to_domain,
)
from bizledger.domain.entities import (
    DiscountType,
    EntryKind,
    Invoice,
    InvoiceStatus,
    LedgerEntry,
    LineItem,
    Payment,
)


class TestEntryMapper:
    """Tests for LedgerEntry mapper."""

    def test_entry_to_domain(self):
        """Test converting ORM LedgerEntry to domain LedgerEntry."""
        orm_entry = ORMLedgerEntry(
            id="abc",
            kind="income",
            amount=Decimal("99.95"),
            category="Consulting",
            sub_category=None,
            description="Workshop",
            date=date(2024, 1, 15),
            currency="USD",
            exchange_rate="1.25",
            created_at=datetime.now(UTC),
        )

        entry = entry_to_domain(orm_entry)

        assert isinstance(entry, LedgerEntry)
        assert entry.kind == EntryKind.INCOME
        assert entry.amount == Decimal("99.95")
        assert entry.exchange_rate == Decimal("1.25")
        assert entry.description == "Workshop"

    def test_entry_without_exchange_rate(self):
        orm_entry = ORMLedgerEntry(
            id="def",
            kind="expense",
            amount=Decimal("5"),
            category="Fees",
            date=date(2024, 1, 15),
            currency="EUR",
            exchange_rate=None,
            created_at=datetime.now(UTC),
        )
        entry = entry_to_domain(orm_entry)
        assert entry.kind == EntryKind.EXPENSE
        assert entry.exchange_rate is None


class TestInvoiceMappers:
    """Tests for invoice, line item and payment mappers."""

    def test_invoice_to_domain(self):
        orm_invoice = ORMInvoice(
            id=3,
            invoice_number="INV-2024-0003",
            client_name="Acme",
            issue_date=date(2024, 2, 1),
            due_date=date(2024, 3, 2),
            currency="USD",
            status="sent",
            tax_rate=Decimal("5"),
            discount_rate=Decimal("0"),
            discount_type="fixed",
            discount_amount=Decimal("25"),
            shipping_amount=Decimal("10"),
            shipping_tax_rate=Decimal("0"),
            notes=None,
            created_at=datetime.now(UTC),
        )

        invoice = invoice_to_domain(orm_invoice)

        assert isinstance(invoice, Invoice)
        assert invoice.status == InvoiceStatus.SENT
        assert invoice.settings.discount_type == DiscountType.FIXED
        assert invoice.settings.discount_amount == Decimal("25")
        assert invoice.settings.shipping_amount == Decimal("10")

    def test_line_item_to_domain(self):
        orm_item = ORMLineItem(
            id=7,
            invoice_id=3,
            description="Hours",
            quantity=Decimal("2.5"),
            rate=Decimal("80"),
            tax_rate=Decimal("0"),
            discount_rate=Decimal("10"),
            discount_type="percentage",
            discount_amount=Decimal("0"),
        )

        item = line_item_to_domain(orm_item)

        assert isinstance(item, LineItem)
        assert item.quantity == Decimal("2.5")
        assert item.discount_type == DiscountType.PERCENTAGE
        assert item.invoice_id == 3

    def test_payment_to_domain(self):
        orm_payment = ORMPayment(
            id=1,
            invoice_id=3,
            amount=Decimal("50"),
            date=date(2024, 2, 10),
            method="card",
            created_at=datetime.now(UTC),
        )

        payment = payment_to_domain(orm_payment)

        assert isinstance(payment, Payment)
        assert payment.amount == Decimal("50")
        assert payment.method == "card"
