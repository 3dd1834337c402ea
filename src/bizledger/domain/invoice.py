"""Invoice calculations and invoice domain service."""

import logging
import secrets
import time
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from bizledger.database.base import Database
from bizledger.domain.entities import (
    DiscountType,
    Invoice,
    InvoiceSettings,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
    LineItemTotals,
    Payment,
    PaymentStatus,
)
from bizledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_invoice_number,
    invoice_not_found,
    line_item_not_found,
    negative_value,
    rate_out_of_range,
)
from bizledger.utils.money import HUNDRED, coerce_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _require_non_negative(field_name: str, value) -> Decimal:
    value = coerce_decimal(value)
    if value < 0:
        raise ValidationError(negative_value(field_name, value))
    return value


def _require_rate(field_name: str, value) -> Decimal:
    value = _require_non_negative(field_name, value)
    if value > HUNDRED:
        raise ValidationError(rate_out_of_range(field_name, value))
    return value


def _discount(
    base: Decimal,
    discount_type: DiscountType,
    discount_rate: Decimal,
    discount_amount: Decimal,
) -> Decimal:
    """Discount against ``base``; fixed discounts never exceed the base."""
    if discount_type == DiscountType.FIXED:
        if discount_amount > base:
            logger.debug("Capping fixed discount %s at %s", discount_amount, base)
        return min(discount_amount, base)
    return base * discount_rate / HUNDRED


def validate_line_item(item: LineItem) -> None:
    """Reject negative quantities and out-of-range rates.

    Raises:
        ValidationError: On the first invalid field
    """
    _require_non_negative("quantity", item.quantity)
    _require_non_negative("rate", item.rate)
    _require_rate("tax_rate", item.tax_rate)
    _require_rate("discount_rate", item.discount_rate)
    _require_non_negative("discount_amount", item.discount_amount)


def validate_invoice_settings(settings: InvoiceSettings) -> None:
    """Reject negative amounts and out-of-range rates in invoice settings."""
    _require_rate("tax_rate", settings.tax_rate)
    _require_rate("discount_rate", settings.discount_rate)
    _require_non_negative("discount_amount", settings.discount_amount)
    _require_non_negative("shipping_amount", settings.shipping_amount)
    _require_rate("shipping_tax_rate", settings.shipping_tax_rate)


def calculate_line_item(item: LineItem) -> LineItemTotals:
    """Compute a line item's amount, discount, tax and total.

    Discount is applied before tax.

    Raises:
        ValidationError: If any input is negative or a rate exceeds 100
    """
    validate_line_item(item)
    amount = coerce_decimal(item.quantity) * coerce_decimal(item.rate)
    discount = _discount(
        amount,
        item.discount_type,
        coerce_decimal(item.discount_rate),
        coerce_decimal(item.discount_amount),
    )
    taxable_amount = amount - discount
    tax = taxable_amount * coerce_decimal(item.tax_rate) / HUNDRED
    return LineItemTotals(
        amount=amount,
        discount=discount,
        taxable_amount=taxable_amount,
        tax=tax,
        total=taxable_amount + tax,
    )


def calculate_invoice(
    line_items: Sequence[LineItem], settings: Optional[InvoiceSettings] = None
) -> InvoiceTotals:
    """Compute invoice totals from line items and invoice-level settings.

    The invoice discount is taken from the line-item subtotal but never
    exceeds what line discounts leave of it, so the discounted amount stays
    non-negative. Invoice tax is charged on the subtotal after the invoice
    discount, and shipping carries its own tax rate.

    Args:
        line_items: Invoice rows
        settings: Invoice-level tax, discount and shipping

    Returns:
        InvoiceTotals with per-line totals in input order
    """
    settings = settings or InvoiceSettings()
    validate_invoice_settings(settings)

    line_totals = tuple(calculate_line_item(item) for item in line_items)
    subtotal = sum((line.amount for line in line_totals), ZERO)
    line_discount = sum((line.discount for line in line_totals), ZERO)
    line_tax = sum((line.tax for line in line_totals), ZERO)

    invoice_discount = min(
        _discount(
            subtotal,
            settings.discount_type,
            coerce_decimal(settings.discount_rate),
            coerce_decimal(settings.discount_amount),
        ),
        subtotal - line_discount,
    )
    invoice_tax = (subtotal - invoice_discount) * coerce_decimal(settings.tax_rate) / HUNDRED

    shipping_amount = coerce_decimal(settings.shipping_amount)
    shipping_tax = shipping_amount * coerce_decimal(settings.shipping_tax_rate) / HUNDRED

    total_discount = line_discount + invoice_discount
    total_tax = line_tax + invoice_tax
    return InvoiceTotals(
        subtotal=subtotal,
        total_discount=total_discount,
        total_tax=total_tax,
        shipping_amount=shipping_amount,
        shipping_tax=shipping_tax,
        total=subtotal - total_discount + total_tax + shipping_amount + shipping_tax,
        line_item_totals=line_totals,
    )


def generate_invoice_number(
    prefix: str = "INV", year: Optional[int] = None, sequence: Optional[int] = None
) -> str:
    """Build an invoice number.

    With a sequence the result is sortable, e.g. ``INV-2024-0007``. Without
    one, a millisecond timestamp and random suffix keep numbers distinct.
    """
    year = year or date.today().year
    if sequence is not None:
        return f"{prefix}-{year}-{sequence:04d}"
    stamp = int(time.time() * 1000)
    return f"{prefix}-{year}-{stamp}{secrets.token_hex(2).upper()}"


def calculate_due_date(issue_date: date, net_days: int) -> date:
    """Due date ``net_days`` calendar days after issue."""
    if net_days < 0:
        raise ValidationError(negative_value("net_days", net_days))
    return issue_date + timedelta(days=net_days)


def calculate_payment_status(
    total: Decimal,
    payments: Iterable[Decimal],
    due_date: date,
    status: InvoiceStatus,
    today: Optional[date] = None,
) -> PaymentStatus:
    """Derive amounts paid/due and the status they imply.

    Cancelled invoices stay cancelled. Otherwise an invoice is paid once
    payments cover a positive total, partial after any payment, and overdue
    when unpaid past its due date.
    """
    today = today or date.today()
    amount_paid = sum((coerce_decimal(amount) for amount in payments), ZERO)
    amount_due = total - amount_paid

    if status == InvoiceStatus.CANCELLED:
        new_status = status
    elif total > 0 and amount_paid >= total:
        new_status = InvoiceStatus.PAID
    elif amount_paid > 0:
        new_status = InvoiceStatus.PARTIAL
    elif due_date < today:
        new_status = InvoiceStatus.OVERDUE
    else:
        new_status = status

    return PaymentStatus(
        amount_paid=amount_paid, amount_due=amount_due, status=new_status
    )


class InvoiceService:
    """Service for managing invoices, their line items and payments."""

    def __init__(self, db: Database):
        """Initialize invoice service.

        Args:
            db: Database instance
        """
        self.db = db

    def _next_invoice_number(self, year: int) -> str:
        """First unused sequence number for the year.

        Explicitly numbered invoices may already hold later slots, so the
        count is only a starting point.
        """
        sequence = self.db.count_invoices_for_year(year) + 1
        invoice_number = generate_invoice_number(year=year, sequence=sequence)
        while self.db.get_invoice_by_number(invoice_number) is not None:
            sequence += 1
            invoice_number = generate_invoice_number(year=year, sequence=sequence)
        return invoice_number

    def create_invoice(
        self,
        client_name: str,
        issue_date: date,
        net_days: int = 30,
        currency: str = "USD",
        settings: Optional[InvoiceSettings] = None,
        notes: Optional[str] = None,
        invoice_number: Optional[str] = None,
    ) -> int:
        """Create a draft invoice.

        Args:
            client_name: Billed client
            issue_date: Issue date
            net_days: Payment terms in days
            currency: Invoice currency code
            settings: Invoice-level tax, discount and shipping
            notes: Optional notes
            invoice_number: Explicit number; generated from the yearly
                sequence when omitted

        Returns:
            Invoice ID

        Raises:
            ValidationError: If inputs are invalid
            ConflictError: If the invoice number is already used
        """
        if not client_name or not client_name.strip():
            raise ValidationError("Client name is required")
        settings = settings or InvoiceSettings()
        validate_invoice_settings(settings)
        due_date = calculate_due_date(issue_date, net_days)

        if invoice_number is None:
            invoice_number = self._next_invoice_number(issue_date.year)
        elif self.db.get_invoice_by_number(invoice_number) is not None:
            raise ConflictError(duplicate_invoice_number(invoice_number))

        invoice_id = self.db.create_invoice(
            invoice_number=invoice_number,
            client_name=client_name.strip(),
            issue_date=issue_date,
            due_date=due_date,
            currency=currency.upper(),
            settings=settings,
            notes=notes,
        )
        logger.info("Created invoice %s (%s)", invoice_id, invoice_number)
        return invoice_id

    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID, or None."""
        return self.db.get_invoice(invoice_id)

    def require_invoice(self, invoice_id: int) -> Invoice:
        """Get invoice by ID.

        Raises:
            NotFoundError: If the invoice doesn't exist
        """
        invoice = self.db.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return invoice

    def list_invoices(self, status: Optional[InvoiceStatus] = None) -> list[Invoice]:
        """List invoices, newest issue date first."""
        return self.db.list_invoices(status=status)

    def add_line_item(self, invoice_id: int, item: LineItem) -> int:
        """Validate and attach a line item. Returns line item ID."""
        self.require_invoice(invoice_id)
        validate_line_item(item)
        line_item_id = self.db.add_line_item(invoice_id, item)
        logger.info("Added line item %s to invoice %s", line_item_id, invoice_id)
        return line_item_id

    def remove_line_item(self, invoice_id: int, line_item_id: int) -> None:
        """Remove a line item from an invoice.

        Raises:
            NotFoundError: If the invoice or line item doesn't exist
        """
        self.require_invoice(invoice_id)
        item_ids = {item.id for item in self.db.get_line_items(invoice_id)}
        if line_item_id not in item_ids:
            raise NotFoundError(line_item_not_found(line_item_id))
        self.db.delete_line_item(line_item_id)
        logger.info("Removed line item %s from invoice %s", line_item_id, invoice_id)

    def get_line_items(self, invoice_id: int) -> list[LineItem]:
        """Line items of an invoice in insertion order."""
        self.require_invoice(invoice_id)
        return self.db.get_line_items(invoice_id)

    def calculate_totals(self, invoice_id: int) -> InvoiceTotals:
        """Totals for a stored invoice."""
        invoice = self.require_invoice(invoice_id)
        return calculate_invoice(self.db.get_line_items(invoice_id), invoice.settings)

    def record_payment(
        self,
        invoice_id: int,
        amount: Decimal,
        payment_date: date,
        method: Optional[str] = None,
    ) -> int:
        """Record a payment and refresh the stored status.

        Raises:
            ValidationError: If the amount is not positive or the invoice is cancelled
        """
        invoice = self.require_invoice(invoice_id)
        if invoice.status == InvoiceStatus.CANCELLED:
            raise ValidationError(f"Invoice {invoice_id} is cancelled")
        if amount <= 0:
            raise ValidationError(f"Payment amount must be positive (got {amount})")

        payment_id = self.db.add_payment(invoice_id, amount, payment_date, method)
        status = self.get_payment_status(invoice_id, today=payment_date)
        if status.status != invoice.status:
            self.db.update_invoice_status(invoice_id, status.status)
        logger.info(
            "Recorded payment %s of %s on invoice %s", payment_id, amount, invoice_id
        )
        return payment_id

    def get_payments(self, invoice_id: int) -> list[Payment]:
        self.require_invoice(invoice_id)
        return self.db.get_payments(invoice_id)

    def get_payment_status(
        self, invoice_id: int, today: Optional[date] = None
    ) -> PaymentStatus:
        """Amounts paid/due and derived status for a stored invoice."""
        invoice = self.require_invoice(invoice_id)
        totals = calculate_invoice(self.db.get_line_items(invoice_id), invoice.settings)
        payments = [payment.amount for payment in self.db.get_payments(invoice_id)]
        return calculate_payment_status(
            totals.total, payments, invoice.due_date, invoice.status, today
        )

    def update_status(self, invoice_id: int, status: InvoiceStatus) -> None:
        """Set an invoice's status explicitly (e.g. sent or cancelled)."""
        self.require_invoice(invoice_id)
        self.db.update_invoice_status(invoice_id, status)
        logger.info("Invoice %s status set to %s", invoice_id, status.value)
