"""Mapper functions to convert SQLAlchemy models to domain entities.

This layer isolates the conversion logic, including the string-to-enum and
stored-decimal conversions, from both the ORM and the domain.
"""

from bizledger.domain import entities as domain
from bizledger.database.models import (
    LedgerEntry as ORMLedgerEntry,
    Invoice as ORMInvoice,
    InvoiceLineItem as ORMLineItem,
    InvoicePayment as ORMPayment,
)
from bizledger.utils.money import coerce_decimal


def entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.LedgerEntry:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerEntry entity."""
    exchange_rate = orm_entry.exchange_rate
    return domain.LedgerEntry(
        id=orm_entry.id,
        kind=domain.EntryKind(orm_entry.kind),
        amount=coerce_decimal(orm_entry.amount),
        category=orm_entry.category,
        sub_category=orm_entry.sub_category,
        description=orm_entry.description,
        date=orm_entry.date,
        currency=orm_entry.currency,
        exchange_rate=coerce_decimal(exchange_rate) if exchange_rate is not None else None,
        created_at=orm_entry.created_at,
    )


def invoice_settings_to_domain(orm_invoice: ORMInvoice) -> domain.InvoiceSettings:
    """Extract invoice-level settings from an Invoice model."""
    return domain.InvoiceSettings(
        tax_rate=coerce_decimal(orm_invoice.tax_rate),
        discount_rate=coerce_decimal(orm_invoice.discount_rate),
        discount_type=domain.DiscountType(orm_invoice.discount_type),
        discount_amount=coerce_decimal(orm_invoice.discount_amount),
        shipping_amount=coerce_decimal(orm_invoice.shipping_amount),
        shipping_tax_rate=coerce_decimal(orm_invoice.shipping_tax_rate),
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        invoice_number=orm_invoice.invoice_number,
        client_name=orm_invoice.client_name,
        issue_date=orm_invoice.issue_date,
        due_date=orm_invoice.due_date,
        currency=orm_invoice.currency,
        status=domain.InvoiceStatus(orm_invoice.status),
        settings=invoice_settings_to_domain(orm_invoice),
        notes=orm_invoice.notes,
        created_at=orm_invoice.created_at,
    )


def line_item_to_domain(orm_item: ORMLineItem) -> domain.LineItem:
    """Convert SQLAlchemy InvoiceLineItem model to domain LineItem entity."""
    return domain.LineItem(
        id=orm_item.id,
        invoice_id=orm_item.invoice_id,
        description=orm_item.description,
        quantity=coerce_decimal(orm_item.quantity),
        rate=coerce_decimal(orm_item.rate),
        tax_rate=coerce_decimal(orm_item.tax_rate),
        discount_rate=coerce_decimal(orm_item.discount_rate),
        discount_type=domain.DiscountType(orm_item.discount_type),
        discount_amount=coerce_decimal(orm_item.discount_amount),
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy InvoicePayment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        invoice_id=orm_payment.invoice_id,
        amount=coerce_decimal(orm_payment.amount),
        date=orm_payment.date,
        method=orm_payment.method,
        created_at=orm_payment.created_at,
    )
