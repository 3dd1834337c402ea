"""Shared domain error messages and error types."""

from datetime import date
from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class CurrencyMismatchError(ValidationError):
    """Amounts in different currencies were combined in one aggregate."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def entry_not_found(entry_id: str) -> str:
    """Return message for missing ledger entry."""
    return f"Entry {entry_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def line_item_not_found(line_item_id: int) -> str:
    """Return message for missing invoice line item."""
    return f"Line item {line_item_id} not found"


def duplicate_invoice_number(invoice_number: str) -> str:
    """Return message for duplicate invoice number."""
    return f"Invoice number '{invoice_number}' already exists"


def negative_value(field_name: str, value: Decimal | int) -> str:
    """Return message for a value that must not be negative."""
    return f"{field_name} must not be negative (got {value})"


def rate_out_of_range(field_name: str, value: Decimal) -> str:
    """Return message for a percentage outside 0-100."""
    return f"{field_name} must be between 0 and 100 (got {value})"


def invalid_date_range(date_from: date, date_to: date) -> str:
    """Return message for an inverted date range."""
    return f"Start date {date_from} is after end date {date_to}"


def mixed_currencies(currencies: set[str]) -> str:
    """Return message when entries in several currencies are aggregated."""
    listed = ", ".join(sorted(currencies))
    return f"Cannot aggregate amounts in different currencies: {listed}"


def currency_mismatch(expected: str, found: str) -> str:
    """Return message when entries do not match the reporting currency."""
    return f"Entries are in {found} but the reporting currency is {expected}"
