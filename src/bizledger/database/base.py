"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular imports through service modules
from bizledger.domain.entities import (
    EntryKind,
    Invoice,
    InvoiceSettings,
    InvoiceStatus,
    LedgerEntry,
    LineItem,
    Payment,
)


class Database(ABC):
    """Abstract database interface for bizledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Ledger entry operations
    @abstractmethod
    def create_entry(
        self,
        entry_id: str,
        kind: EntryKind,
        amount: Decimal,
        category: str,
        date: date,
        currency: str,
        description: Optional[str] = None,
        sub_category: Optional[str] = None,
        exchange_rate: Optional[Decimal] = None,
    ) -> str:
        """Create a ledger entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_entry(self, entry_id: str) -> Optional[LedgerEntry]:
        """Get ledger entry by ID."""
        pass

    @abstractmethod
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
        """Update the provided fields of a ledger entry.

        Args:
            clear_description: If True, set description to None
            clear_sub_category: If True, set sub_category to None
            clear_exchange_rate: If True, set exchange_rate to None
        """
        pass

    @abstractmethod
    def delete_entry(self, entry_id: str) -> None:
        """Delete a ledger entry."""
        pass

    @abstractmethod
    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[EntryKind] = None,
    ) -> list[LedgerEntry]:
        """List ledger entries in insertion order, optionally filtered."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        invoice_number: str,
        client_name: str,
        issue_date: date,
        due_date: date,
        currency: str,
        settings: InvoiceSettings,
        notes: Optional[str] = None,
        status: InvoiceStatus = InvoiceStatus.DRAFT,
    ) -> int:
        """Create an invoice. Returns invoice ID."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def get_invoice_by_number(self, invoice_number: str) -> Optional[Invoice]:
        """Get invoice by invoice number."""
        pass

    @abstractmethod
    def list_invoices(self, status: Optional[InvoiceStatus] = None) -> list[Invoice]:
        """List invoices, optionally filtered by status."""
        pass

    @abstractmethod
    def count_invoices_for_year(self, year: int) -> int:
        """Count invoices issued in a calendar year."""
        pass

    @abstractmethod
    def update_invoice_status(self, invoice_id: int, status: InvoiceStatus) -> None:
        """Set invoice status."""
        pass

    # Line item operations
    @abstractmethod
    def add_line_item(self, invoice_id: int, item: LineItem) -> int:
        """Add a line item to an invoice. Returns line item ID."""
        pass

    @abstractmethod
    def get_line_items(self, invoice_id: int) -> list[LineItem]:
        """Get line items of an invoice in insertion order."""
        pass

    @abstractmethod
    def delete_line_item(self, line_item_id: int) -> None:
        """Delete a line item."""
        pass

    # Payment operations
    @abstractmethod
    def add_payment(
        self,
        invoice_id: int,
        amount: Decimal,
        payment_date: date,
        method: Optional[str] = None,
    ) -> int:
        """Record a payment. Returns payment ID."""
        pass

    @abstractmethod
    def get_payments(self, invoice_id: int) -> list[Payment]:
        """Get payments of an invoice, oldest first."""
        pass
