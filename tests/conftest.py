"""Shared pytest fixtures for bizledger tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from bizledger.database.factories import create_sqlite_database
from bizledger.domain.entities import EntryKind, LedgerEntry
from bizledger.domain.invoice import InvoiceService
from bizledger.domain.ledger import LedgerService
from bizledger.domain.summary import SummaryService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db, currency="USD")


@pytest.fixture
def make_entry():
    """Build in-memory ledger entries for pure-function tests."""
    counter = {"next": 0}

    def _make(
        kind=EntryKind.EXPENSE,
        amount="10.00",
        category="Misc",
        entry_date=date(2024, 3, 15),
        description=None,
        currency="USD",
        sub_category=None,
    ):
        counter["next"] += 1
        return LedgerEntry(
            id=f"e{counter['next']}",
            kind=kind,
            amount=Decimal(amount),
            category=category,
            date=entry_date,
            created_at=datetime.now(UTC),
            currency=currency,
            description=description,
            sub_category=sub_category,
        )

    return _make


@pytest.fixture
def sample_entries(ledger_service):
    """Store a small March/February 2024 ledger and return entry IDs."""
    rows = [
        (EntryKind.INCOME, "5000.00", "Consulting", date(2024, 3, 5), "March retainer"),
        (EntryKind.INCOME, "1200.00", "Product Sales", date(2024, 3, 12), "Online store"),
        (EntryKind.EXPENSE, "1500.00", "Rent", date(2024, 3, 1), "Office rent"),
        (EntryKind.EXPENSE, "250.50", "Software", date(2024, 3, 20), "Hosting and tools"),
        (EntryKind.INCOME, "4000.00", "Consulting", date(2024, 2, 6), "February retainer"),
        (EntryKind.EXPENSE, "1500.00", "Rent", date(2024, 2, 1), "Office rent"),
    ]
    return [
        ledger_service.create_entry(
            kind=kind,
            amount=Decimal(amount),
            category=category,
            date=entry_date,
            description=description,
        )
        for kind, amount, category, entry_date, description in rows
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
