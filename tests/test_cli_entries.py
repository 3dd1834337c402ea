"""Tests for entry commands."""

import re
from datetime import date
from decimal import Decimal

from bizledger.cli.main import cli
from bizledger.domain.entities import EntryKind


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_add_entry(cli_runner, temp_db, ledger_service):
    """Test adding an income entry."""
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--kind",
        "income",
        "--amount",
        "1,500.00",
        "--category",
        "Consulting",
        "--date",
        "2024-03-05",
        "--description",
        "Workshop",
    )

    assert result.exit_code == 0
    assert "Created entry" in result.output
    assert "$1,500.00" in result.output
    assert "Consulting" in result.output

    entries = ledger_service.list_entries()
    assert len(entries) == 1
    assert entries[0].kind == EntryKind.INCOME
    assert entries[0].amount == Decimal("1500.00")
    assert entries[0].date == date(2024, 3, 5)


def test_add_entry_uses_reporting_currency(cli_runner, temp_db, ledger_service):
    result = _invoke(
        cli_runner,
        temp_db,
        "--currency",
        "eur",
        "add",
        "--kind",
        "expense",
        "--amount",
        "20",
        "--category",
        "Fees",
    )

    assert result.exit_code == 0
    assert "€20.00" in result.output
    assert ledger_service.list_entries()[0].currency == "EUR"


def test_add_entry_rejects_negative_amount(cli_runner, temp_db):
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--kind",
        "expense",
        "--amount",
        "-50",
        "--category",
        "Rent",
    )

    assert result.exit_code == 1
    assert "Error: amount must not be negative" in result.output


def test_add_entry_rejects_bad_date(cli_runner, temp_db):
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--kind",
        "expense",
        "--amount",
        "5",
        "--category",
        "Rent",
        "--date",
        "someday soon",
    )

    assert result.exit_code == 1
    assert "Could not parse date" in result.output


def test_list_entries_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "entry", "list")

    assert result.exit_code == 0
    assert "No entries found" in result.output


def test_list_entries_with_totals(cli_runner, temp_db, sample_entries):
    result = _invoke(
        cli_runner,
        temp_db,
        "entry",
        "list",
        "--start-date",
        "2024-03-01",
        "--end-date",
        "2024-03-31",
    )

    assert result.exit_code == 0
    assert "Found 4 entries" in result.output
    assert "$6,200.00" in result.output
    assert "$1,750.50" in result.output
    assert "$4,449.50" in result.output


def test_list_entries_filters(cli_runner, temp_db, sample_entries):
    result = _invoke(
        cli_runner,
        temp_db,
        "entry",
        "list",
        "--kind",
        "expense",
        "--search",
        "rent",
        "--sort-by",
        "date",
        "--order",
        "asc",
    )

    assert result.exit_code == 0
    assert "Found 2 entries" in result.output
    feb = result.output.index("2024-02-01")
    mar = result.output.index("2024-03-01")
    assert feb < mar
    assert "Consulting" not in result.output


def test_list_entries_mixed_currencies(cli_runner, temp_db, ledger_service, sample_entries):
    ledger_service.create_entry(
        kind=EntryKind.EXPENSE,
        amount=Decimal("10"),
        category="Travel",
        date=date(2024, 3, 3),
        currency="EUR",
    )

    result = _invoke(cli_runner, temp_db, "entry", "list")

    assert result.exit_code == 0
    assert "Found 7 entries" in result.output
    assert "Totals unavailable" in result.output


def test_list_entries_rejects_inverted_range(cli_runner, temp_db):
    result = _invoke(
        cli_runner,
        temp_db,
        "entry",
        "list",
        "--start-date",
        "2024-03-31",
        "--end-date",
        "2024-03-01",
    )

    assert result.exit_code == 1
    assert "is after end date" in result.output


def test_show_entry_by_prefix(cli_runner, temp_db, sample_entries):
    entry_id = sample_entries[0]

    result = _invoke(cli_runner, temp_db, "entry", "show", entry_id[:8])

    assert result.exit_code == 0
    assert f"Entry {entry_id}" in result.output
    assert "March retainer" in result.output


def test_show_missing_entry(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "entry", "show", "nope")

    assert result.exit_code == 1
    assert "Entry nope not found" in result.output


def test_update_entry(cli_runner, temp_db, ledger_service, sample_entries):
    entry_id = sample_entries[3]

    result = _invoke(
        cli_runner,
        temp_db,
        "entry",
        "update",
        entry_id,
        "--amount",
        "300",
        "--category",
        "Tools",
    )

    assert result.exit_code == 0
    assert f"Updated entry {entry_id}" in result.output
    entry = ledger_service.require_entry(entry_id)
    assert entry.amount == Decimal("300.00")
    assert entry.category == "Tools"


def test_update_entry_rejects_negative(cli_runner, temp_db, sample_entries):
    result = _invoke(cli_runner, temp_db, "entry", "update", sample_entries[0], "--amount", "-3")

    assert result.exit_code == 1
    assert "must not be negative" in result.output


def test_update_entry_exchange_rate_and_clear(
    cli_runner, temp_db, ledger_service, sample_entries
):
    entry_id = sample_entries[3]

    result = _invoke(
        cli_runner,
        temp_db,
        "entry",
        "update",
        entry_id,
        "--exchange-rate",
        "0.9215",
        "--sub-category",
        "Hosting",
    )

    assert result.exit_code == 0, result.output
    result = _invoke(cli_runner, temp_db, "entry", "show", entry_id)
    assert "Exchange rate: 0.9215" in result.output
    assert "Sub-category: Hosting" in result.output

    result = _invoke(
        cli_runner,
        temp_db,
        "entry",
        "update",
        entry_id,
        "--description",
        "",
        "--exchange-rate",
        "",
    )

    assert result.exit_code == 0, result.output
    entry = ledger_service.require_entry(entry_id)
    assert entry.description is None
    assert entry.exchange_rate is None
    assert entry.sub_category == "Hosting"


def test_update_entry_rejects_negative_exchange_rate(cli_runner, temp_db, sample_entries):
    result = _invoke(
        cli_runner, temp_db, "entry", "update", sample_entries[0], "--exchange-rate", "-1"
    )

    assert result.exit_code == 1
    assert "exchange_rate must not be negative" in result.output


def test_delete_entry(cli_runner, temp_db, ledger_service, sample_entries):
    entry_id = sample_entries[0]

    result = _invoke(cli_runner, temp_db, "entry", "delete", entry_id, "--yes")

    assert result.exit_code == 0
    assert f"Deleted entry {entry_id}" in result.output
    assert ledger_service.get_entry(entry_id) is None


def test_delete_entry_cancelled(cli_runner, temp_db, ledger_service, sample_entries):
    entry_id = sample_entries[0]

    result = _invoke(cli_runner, temp_db, "entry", "delete", entry_id, input="n\n")

    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert ledger_service.get_entry(entry_id) is not None


def test_categories(cli_runner, temp_db, sample_entries):
    result = _invoke(cli_runner, temp_db, "entry", "categories", "--kind", "income")

    assert result.exit_code == 0
    assert re.findall(r"^\S.*$", result.output, re.MULTILINE) == [
        "Consulting",
        "Product Sales",
    ]
