"""Ledger entry commands."""

import click

from bizledger.cli.date_filters import (
    period_options,
    pop_period_flags,
    resolve_cli_date_range,
)
from bizledger.cli.error_handling import handle_domain_error
from bizledger.domain.aggregation import summarize_all
from bizledger.domain.entities import EntryKind, FilterSpec, SortField, SortOrder
from bizledger.domain.errors import CurrencyMismatchError
from bizledger.domain.ledger import LedgerService
from bizledger.utils.amount_parser import parse_amount, parse_non_negative
from bizledger.utils.date_parser import parse_date
from bizledger.utils.money import format_currency

KIND_CHOICE = click.Choice([kind.value for kind in EntryKind], case_sensitive=False)


def _echo_entry(entry) -> None:
    click.echo(f"Entry {entry.id}")
    click.echo(f"  Kind: {entry.kind.value}")
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Amount: {format_currency(entry.amount, entry.currency)}")
    click.echo(f"  Category: {entry.category}")
    if entry.sub_category:
        click.echo(f"  Sub-category: {entry.sub_category}")
    if entry.description:
        click.echo(f"  Description: {entry.description}")


@click.command("add")
@click.option("--kind", type=KIND_CHOICE, required=True, help="income or expense")
@click.option("--amount", required=True, help="Amount, always positive (e.g., 123.45)")
@click.option("--category", required=True, help="Category label (e.g., 'Consulting')")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", help="Entry description")
@click.option("--sub-category", help="Secondary category")
@click.option("--currency", help="Currency code (defaults to the reporting currency)")
@click.option("--exchange-rate", help="Rate to the reporting currency (stored only)")
@click.pass_context
def add_entry(
    ctx,
    kind: str,
    amount: str,
    category: str,
    date: str,
    description: str | None,
    sub_category: str | None,
    currency: str | None,
    exchange_rate: str | None,
):
    """Record an income or expense entry.

    Examples:
        bizledger add --kind income --amount 1500 --category Consulting
        bizledger add --kind expense --amount 49.99 --category Software --date 2024-01-15
    """
    service = LedgerService(ctx.obj["db"])

    try:
        entry_date = parse_date(date)
        entry_amount = parse_non_negative(amount)
        rate = parse_non_negative(exchange_rate, "exchange_rate") if exchange_rate else None
        entry_id = service.create_entry(
            kind=EntryKind(kind.lower()),
            amount=entry_amount,
            category=category,
            date=entry_date,
            description=description,
            currency=currency or ctx.obj["currency"],
            sub_category=sub_category,
            exchange_rate=rate,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created entry {entry_id}")
    _echo_entry(service.require_entry(entry_id))


@click.group("entry")
def entry_group():
    """Manage ledger entries."""
    pass


@entry_group.command("list")
@click.option(
    "--kind",
    type=click.Choice(["all", "income", "expense"], case_sensitive=False),
    default="all",
    show_default=True,
)
@click.option("--category", help="Exact category to show")
@click.option("--search", help="Case-insensitive text to find in description, category or amount")
@click.option(
    "--sort-by",
    type=click.Choice([field.value for field in SortField]),
    default=SortField.DATE.value,
    show_default=True,
)
@click.option(
    "--order",
    type=click.Choice([order.value for order in SortOrder]),
    default=SortOrder.DESC.value,
    show_default=True,
)
@period_options
@click.pass_context
def list_entries(
    ctx,
    kind: str,
    category: str | None,
    search: str | None,
    sort_by: str,
    order: str,
    start_date: str | None,
    end_date: str | None,
    **period_kwargs,
):
    """List entries with optional filters and sorting."""
    service = LedgerService(ctx.obj["db"])
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )

    spec = FilterSpec(
        kind=None if kind.lower() == "all" else EntryKind(kind.lower()),
        category=category,
        date_from=start,
        date_to=end,
        search_text=search,
        sort_by=SortField(sort_by),
        sort_order=SortOrder(order),
    )
    try:
        entries = service.list_entries(spec)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not entries:
        click.echo("No entries found.")
        return

    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<10} {'Date':<12} {'Kind':<8} {'Amount':>14}  {'Category':<22} {'Description':<30}"
    )
    click.echo("-" * 100)
    for entry in entries:
        amount_str = format_currency(entry.amount, entry.currency)
        description = (entry.description or "")[:30]
        click.echo(
            f"{entry.id[:8]:<10} {str(entry.date):<12} {entry.kind.value:<8} "
            f"{amount_str:>14}  {entry.category[:22]:<22} {description:<30}"
        )
    click.echo("-" * 100)

    try:
        totals = summarize_all(entries)
    except CurrencyMismatchError as e:
        click.echo(f"Totals unavailable: {e}")
        return
    currency = entries[0].currency
    click.echo(f"{'Income':<20} {format_currency(totals.total_income, currency):>20}")
    click.echo(f"{'Expenses':<20} {format_currency(totals.total_expenses, currency):>20}")
    click.echo(f"{'Net':<20} {format_currency(totals.net_balance, currency):>20}")


def _resolve_entry_id(ctx, service: LedgerService, entry_id: str) -> str:
    """Accept a full ID or a unique prefix as shown by ``entry list``."""
    if service.get_entry(entry_id) is not None:
        return entry_id
    matches = [entry.id for entry in service.list_entries() if entry.id.startswith(entry_id)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        click.echo(f"Error: Entry ID prefix '{entry_id}' is ambiguous", err=True)
    else:
        click.echo(f"Error: Entry {entry_id} not found", err=True)
    ctx.exit(1)


@entry_group.command("show")
@click.argument("entry_id")
@click.pass_context
def show_entry(ctx, entry_id: str):
    """Show one entry."""
    service = LedgerService(ctx.obj["db"])
    entry_id = _resolve_entry_id(ctx, service, entry_id)
    entry = service.require_entry(entry_id)
    _echo_entry(entry)
    click.echo(f"  Currency: {entry.currency}")
    if entry.exchange_rate is not None:
        click.echo(f"  Exchange rate: {entry.exchange_rate}")
    click.echo(f"  Created: {entry.created_at}")


@entry_group.command("update")
@click.argument("entry_id")
@click.option("--kind", type=KIND_CHOICE)
@click.option("--amount", help="New amount")
@click.option("--category", help="New category")
@click.option("--date", help="New date (YYYY-MM-DD or relative)")
@click.option("--description", help="New description, or empty string to clear")
@click.option("--sub-category", help="New secondary category, or empty string to clear")
@click.option("--currency", help="New currency code")
@click.option("--exchange-rate", help="New rate to the reporting currency, or empty string to clear")
@click.pass_context
def update_entry(
    ctx,
    entry_id: str,
    kind: str | None,
    amount: str | None,
    category: str | None,
    date: str | None,
    description: str | None,
    sub_category: str | None,
    currency: str | None,
    exchange_rate: str | None,
):
    """Update an entry.

    Updates only the fields that are provided. Pass an empty string to
    --description, --sub-category or --exchange-rate to clear it.

    Examples:
        bizledger entry update 3f2a9c1d --amount 75.00
        bizledger entry update 3f2a9c1d --category Travel --kind expense
        bizledger entry update 3f2a9c1d --description ""
    """
    service = LedgerService(ctx.obj["db"])
    entry_id = _resolve_entry_id(ctx, service, entry_id)

    try:
        service.update_entry(
            entry_id=entry_id,
            kind=EntryKind(kind.lower()) if kind else None,
            amount=parse_amount(amount) if amount is not None else None,
            category=category,
            date=parse_date(date) if date is not None else None,
            description=description or None,
            currency=currency,
            sub_category=sub_category or None,
            exchange_rate=(
                parse_non_negative(exchange_rate, "exchange_rate") if exchange_rate else None
            ),
            clear_description=description == "",
            clear_sub_category=sub_category == "",
            clear_exchange_rate=exchange_rate == "",
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated entry {entry_id}")


@entry_group.command("delete")
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: str, yes: bool):
    """Delete an entry."""
    service = LedgerService(ctx.obj["db"])
    entry_id = _resolve_entry_id(ctx, service, entry_id)

    if not yes and not click.confirm(f"Delete entry {entry_id}?"):
        click.echo("Cancelled.")
        return

    service.delete_entry(entry_id)
    click.echo(f"Deleted entry {entry_id}")


@entry_group.command("categories")
@click.option(
    "--kind",
    type=click.Choice(["all", "income", "expense"], case_sensitive=False),
    default="all",
    show_default=True,
)
@click.pass_context
def list_categories(ctx, kind: str):
    """List categories in use."""
    service = LedgerService(ctx.obj["db"])
    categories = service.list_categories(
        None if kind.lower() == "all" else EntryKind(kind.lower())
    )
    if not categories:
        click.echo("No categories found.")
        return
    for category in categories:
        click.echo(category)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(add_entry)
    cli.add_command(entry_group)
