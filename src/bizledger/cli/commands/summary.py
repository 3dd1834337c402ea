"""Monthly audit command."""

from datetime import date

import click

from bizledger.cli.date_filters import (
    period_options,
    pop_period_flags,
    resolve_cli_date_range,
)
from bizledger.cli.error_handling import handle_domain_error
from bizledger.domain.aggregation import category_share, sorted_breakdown
from bizledger.domain.entities import MonthlyAudit, PeriodBounds
from bizledger.domain.summary import SummaryService
from bizledger.utils.date_parser import parse_month
from bizledger.utils.money import format_currency, format_percent


def _display_breakdown(title, breakdown, total, currency, top):
    click.echo(f"\n{title}")
    if not breakdown:
        click.echo("  (none)")
        return
    for item in sorted_breakdown(breakdown)[:top]:
        share = format_percent(category_share(item.amount, total))
        click.echo(
            f"  {item.category:<30} {format_currency(item.amount, currency):>16} {share:>8}"
        )


def _display_audit(audit: MonthlyAudit, currency: str, top: int) -> None:
    current = audit.current
    previous = audit.previous
    comparison = audit.comparison

    click.echo(f"\nAudit for {current.label} ({current.start} to {current.end})")
    click.echo(f"Compared with {previous.start} to {previous.end}")
    click.echo("-" * 72)
    click.echo(f"{'':<20} {'Current':>16} {'Previous':>16} {'Change':>12}")
    click.echo("-" * 72)
    rows = (
        ("Income", current.total_income, previous.total_income, comparison.income_change),
        ("Expenses", current.total_expenses, previous.total_expenses, comparison.expense_change),
        ("Net", current.net_balance, previous.net_balance, comparison.net_change),
    )
    for name, now, before, change in rows:
        click.echo(
            f"{name:<20} {format_currency(now, currency):>16} "
            f"{format_currency(before, currency):>16} {format_percent(change, signed=True):>12}"
        )
    click.echo("-" * 72)
    click.echo(f"Transactions: {current.transaction_count}")
    click.echo(
        f"Average transaction: {format_currency(current.average_transaction_amount, currency)}"
    )
    click.echo(f"Savings rate: {format_percent(audit.savings_rate)}")

    _display_breakdown(
        "Income by category", current.income_by_category, current.total_income, currency, top
    )
    _display_breakdown(
        "Expenses by category",
        current.expenses_by_category,
        current.total_expenses,
        currency,
        top,
    )


@click.command("summary")
@click.option("--month", help="Month to audit (YYYY-MM or any date in the month). Default: this month")
@period_options
@click.option("--top", type=int, default=5, show_default=True, help="Categories to show per kind")
@click.pass_context
def summary(
    ctx,
    month: str | None,
    start_date: str | None,
    end_date: str | None,
    top: int,
    **period_kwargs,
):
    """Show a monthly audit compared with the previous month.

    With a custom range (--start-date/--end-date or a period flag) the range
    is compared with the equally long range right before it.

    Examples:
        bizledger summary
        bizledger summary --month 2024-03
        bizledger summary --start-date 2024-01-01 --end-date 2024-03-31
    """
    db = ctx.obj["db"]
    currency = ctx.obj["currency"]
    service = SummaryService(db, currency=currency)

    if top < 0:
        click.echo("Error: --top must not be negative", err=True)
        ctx.exit(1)

    period_flags = pop_period_flags(period_kwargs)
    custom_range = start_date or end_date or any(period_flags.values())
    if month and custom_range:
        click.echo(
            "Error: --month cannot be combined with a date range or period option.",
            err=True,
        )
        ctx.exit(1)

    try:
        if custom_range:
            start, end = resolve_cli_date_range(
                ctx,
                start_date=start_date,
                end_date=end_date,
                period_flags=period_flags,
            )
            today = date.today()
            bounds = PeriodBounds(start=start or end or today, end=end or today)
            audit = service.range_audit(bounds, top_n=top)
        else:
            reference = parse_month(month) if month else date.today()
            audit = service.monthly_audit(reference, top_n=top)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _display_audit(audit, currency, top)


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
