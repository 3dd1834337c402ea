"""Trend command."""

import click

from bizledger.cli.error_handling import handle_domain_error
from bizledger.domain.entities import Granularity
from bizledger.domain.summary import SummaryService
from bizledger.domain.trend import trend_averages
from bizledger.utils.date_parser import parse_date
from bizledger.utils.money import format_currency


@click.command("trend")
@click.option(
    "--end-date",
    default="today",
    show_default=True,
    help="Date inside the last period of the window",
)
@click.option("--periods", type=int, default=12, show_default=True, help="Number of periods")
@click.option("--yearly", is_flag=True, help="Use calendar years instead of months")
@click.pass_context
def trend(ctx, end_date: str, periods: int, yearly: bool):
    """Show income, expenses and net per period, oldest first.

    Examples:
        bizledger trend
        bizledger trend --end-date 2024-12-31 --periods 6
        bizledger trend --yearly --periods 3
    """
    currency = ctx.obj["currency"]
    service = SummaryService(ctx.obj["db"], currency=currency)
    granularity = Granularity.YEAR if yearly else Granularity.MONTH

    try:
        series = service.trend(parse_date(end_date), periods, granularity)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("-" * 70)
    click.echo(f"{'Period':<12} {'Income':>16} {'Expenses':>16} {'Net':>16} {'Count':>6}")
    click.echo("-" * 70)
    for item in series:
        click.echo(
            f"{item.label:<12} {format_currency(item.total_income, currency):>16} "
            f"{format_currency(item.total_expenses, currency):>16} "
            f"{format_currency(item.net_balance, currency):>16} {item.transaction_count:>6}"
        )
    click.echo("-" * 70)

    averages = trend_averages(series)
    click.echo(
        f"{'Average':<12} {format_currency(averages.income, currency):>16} "
        f"{format_currency(averages.expenses, currency):>16} "
        f"{format_currency(averages.net, currency):>16}"
    )


def register_commands(cli):
    """Register trend commands with main CLI."""
    cli.add_command(trend)
