"""Main CLI entry point."""

import click

from bizledger.database.factories import create_sqlite_database
from bizledger.logging_config import setup_logging
from bizledger.settings import Settings

# Import and register all commands at module level
from bizledger.cli.commands import (
    entry,
    summary,
    trend,
    invoice,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BIZLEDGER_DB_PATH environment variable)",
    envvar="BIZLEDGER_DB_PATH",
)
@click.option(
    "--currency",
    help="Reporting currency code (overrides BIZLEDGER_CURRENCY, default USD)",
    envvar="BIZLEDGER_CURRENCY",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (overrides BIZLEDGER_LOG_LEVEL, default WARNING)",
    envvar="BIZLEDGER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, currency: str | None, log_level: str | None):
    """Bizledger - business income, expense and invoice tracking.

    Record income and expense entries, review monthly audits and trends,
    and keep invoices with their line items and payments.
    """
    ctx.ensure_object(dict)
    settings = Settings.from_env()
    setup_logging(log_level or settings.log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(
            database_path=db_path or str(settings.database_path)
        )
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["currency"] = (currency or settings.currency).upper()


# Register all commands
entry.register_commands(cli)
summary.register_commands(cli)
trend.register_commands(cli)
invoice.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
