"""Main CLI entry point."""

import click
from rbupay.database.factories import create_sqlite_database
from rbupay.observability import setup_logging

# Import and register all commands at module level
from rbupay.cli.commands import (
    wallet,
    budget,
    pay,
    transaction,
    stock,
    fee,
    alerts,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides RBUPAY_DB_PATH environment variable)",
    envvar="RBUPAY_DB_PATH",
)
@click.option(
    "--round-up/--no-round-up",
    default=True,
    show_default=True,
    envvar="RBUPAY_ROUND_UP",
    help="Round completed payments up to the next ₹10 and sweep the change",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="RBUPAY_LOG_LEVEL",
    help="Log level for structured logs on stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, round_up: bool, log_level: str):
    """rbupay - Student wallet ledger with fraud checks.

    Settles payments, stock orders and fee contributions against a wallet,
    tracks category budgets and flags risky activity.
    """
    ctx.ensure_object(dict)
    ctx.obj["round_up"] = round_up

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        setup_logging(log_level)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
wallet.register_commands(cli)
budget.register_commands(cli)
pay.register_commands(cli)
transaction.register_commands(cli)
stock.register_commands(cli)
fee.register_commands(cli)
alerts.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
