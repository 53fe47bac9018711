"""Transaction history commands."""

import click
from rbupay.cli.ledger_context import ledger_from_context
from rbupay.cli.wallet_resolution import format_inr, resolve_wallet_or_exit
from rbupay.utils.timestamp_parser import from_epoch_ms


@click.group("transaction")
def transaction_group():
    """Inspect transactions."""
    pass


@transaction_group.command("list")
@click.argument("wallet", metavar="WALLET")
@click.option("--limit", type=int, help="Maximum number of transactions")
@click.option("--verbose", "-v", is_flag=True, help="Show kind, risk and flag details")
@click.pass_context
def list_transactions(ctx, wallet: str, limit: int | None, verbose: bool):
    """List transactions of a wallet, newest first."""
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    transactions = ledger_from_context(ctx).list_transactions(wallet_id, limit=limit)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<24} {'Time':<20} {'Amount':>12} {'Status':<10} {'Category':<12} {'Recipient':<30}"
    )
    click.echo("-" * 110)

    for tx in transactions:
        when = from_epoch_ms(tx.timestamp).strftime("%Y-%m-%d %H:%M:%S")
        click.echo(
            f"{tx.id:<24} {when:<20} {format_inr(tx.amount):>12} {tx.status.value:<10} "
            f"{tx.category.value:<12} {tx.recipient[:30]:<30}"
        )
        if verbose:
            kind = tx.kind.value if tx.kind else "-"
            click.echo(f"    kind: {kind}  risk: {tx.risk_score.value}")
            if tx.round_up_amount is not None:
                click.echo(f"    round-up: {format_inr(tx.round_up_amount)}")
            if tx.flagged_reason:
                click.echo(f"    flagged: {tx.flagged_reason}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group)
