"""Submit payment command."""

import uuid

import click
from rbupay.cli.error_handling import handle_domain_error
from rbupay.cli.ledger_context import ledger_from_context
from rbupay.cli.wallet_resolution import format_inr, resolve_wallet_or_exit
from rbupay.domain.entities import (
    Category,
    RiskScore,
    Transaction,
    TransactionKind,
    TransactionStatus,
)
from rbupay.domain.wallet import WalletService
from rbupay.utils.amount_parser import parse_amount
from rbupay.utils.timestamp_parser import parse_timestamp


@click.command("pay")
@click.option("--wallet", required=True, help="Wallet owner or ID")
@click.option("--amount", required=True, help="Payment amount (e.g., 123 or ₹1,250.50)")
@click.option("--recipient", required=True, help="Who is paid")
@click.option(
    "--category",
    type=click.Choice([c.value for c in Category], case_sensitive=False),
    default=Category.OTHERS.value,
    show_default=True,
)
@click.option(
    "--status",
    type=click.Choice([s.value for s in TransactionStatus], case_sensitive=False),
    default=TransactionStatus.COMPLETED.value,
    show_default=True,
)
@click.option(
    "--kind",
    type=click.Choice([k.value for k in TransactionKind], case_sensitive=False),
    help="Transaction kind (inferred from the recipient when omitted)",
)
@click.option("--sender", help="Sender name (defaults to the wallet owner)")
@click.option("--at", "at", help="Event time (epoch ms, '2024-01-15 10:30', 'now', '5 minutes ago')")
@click.option("--id", "tx_id", help="Transaction ID (auto-generated if not provided)")
@click.pass_context
def pay(
    ctx,
    wallet: str,
    amount: str,
    recipient: str,
    category: str,
    status: str,
    kind: str | None,
    sender: str | None,
    at: str | None,
    tx_id: str | None,
):
    """Submit a transaction to a wallet.

    Examples:
        rbupay pay --wallet "Arjun Sharma" --amount 123 --recipient "Campus Mart" --category Food
        rbupay pay --wallet 1 --amount 250 --recipient "Hostel" --status pending
    """
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    ledger = ledger_from_context(ctx)

    try:
        tx_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    timestamp = ledger.clock()
    if at is not None:
        try:
            timestamp = parse_timestamp(at)
        except ValueError as e:
            click.echo(f"Error: Invalid time: {e}", err=True)
            ctx.exit(1)

    if sender is None:
        sender = WalletService(ctx.obj["db"]).require_wallet(wallet_id).owner

    tx = Transaction(
        id=tx_id or f"tx-{uuid.uuid4().hex[:12]}",
        amount=tx_amount,
        recipient=recipient,
        sender=sender,
        category=Category.parse(category),
        timestamp=timestamp,
        status=TransactionStatus(status.lower()),
        risk_score=RiskScore.LOW,
        kind=TransactionKind(kind.lower()) if kind else None,
    )

    try:
        result = ledger.submit_transaction(wallet_id, tx)
    except ValueError as e:
        handle_domain_error(ctx, e)

    recorded = result.transaction
    balance = WalletService(ctx.obj["db"]).require_wallet(wallet_id).balance
    click.echo(f"Recorded transaction {recorded.id}")
    click.echo(f"  Amount: {format_inr(recorded.amount)}")
    click.echo(f"  Status: {recorded.status.value}")
    if recorded.round_up_amount is not None:
        click.echo(f"  Round-up: {format_inr(recorded.round_up_amount)}")
    click.echo(f"  Balance: {format_inr(balance)}")


def register_commands(cli):
    """Register pay command with main CLI."""
    cli.add_command(pay)
