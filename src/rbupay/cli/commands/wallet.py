"""Wallet management commands."""

import click
from rbupay.cli.error_handling import handle_domain_error
from rbupay.cli.wallet_resolution import format_inr, resolve_wallet_or_exit
from rbupay.domain.budget import BudgetService
from rbupay.domain.ledger import LedgerService
from rbupay.domain.wallet import WalletService, DEFAULT_OPENING_BALANCE
from rbupay.utils.amount_parser import parse_amount


@click.group("wallet")
def wallet_group():
    """Manage wallets."""
    pass


@wallet_group.command("create")
@click.argument("owner", metavar="OWNER")
@click.option(
    "--balance",
    default=str(DEFAULT_OPENING_BALANCE),
    show_default=True,
    help="Opening balance in INR",
)
@click.option("--with-budgets", is_flag=True, help="Also create the default budget envelopes")
@click.pass_context
def create_wallet(ctx, owner: str, balance: str, with_budgets: bool):
    """Create a new wallet.

    Examples:
        rbupay wallet create "Arjun Sharma"
        rbupay wallet create "Priya" --balance 1500 --with-budgets
    """
    db = ctx.obj["db"]
    service = WalletService(db)

    try:
        opening = parse_amount(balance)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        wallet_id = service.create_wallet(owner=owner, balance=opening)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created wallet for '{owner}' (ID: {wallet_id})")
    click.echo(f"  Balance: {format_inr(opening)}")
    if with_budgets:
        created = BudgetService(db).init_default_budgets(wallet_id)
        click.echo(f"  Created {created} budgets")


@wallet_group.command("list")
@click.pass_context
def list_wallets(ctx):
    """List all wallets."""
    service = WalletService(ctx.obj["db"])

    wallets = service.list_wallets()
    if not wallets:
        click.echo("No wallets found.")
        return

    click.echo("\nWallets:")
    click.echo("-" * 60)
    for w in wallets:
        click.echo(f"ID: {w.id:3d} | {w.owner:20s} | Balance: {format_inr(w.balance)}")


@wallet_group.command("show")
@click.argument("wallet", metavar="WALLET")
@click.option("--recent", default=5, show_default=True, help="Number of recent transactions to show")
@click.pass_context
def show_wallet(ctx, wallet: str, recent: int):
    """Show balance, budgets and recent activity of a wallet.

    WALLET can be an owner name or ID.
    """
    db = ctx.obj["db"]
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    snapshot = LedgerService(db).get_snapshot(wallet_id)

    click.echo(f"\nWallet {snapshot.wallet.id}: {snapshot.wallet.owner}")
    click.echo(f"Balance: {format_inr(snapshot.wallet.balance)} {snapshot.wallet.currency}")

    if snapshot.budgets:
        click.echo("\nBudgets:")
        for b in snapshot.budgets:
            click.echo(
                f"  {b.category.value:<12} {format_inr(b.spent):>12} / {format_inr(b.limit):>12}"
                f"  ({b.utilization * 100:.0f}%)"
            )

    if snapshot.transactions:
        click.echo("\nRecent transactions:")
        for tx in snapshot.transactions[:recent]:
            click.echo(
                f"  {tx.id:<24} {format_inr(tx.amount):>12} {tx.status.value:<10} {tx.recipient}"
            )

    click.echo(f"\nAlerts: {len(snapshot.alerts)}")


def register_commands(cli):
    """Register wallet commands with main CLI."""
    cli.add_command(wallet_group)
