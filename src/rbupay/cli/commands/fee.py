"""Fee fund commands."""

import click
from rbupay.cli.error_handling import handle_domain_error
from rbupay.cli.ledger_context import ledger_from_context
from rbupay.cli.wallet_resolution import format_inr, resolve_wallet_or_exit
from rbupay.domain.orders import OrderService
from rbupay.utils.amount_parser import parse_amount


@click.group("fee")
def fee_group():
    """Save towards student fees."""
    pass


@fee_group.command("contribute")
@click.argument("wallet", metavar="WALLET")
@click.option("--amount", required=True, help="Contribution in INR")
@click.option("--title", required=True, help="Fee being funded, e.g. 'Semester 4 Tuition'")
@click.pass_context
def contribute(ctx, wallet: str, amount: str, title: str):
    """Move money from the wallet into a fee fund."""
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    service = OrderService(ctx.obj["db"], ledger_from_context(ctx))

    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        result = service.contribute_fee(wallet_id, value, title)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Contributed {format_inr(result.transaction.amount)} to '{title}'")


def register_commands(cli):
    """Register fee commands with main CLI."""
    cli.add_command(fee_group)
