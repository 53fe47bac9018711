"""Stock order commands."""

import click
from rbupay.cli.error_handling import handle_domain_error
from rbupay.cli.ledger_context import ledger_from_context
from rbupay.cli.wallet_resolution import format_inr, resolve_wallet_or_exit
from rbupay.domain.orders import OrderService
from rbupay.utils.amount_parser import parse_amount


@click.group("stock")
def stock_group():
    """Buy and sell stocks."""
    pass


def _run_order(ctx, wallet: str, symbol: str, quantity: str, price: str, side: str):
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    service = OrderService(ctx.obj["db"], ledger_from_context(ctx))

    try:
        qty = parse_amount(quantity)
        unit_price = parse_amount(price)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    order = service.buy_stock if side == "buy" else service.sell_stock
    try:
        result = order(wallet_id, symbol, qty, unit_price)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"{result.transaction.recipient} for {format_inr(result.transaction.amount)}")


@stock_group.command("buy")
@click.argument("wallet", metavar="WALLET")
@click.argument("symbol")
@click.option("--quantity", required=True, help="Number of shares")
@click.option("--price", required=True, help="Price per share in INR")
@click.pass_context
def buy(ctx, wallet: str, symbol: str, quantity: str, price: str):
    """Buy shares of SYMBOL.

    Examples:
        rbupay stock buy "Arjun Sharma" TCS --quantity 2 --price 3850
    """
    _run_order(ctx, wallet, symbol, quantity, price, "buy")


@stock_group.command("sell")
@click.argument("wallet", metavar="WALLET")
@click.argument("symbol")
@click.option("--quantity", required=True, help="Number of shares")
@click.option("--price", required=True, help="Price per share in INR")
@click.pass_context
def sell(ctx, wallet: str, symbol: str, quantity: str, price: str):
    """Sell shares of SYMBOL."""
    _run_order(ctx, wallet, symbol, quantity, price, "sell")


@stock_group.command("holdings")
@click.argument("wallet", metavar="WALLET")
@click.pass_context
def holdings(ctx, wallet: str):
    """List stock holdings of a wallet."""
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    service = OrderService(ctx.obj["db"], ledger_from_context(ctx))

    positions = service.list_holdings(wallet_id)
    if not positions:
        click.echo("No holdings found.")
        return

    click.echo(f"\n{'Symbol':<12} {'Quantity':>12} {'Avg price':>14}")
    click.echo("-" * 40)
    for h in positions:
        click.echo(f"{h.symbol:<12} {h.quantity.normalize():>12} {format_inr(h.avg_price):>14}")


def register_commands(cli):
    """Register stock commands with main CLI."""
    cli.add_command(stock_group)
