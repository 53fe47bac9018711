"""Fraud alert commands."""

import click
from rbupay.cli.wallet_resolution import resolve_wallet_or_exit
from rbupay.domain.alerts import AlertStore
from rbupay.utils.timestamp_parser import from_epoch_ms


@click.group("alerts")
def alerts_group():
    """Review fraud alerts."""
    pass


@alerts_group.command("list")
@click.argument("wallet", metavar="WALLET")
@click.pass_context
def list_alerts(ctx, wallet: str):
    """List fraud alerts of a wallet, newest first."""
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    alerts = AlertStore(ctx.obj["db"]).get_alerts(wallet_id)

    if not alerts:
        click.echo("No alerts.")
        return

    for alert in alerts:
        when = from_epoch_ms(alert.timestamp).strftime("%Y-%m-%d %H:%M:%S")
        click.echo(
            f"{when} [{alert.severity.value.upper():<6}] {alert.type.value:<8} "
            f"tx={alert.tx_id}  {alert.description}"
        )


@alerts_group.command("clear")
@click.argument("wallet", metavar="WALLET")
@click.pass_context
def clear_alerts(ctx, wallet: str):
    """Remove all fraud alerts of a wallet."""
    wallet_id = resolve_wallet_or_exit(ctx, wallet)
    AlertStore(ctx.obj["db"]).clear(wallet_id)
    click.echo("Alerts cleared.")


def register_commands(cli):
    """Register alert commands with main CLI."""
    cli.add_command(alerts_group)
