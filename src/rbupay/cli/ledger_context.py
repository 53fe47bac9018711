"""CLI helper for building the ledger from global options."""

import click

from rbupay.domain.entities import FraudAlert
from rbupay.domain.ledger import LedgerService


def echo_alert(alert: FraudAlert) -> None:
    """Print a fraud alert to stderr."""
    click.echo(
        f"ALERT [{alert.severity.value.upper()}] {alert.type.value}: {alert.description}",
        err=True,
    )


def ledger_from_context(ctx: click.Context) -> LedgerService:
    """Create a LedgerService honoring --round-up/--no-round-up.

    Alerts raised while the command runs are printed to stderr.
    """
    ledger = LedgerService(ctx.obj["db"], round_up_enabled=ctx.obj.get("round_up", True))
    ledger.add_alert_listener(echo_alert)
    return ledger
