"""CLI helpers for wallet resolution and display."""

from __future__ import annotations

from decimal import Decimal

import click
from rbupay.cli.error_handling import handle_domain_error
from rbupay.domain.wallet import WalletService
from rbupay.utils.wallet_resolver import resolve_wallet


def resolve_wallet_or_exit(ctx: click.Context, wallet: str | int) -> int:
    """Resolve wallet owner or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_wallet(WalletService(ctx.obj["db"]), wallet)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def format_inr(amount: Decimal) -> str:
    """Format an amount in rupees, e.g. ₹42,500.00."""
    return f"₹{amount:,.2f}"
