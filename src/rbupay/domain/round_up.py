"""Save-the-change round-up calculation."""

from dataclasses import replace
from decimal import Decimal, ROUND_CEILING

from rbupay.domain.entities import Transaction

ROUND_UP_STEP = Decimal("10")


def compute_round_up(amount: Decimal) -> Decimal:
    """Return the amount needed to reach the next multiple of 10.

    Returns 0 when the amount already is a multiple of 10.

    Examples:
        compute_round_up(Decimal("123")) -> Decimal("7")
        compute_round_up(Decimal("45.50")) -> Decimal("4.50")
    """
    steps = (amount / ROUND_UP_STEP).to_integral_value(rounding=ROUND_CEILING)
    return steps * ROUND_UP_STEP - amount


class RoundUpCalculator:
    """Attaches round-ups to completed transactions."""

    def __init__(self, enabled: bool = True):
        """Initialize round-up calculator.

        Args:
            enabled: Whether round-up is active
        """
        self.enabled = enabled

    def apply(self, tx: Transaction) -> tuple[Transaction, Decimal]:
        """Apply round-up to a transaction.

        Args:
            tx: Incoming transaction

        Returns:
            Tuple of (transaction, debit). When round-up applies the returned
            transaction carries round_up_amount and debit is that amount,
            otherwise the transaction is returned unchanged with a zero debit.
        """
        if not self.enabled or not tx.is_completed:
            return tx, Decimal("0")

        round_up = compute_round_up(tx.amount)
        if round_up <= 0:
            return tx, Decimal("0")

        return replace(tx, round_up_amount=round_up), round_up
