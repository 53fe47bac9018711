"""Rule-based fraud analysis of incoming transactions.

Rules run in a fixed priority order and the first one that matches produces
the alert; later rules are not evaluated. The analyzer only reads the
history it is given and never persists anything.
"""

import time
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Sequence

from rbupay.domain.entities import (
    AlertType,
    FraudAlert,
    RiskScore,
    Transaction,
)

VELOCITY_WINDOW_MS = 60_000
VELOCITY_THRESHOLD = 2
LARGE_AMOUNT_THRESHOLD = Decimal("15000")
PATTERN_WINDOW_MS = 3_600_000

# Widest look-back any rule needs
HISTORY_WINDOW_MS = max(VELOCITY_WINDOW_MS, PATTERN_WINDOW_MS)

Predicate = Callable[[Transaction, Sequence[Transaction], int], bool]


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def is_rapid_repeat(tx: Transaction, history: Sequence[Transaction], now: int) -> bool:
    """Two or more payments already inside the last minute."""
    cutoff = now - VELOCITY_WINDOW_MS
    recent = [t for t in history if t.timestamp > cutoff]
    return len(recent) >= VELOCITY_THRESHOLD


def is_large_amount(tx: Transaction, history: Sequence[Transaction], now: int) -> bool:
    """Amount above what a student profile normally moves."""
    return tx.amount > LARGE_AMOUNT_THRESHOLD


def is_category_mismatch(tx: Transaction, history: Sequence[Transaction], now: int) -> bool:
    """Same recipient paid under a different category within the hour."""
    cutoff = now - PATTERN_WINDOW_MS
    return any(
        t.recipient == tx.recipient and t.category != tx.category and t.timestamp > cutoff
        for t in history
    )


@dataclass(frozen=True)
class RiskRule:
    """A predicate paired with the alert it raises."""

    name: str
    alert_type: AlertType
    severity: RiskScore
    description: str
    predicate: Predicate

    def matches(self, tx: Transaction, history: Sequence[Transaction], now: int) -> bool:
        return self.predicate(tx, history, now)


DEFAULT_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        name="velocity",
        alert_type=AlertType.VELOCITY,
        severity=RiskScore.HIGH,
        description="Rapid repeated payments detected. Potential unauthorized activity.",
        predicate=is_rapid_repeat,
    ),
    RiskRule(
        name="amount",
        alert_type=AlertType.AMOUNT,
        severity=RiskScore.MEDIUM,
        description="Unusually large transaction amount for student profile.",
        predicate=is_large_amount,
    ),
    RiskRule(
        name="pattern",
        alert_type=AlertType.PATTERN,
        severity=RiskScore.LOW,
        description="Category mismatch for repeat recipient. Please verify usage.",
        predicate=is_category_mismatch,
    ),
)


def new_alert_id() -> str:
    """Generate an opaque alert identifier."""
    return f"alert-{uuid.uuid4().hex[:9]}"


class TransactionAnalyzer:
    """Evaluates risk rules against a transaction and its history."""

    def __init__(
        self,
        rules: Sequence[RiskRule] = DEFAULT_RULES,
        clock: Callable[[], int] = now_ms,
    ):
        """Initialize transaction analyzer.

        Args:
            rules: Rules in priority order
            clock: Returns the current time in epoch milliseconds
        """
        self.rules = tuple(rules)
        self.clock = clock

    def match(self, tx: Transaction, history: Sequence[Transaction]) -> Optional[RiskRule]:
        """Return the first rule that matches, or None."""
        now = self.clock()
        for rule in self.rules:
            if rule.matches(tx, history, now):
                return rule
        return None

    def analyze(self, tx: Transaction, history: Sequence[Transaction]) -> Optional[FraudAlert]:
        """Analyze a transaction against previously recorded ones.

        Args:
            tx: Transaction being submitted (not part of history)
            history: Earlier transactions, in any order

        Returns:
            FraudAlert from the highest-priority matching rule, or None
        """
        rule = self.match(tx, history)
        if rule is None:
            return None

        return FraudAlert(
            id=new_alert_id(),
            tx_id=tx.id,
            timestamp=self.clock(),
            type=rule.alert_type,
            severity=rule.severity,
            description=rule.description,
        )
