"""Domain model entities for rbupay.

These are pure data classes representing business concepts, independent of
database schema. Money is always a Decimal and event times are integer epoch
milliseconds, matching what the wallet front end sends.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional


class Category(str, Enum):
    """Spending category of a transaction."""

    FOOD = "Food"
    TRAVEL = "Travel"
    UTILITIES = "Utilities"
    SHOPPING = "Shopping"
    INVESTMENTS = "Investments"
    SALARY = "Salary"
    RENT = "Rent"
    OTHERS = "Others"
    FEES = "Fees"

    @classmethod
    def parse(cls, value: "str | Category") -> "Category":
        """Look up a category by value, case-insensitively."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown category '{value}'")


# Smallest money unit stored: one paisa
PAISA = Decimal("0.01")


def is_whole_paise(amount: Decimal) -> bool:
    """Return True when amount needs no more than two decimal places."""
    try:
        return amount.quantize(PAISA) == amount
    except InvalidOperation:
        return False


# Categories that never count against a budget envelope
UNBUDGETED_CATEGORIES = frozenset({Category.OTHERS, Category.FEES})


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class RiskScore(str, Enum):
    """Advisory risk level, also used as alert severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK = {RiskScore.LOW: 0, RiskScore.MEDIUM: 1, RiskScore.HIGH: 2}


class AlertType(str, Enum):
    VELOCITY = "velocity"
    AMOUNT = "amount"
    PATTERN = "pattern"


class TransactionKind(str, Enum):
    """What a transaction does to the wallet.

    Only STOCK_SELL credits the wallet; every other kind is a debit.
    """

    PAYMENT = "payment"
    STOCK_BUY = "stock_buy"
    STOCK_SELL = "stock_sell"
    FEE_CONTRIBUTION = "fee_contribution"

    @property
    def is_credit(self) -> bool:
        return self is TransactionKind.STOCK_SELL


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: str
    amount: Decimal
    recipient: str
    sender: str
    category: Category
    timestamp: int
    status: TransactionStatus = TransactionStatus.COMPLETED
    risk_score: RiskScore = RiskScore.LOW
    round_up_amount: Optional[Decimal] = None
    flagged_reason: Optional[str] = None
    kind: Optional[TransactionKind] = None
    is_split: bool = False
    split_with: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_completed(self) -> bool:
        return self.status is TransactionStatus.COMPLETED


@dataclass(frozen=True)
class Wallet:
    """Wallet domain entity, one per user."""

    id: int
    owner: str
    balance: Decimal
    currency: str
    created_at: datetime


@dataclass(frozen=True)
class Budget:
    """Per-category spending envelope for a wallet."""

    wallet_id: int
    category: Category
    limit: Decimal
    spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent

    @property
    def utilization(self) -> Decimal:
        """Fraction of the limit already spent (0 when the limit is 0)."""
        if self.limit == 0:
            return Decimal("0")
        return self.spent / self.limit


@dataclass(frozen=True)
class FraudAlert:
    """Advisory risk signal produced by transaction analysis."""

    id: str
    tx_id: str
    timestamp: int
    type: AlertType
    severity: RiskScore
    description: str


@dataclass(frozen=True)
class Holding:
    """Stock position held by a wallet."""

    wallet_id: int
    symbol: str
    quantity: Decimal
    avg_price: Decimal


@dataclass(frozen=True)
class LedgerSnapshot:
    """Read-only view of one wallet's ledger state."""

    wallet: Wallet
    budgets: list[Budget]
    transactions: list[Transaction]
    alerts: list[FraudAlert]
