"""Ledger domain service.

Applies submitted transactions to a wallet. Every submission runs the same
steps in the same order, as one unit per wallet:

1. round-up debit
2. risk analysis, recording any alert
3. append the transaction to history
4. settle: credit a sale, otherwise debit and charge the category budget

Pending and failed transactions stop after step 3.
"""

import logging
import threading
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Callable, Optional

from rbupay.database.base import Database
from rbupay.domain.alerts import AlertStore
from rbupay.domain.entities import (
    Category,
    FraudAlert,
    LedgerSnapshot,
    Transaction,
    TransactionKind,
    UNBUDGETED_CATEGORIES,
    is_whole_paise,
)
from rbupay.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_transaction_id,
    non_positive_amount,
    too_many_decimals,
    wallet_not_found,
)
from rbupay.domain.risk import HISTORY_WINDOW_MS, TransactionAnalyzer, now_ms
from rbupay.domain.round_up import RoundUpCalculator

logger = logging.getLogger(__name__)

AlertListener = Callable[[FraudAlert], None]


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of submitting one transaction."""

    transaction: Transaction
    alert: Optional[FraudAlert]
    round_up: Decimal


def resolve_kind(tx: Transaction) -> TransactionKind:
    """Return the transaction kind, inferring it for untagged transactions.

    Untagged transactions follow the recipient naming used by the order
    screens ("Sell Order: TCS", "Buy Order: INFY").
    """
    if tx.kind is not None:
        return tx.kind

    recipient = tx.recipient.lower()
    if "sell order" in recipient:
        return TransactionKind.STOCK_SELL
    if "buy order" in recipient:
        return TransactionKind.STOCK_BUY
    if tx.category is Category.FEES:
        return TransactionKind.FEE_CONTRIBUTION
    return TransactionKind.PAYMENT


class LedgerService:
    """Service that settles transactions against wallets and budgets."""

    def __init__(
        self,
        db: Database,
        round_up_enabled: bool = True,
        analyzer: Optional[TransactionAnalyzer] = None,
        alert_store: Optional[AlertStore] = None,
        clock: Optional[Callable[[], int]] = None,
        history_window_ms: int = HISTORY_WINDOW_MS,
    ):
        """Initialize ledger service.

        Args:
            db: Database instance
            round_up_enabled: Whether completed payments are rounded up
            analyzer: Risk analyzer (defaults to the standard rule set)
            alert_store: Alert store (defaults to one backed by db)
            clock: Returns the current time in epoch milliseconds (defaults to
                the analyzer's clock, or wall time without an analyzer)
            history_window_ms: How far back history is loaded for analysis

        Raises:
            ValueError: If both an analyzer and a different clock are given
        """
        if analyzer is None:
            analyzer = TransactionAnalyzer(clock=clock or now_ms)
        elif clock is not None and clock is not analyzer.clock:
            raise ValueError("clock must match the analyzer's clock")

        self.db = db
        self.round_up = RoundUpCalculator(enabled=round_up_enabled)
        self.analyzer = analyzer
        self.alert_store = alert_store or AlertStore(db)
        # History windows and the rules read the same clock
        self.clock = analyzer.clock
        self.history_window_ms = history_window_ms
        self._listeners: list[AlertListener] = []
        self._locks: dict[int, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def add_alert_listener(self, listener: AlertListener) -> None:
        """Register a callable that receives every recorded alert."""
        self._listeners.append(listener)

    def wallet_lock(self, wallet_id: int) -> threading.RLock:
        """Return the re-entrant lock serializing work on one wallet.

        Callers that wrap a submission in a larger unit of work take this
        lock before opening it.
        """
        with self._locks_guard:
            lock = self._locks.get(wallet_id)
            if lock is None:
                lock = self._locks[wallet_id] = threading.RLock()
            return lock

    def _validate(self, wallet_id: int, tx: Transaction) -> None:
        if not tx.id:
            raise ValidationError("Transaction id must not be empty")
        if not tx.recipient:
            raise ValidationError("Transaction recipient must not be empty")
        if not isinstance(tx.amount, Decimal) or tx.amount <= 0:
            raise ValidationError(non_positive_amount(tx.amount))
        if not is_whole_paise(tx.amount):
            raise ValidationError(too_many_decimals(tx.amount))

        if self.db.get_wallet(wallet_id) is None:
            raise NotFoundError(wallet_not_found(wallet_id))
        if self.db.transaction_exists(wallet_id, tx.id):
            raise ConflictError(duplicate_transaction_id(tx.id, wallet_id))

    def submit_transaction(
        self, wallet_id: int, tx: Transaction, notify: bool = True
    ) -> SubmissionResult:
        """Submit a transaction to a wallet.

        Args:
            wallet_id: Wallet ID
            tx: Transaction with its status already resolved
            notify: Call alert listeners once the submission commits. Callers
                running the submission inside their own unit of work pass
                False and call notify_alert after that unit commits.

        Returns:
            SubmissionResult with the recorded transaction, any alert, and
            the round-up that was debited

        Raises:
            ValidationError: If the transaction is malformed
            NotFoundError: If wallet doesn't exist
            ConflictError: If the transaction id was already submitted
        """
        with self.wallet_lock(wallet_id):
            self._validate(wallet_id, tx)
            tx = replace(tx, kind=resolve_kind(tx))
            with self.db.atomic():
                result = self._apply(wallet_id, tx)

        if notify and result.alert is not None:
            self.notify_alert(result.alert)
        return result

    def _apply(self, wallet_id: int, tx: Transaction) -> SubmissionResult:
        balance = self.db.get_wallet(wallet_id).balance

        tx, round_up = self.round_up.apply(tx)
        if round_up > 0:
            balance -= round_up
            self.db.update_wallet_balance(wallet_id, balance)
            logger.debug(
                "Round-up debited",
                extra={"wallet_id": wallet_id, "tx_id": tx.id, "round_up": str(round_up)},
            )

        history = self.db.list_transactions(
            wallet_id, since=self.clock() - self.history_window_ms
        )
        alert = self.analyzer.analyze(tx, history)
        if alert is not None:
            self.alert_store.record(wallet_id, alert)
            risk_score = max(tx.risk_score, alert.severity, key=lambda r: r.rank)
            tx = replace(
                tx,
                risk_score=risk_score,
                flagged_reason=tx.flagged_reason or alert.description,
            )

        self.db.add_transaction(wallet_id, tx)

        if tx.is_completed:
            if tx.kind.is_credit:
                balance += tx.amount
            else:
                balance -= tx.amount
                self._charge_budget(wallet_id, tx)
            self.db.update_wallet_balance(wallet_id, balance)

        logger.info(
            "Transaction recorded",
            extra={
                "wallet_id": wallet_id,
                "tx_id": tx.id,
                "status": tx.status.value,
                "kind": tx.kind.value,
                "amount": str(tx.amount),
                "balance": str(balance),
            },
        )
        return SubmissionResult(transaction=tx, alert=alert, round_up=round_up)

    def _charge_budget(self, wallet_id: int, tx: Transaction) -> None:
        if tx.category in UNBUDGETED_CATEGORIES:
            return
        budget = self.db.get_budget(wallet_id, tx.category)
        if budget is None:
            # No envelope for this category; nothing to charge
            return
        self.db.update_budget(wallet_id, tx.category, spent=budget.spent + tx.amount)

    def notify_alert(self, alert: FraudAlert) -> None:
        """Hand a committed alert to every listener; listener errors are logged."""
        for listener in self._listeners:
            try:
                listener(alert)
            except Exception:
                logger.exception("Alert listener failed", extra={"alert_id": alert.id})

    def list_transactions(self, wallet_id: int, limit: Optional[int] = None) -> list[Transaction]:
        """List a wallet's transactions, newest first."""
        return self.db.list_transactions(wallet_id, limit=limit)

    def get_snapshot(self, wallet_id: int) -> LedgerSnapshot:
        """Return the wallet, budgets, history and alerts of a wallet.

        Raises:
            NotFoundError: If wallet doesn't exist
        """
        wallet = self.db.get_wallet(wallet_id)
        if wallet is None:
            raise NotFoundError(wallet_not_found(wallet_id))
        return LedgerSnapshot(
            wallet=wallet,
            budgets=self.db.list_budgets(wallet_id),
            transactions=self.db.list_transactions(wallet_id),
            alerts=self.alert_store.get_alerts(wallet_id),
        )
