"""Stock order and fee contribution domain service."""

import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from rbupay.database.base import Database
from rbupay.domain.entities import (
    Category,
    Holding,
    PAISA,
    RiskScore,
    Transaction,
    TransactionKind,
    TransactionStatus,
)
from rbupay.domain.errors import ValidationError
from rbupay.domain.ledger import LedgerService, SubmissionResult

logger = logging.getLogger(__name__)

# Holdings are stored with six decimal places
SHARE_UNIT = Decimal("0.000001")


class OrderService:
    """Builds tagged transactions for orders and contributions and submits them.

    Holdings changes and the resulting ledger settlement commit together.
    """

    def __init__(self, db: Database, ledger: LedgerService):
        """Initialize order service.

        Args:
            db: Database instance
            ledger: Ledger service that settles the generated transactions
        """
        self.db = db
        self.ledger = ledger

    def _sender(self, wallet_id: int) -> str:
        wallet = self.db.get_wallet(wallet_id)
        return wallet.owner if wallet is not None else ""

    def _new_transaction(
        self,
        wallet_id: int,
        prefix: str,
        amount: Decimal,
        recipient: str,
        category: Category,
        kind: TransactionKind,
    ) -> Transaction:
        return Transaction(
            id=f"{prefix}-{uuid.uuid4().hex[:12]}",
            amount=amount,
            recipient=recipient,
            sender=self._sender(wallet_id),
            category=category,
            timestamp=self.ledger.clock(),
            status=TransactionStatus.COMPLETED,
            risk_score=RiskScore.LOW,
            kind=kind,
        )

    @staticmethod
    def _order_total(quantity: Decimal, price: Decimal) -> Decimal:
        return (quantity * price).quantize(PAISA, rounding=ROUND_HALF_UP)

    @staticmethod
    def _check_order(symbol: str, quantity: Decimal, price: Decimal) -> str:
        symbol = symbol.strip().upper()
        if not symbol:
            raise ValidationError("Symbol must not be empty")
        if quantity <= 0:
            raise ValidationError(f"Quantity must be positive, got {quantity}")
        if quantity.quantize(SHARE_UNIT) != quantity:
            raise ValidationError(f"Quantity must have at most 6 decimal places, got {quantity}")
        if price <= 0:
            raise ValidationError(f"Price must be positive, got {price}")
        return symbol

    def buy_stock(
        self, wallet_id: int, symbol: str, quantity: Decimal, price: Decimal
    ) -> SubmissionResult:
        """Buy shares and debit the wallet.

        The holding's average price becomes the quantity-weighted average of
        the old position and the new purchase.

        Raises:
            ValidationError: If symbol, quantity or price is invalid
            NotFoundError: If wallet doesn't exist
        """
        symbol = self._check_order(symbol, quantity, price)
        tx = self._new_transaction(
            wallet_id,
            "buy",
            self._order_total(quantity, price),
            f"Buy Order: {symbol}",
            Category.INVESTMENTS,
            TransactionKind.STOCK_BUY,
        )

        with self.ledger.wallet_lock(wallet_id), self.db.atomic():
            result = self.ledger.submit_transaction(wallet_id, tx, notify=False)
            existing = self.db.get_holding(wallet_id, symbol)
            if existing is None:
                avg_price = price.quantize(SHARE_UNIT, rounding=ROUND_HALF_UP)
                holding = Holding(wallet_id, symbol, quantity, avg_price)
            else:
                total = existing.quantity + quantity
                avg_price = (existing.avg_price * existing.quantity + price * quantity) / total
                avg_price = avg_price.quantize(SHARE_UNIT, rounding=ROUND_HALF_UP)
                holding = Holding(wallet_id, symbol, total, avg_price)
            self.db.save_holding(holding)

        logger.info(
            "Stock bought",
            extra={"wallet_id": wallet_id, "symbol": symbol, "quantity": str(quantity)},
        )
        if result.alert is not None:
            self.ledger.notify_alert(result.alert)
        return result

    def sell_stock(
        self, wallet_id: int, symbol: str, quantity: Decimal, price: Decimal
    ) -> SubmissionResult:
        """Sell shares and credit the wallet.

        Selling the whole position (or more) removes the holding. The sale is
        settled even when no position is held; holdings are then unchanged.

        Raises:
            ValidationError: If symbol, quantity or price is invalid
            NotFoundError: If wallet doesn't exist
        """
        symbol = self._check_order(symbol, quantity, price)
        tx = self._new_transaction(
            wallet_id,
            "sell",
            self._order_total(quantity, price),
            f"Sell Order: {symbol}",
            Category.INVESTMENTS,
            TransactionKind.STOCK_SELL,
        )

        with self.ledger.wallet_lock(wallet_id), self.db.atomic():
            result = self.ledger.submit_transaction(wallet_id, tx, notify=False)
            existing = self.db.get_holding(wallet_id, symbol)
            if existing is None:
                logger.warning(
                    "Sell without a held position",
                    extra={"wallet_id": wallet_id, "symbol": symbol},
                )
            elif existing.quantity <= quantity:
                self.db.delete_holding(wallet_id, symbol)
            else:
                self.db.save_holding(
                    Holding(wallet_id, symbol, existing.quantity - quantity, existing.avg_price)
                )

        if result.alert is not None:
            self.ledger.notify_alert(result.alert)
        return result

    def contribute_fee(self, wallet_id: int, amount: Decimal, title: str) -> SubmissionResult:
        """Move money into a fee fund.

        Fee contributions debit the wallet but never touch a budget.
        """
        if not title or not title.strip():
            raise ValidationError("Fee title must not be empty")
        tx = self._new_transaction(
            wallet_id,
            "fee-fund",
            amount,
            title,
            Category.FEES,
            TransactionKind.FEE_CONTRIBUTION,
        )
        return self.ledger.submit_transaction(wallet_id, tx)

    def get_holding(self, wallet_id: int, symbol: str) -> Optional[Holding]:
        """Get a holding or None."""
        return self.db.get_holding(wallet_id, symbol.strip().upper())

    def list_holdings(self, wallet_id: int) -> list[Holding]:
        """List holdings of a wallet."""
        return self.db.list_holdings(wallet_id)
