"""Tests for database mappers."""

from datetime import datetime, UTC
from decimal import Decimal

from rbupay.database.models import (
    Wallet as ORMWallet,
    Budget as ORMBudget,
    Transaction as ORMTransaction,
    FraudAlert as ORMFraudAlert,
    Holding as ORMHolding,
)
from rbupay.database.mappers import (
    wallet_to_domain,
    budget_to_domain,
    transaction_to_domain,
    transaction_to_orm,
    fraud_alert_to_domain,
    holding_to_domain,
)
from rbupay.domain.entities import (
    AlertType,
    Budget,
    Category,
    FraudAlert,
    Holding,
    RiskScore,
    Transaction,
    TransactionKind,
    TransactionStatus,
    Wallet,
)


class TestWalletMapper:
    """Tests for Wallet mapper."""

    def test_wallet_to_domain(self):
        """Test converting ORM Wallet to domain Wallet."""
        orm_wallet = ORMWallet(
            id=1,
            owner="Arjun Sharma",
            balance=Decimal("42500.00"),
            currency="INR",
            created_at=datetime.now(UTC),
        )
        domain_wallet = wallet_to_domain(orm_wallet)

        assert isinstance(domain_wallet, Wallet)
        assert domain_wallet.id == 1
        assert domain_wallet.owner == "Arjun Sharma"
        assert domain_wallet.balance == Decimal("42500")
        assert domain_wallet.created_at == orm_wallet.created_at


class TestBudgetMapper:
    """Tests for Budget mapper."""

    def test_budget_to_domain(self):
        """Test converting ORM Budget to domain Budget."""
        orm_budget = ORMBudget(
            id=3,
            wallet_id=1,
            category="Food",
            limit_amount=Decimal("8000"),
            spent=Decimal("3400"),
        )
        domain_budget = budget_to_domain(orm_budget)

        assert domain_budget == Budget(1, Category.FOOD, Decimal("8000"), Decimal("3400"))


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain_minimal(self):
        """Test converting an ORM row with optional fields unset."""
        orm_txn = ORMTransaction(
            seq=1,
            tx_id="tx-1",
            wallet_id=1,
            amount=Decimal("123.00"),
            recipient="Campus Mart",
            sender="Arjun Sharma",
            category="Food",
            timestamp=1_718_009_600_000,
            status="completed",
            risk_score="low",
            round_up_amount=None,
            flagged_reason=None,
            kind=None,
            is_split=False,
            split_with=[],
        )
        domain_txn = transaction_to_domain(orm_txn)

        assert isinstance(domain_txn, Transaction)
        assert domain_txn.id == "tx-1"
        assert domain_txn.category is Category.FOOD
        assert domain_txn.status is TransactionStatus.COMPLETED
        assert domain_txn.risk_score is RiskScore.LOW
        assert domain_txn.round_up_amount is None
        assert domain_txn.kind is None
        assert domain_txn.split_with == ()

    def test_transaction_to_orm(self):
        """Test converting a domain Transaction into a new ORM row."""
        txn = Transaction(
            id="sell-1",
            amount=Decimal("500"),
            recipient="Sell Order: TCS",
            sender="Arjun Sharma",
            category=Category.INVESTMENTS,
            timestamp=5,
            status=TransactionStatus.FAILED,
            risk_score=RiskScore.HIGH,
            round_up_amount=Decimal("0"),
            flagged_reason="Rapid repeated payments detected.",
            kind=TransactionKind.STOCK_SELL,
            is_split=True,
            split_with=("Rohan",),
        )
        orm_txn = transaction_to_orm(7, txn)

        assert orm_txn.wallet_id == 7
        assert orm_txn.tx_id == "sell-1"
        assert orm_txn.category == "Investments"
        assert orm_txn.status == "failed"
        assert orm_txn.risk_score == "high"
        assert orm_txn.kind == "stock_sell"
        assert orm_txn.split_with == ["Rohan"]
        assert transaction_to_domain(orm_txn) == txn


class TestFraudAlertMapper:
    """Tests for FraudAlert mapper."""

    def test_fraud_alert_to_domain(self):
        """Test converting ORM FraudAlert to domain FraudAlert."""
        orm_alert = ORMFraudAlert(
            seq=1,
            alert_id="alert-abc",
            wallet_id=1,
            tx_id="tx-1",
            timestamp=10,
            type="amount",
            severity="medium",
            description="Unusually large transaction amount for student profile.",
        )

        assert fraud_alert_to_domain(orm_alert) == FraudAlert(
            id="alert-abc",
            tx_id="tx-1",
            timestamp=10,
            type=AlertType.AMOUNT,
            severity=RiskScore.MEDIUM,
            description="Unusually large transaction amount for student profile.",
        )


class TestHoldingMapper:
    """Tests for Holding mapper."""

    def test_holding_to_domain(self):
        """Test converting ORM Holding to domain Holding."""
        orm_holding = ORMHolding(
            id=1,
            wallet_id=1,
            symbol="INFY",
            quantity=Decimal("4.000000"),
            avg_price=Decimal("200.000000"),
        )

        assert holding_to_domain(orm_holding) == Holding(1, "INFY", Decimal("4"), Decimal("200"))
