"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the enum <-> string
translation the ORM columns need.
"""

from decimal import Decimal

from rbupay.domain import entities as domain
from rbupay.database.models import (
    Wallet as ORMWallet,
    Budget as ORMBudget,
    Transaction as ORMTransaction,
    FraudAlert as ORMFraudAlert,
    Holding as ORMHolding,
)


def wallet_to_domain(orm_wallet: ORMWallet) -> domain.Wallet:
    """Convert SQLAlchemy Wallet model to domain Wallet entity."""
    return domain.Wallet(
        id=orm_wallet.id,
        owner=orm_wallet.owner,
        balance=Decimal(orm_wallet.balance),
        currency=orm_wallet.currency,
        created_at=orm_wallet.created_at,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        wallet_id=orm_budget.wallet_id,
        category=domain.Category(orm_budget.category),
        limit=Decimal(orm_budget.limit_amount),
        spent=Decimal(orm_budget.spent),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    round_up = orm_transaction.round_up_amount
    return domain.Transaction(
        id=orm_transaction.tx_id,
        amount=Decimal(orm_transaction.amount),
        recipient=orm_transaction.recipient,
        sender=orm_transaction.sender,
        category=domain.Category(orm_transaction.category),
        timestamp=orm_transaction.timestamp,
        status=domain.TransactionStatus(orm_transaction.status),
        risk_score=domain.RiskScore(orm_transaction.risk_score),
        round_up_amount=Decimal(round_up) if round_up is not None else None,
        flagged_reason=orm_transaction.flagged_reason,
        kind=domain.TransactionKind(orm_transaction.kind) if orm_transaction.kind else None,
        is_split=orm_transaction.is_split,
        split_with=tuple(orm_transaction.split_with or ()),
    )


def transaction_to_orm(wallet_id: int, transaction: domain.Transaction) -> ORMTransaction:
    """Convert domain Transaction entity to a new SQLAlchemy Transaction row."""
    return ORMTransaction(
        tx_id=transaction.id,
        wallet_id=wallet_id,
        amount=transaction.amount,
        recipient=transaction.recipient,
        sender=transaction.sender,
        category=transaction.category.value,
        timestamp=transaction.timestamp,
        status=transaction.status.value,
        risk_score=transaction.risk_score.value,
        round_up_amount=transaction.round_up_amount,
        flagged_reason=transaction.flagged_reason,
        kind=transaction.kind.value if transaction.kind is not None else None,
        is_split=transaction.is_split,
        split_with=list(transaction.split_with),
    )


def fraud_alert_to_domain(orm_alert: ORMFraudAlert) -> domain.FraudAlert:
    """Convert SQLAlchemy FraudAlert model to domain FraudAlert entity."""
    return domain.FraudAlert(
        id=orm_alert.alert_id,
        tx_id=orm_alert.tx_id,
        timestamp=orm_alert.timestamp,
        type=domain.AlertType(orm_alert.type),
        severity=domain.RiskScore(orm_alert.severity),
        description=orm_alert.description,
    )


def holding_to_domain(orm_holding: ORMHolding) -> domain.Holding:
    """Convert SQLAlchemy Holding model to domain Holding entity."""
    return domain.Holding(
        wallet_id=orm_holding.wallet_id,
        symbol=orm_holding.symbol,
        quantity=Decimal(orm_holding.quantity),
        avg_price=Decimal(orm_holding.avg_price),
    )
