"""SQLAlchemy models for rbupay database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    BigInteger,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    JSON,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Wallet(Base):
    """Wallet model."""

    __tablename__ = "wallets"

    id = Column(Integer, primary_key=True)
    owner = Column(String, unique=True, nullable=False)
    balance = Column(Numeric(14, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="INR")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    budgets = relationship("Budget", back_populates="wallet", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="wallet", cascade="all, delete-orphan")
    alerts = relationship("FraudAlert", back_populates="wallet", cascade="all, delete-orphan")
    holdings = relationship("Holding", back_populates="wallet", cascade="all, delete-orphan")


class Budget(Base):
    """Per-category budget model."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    wallet_id = Column(Integer, ForeignKey("wallets.id"), nullable=False)
    category = Column(String, nullable=False)
    limit_amount = Column(Numeric(14, 2), nullable=False)
    spent = Column(Numeric(14, 2), nullable=False, default=0)

    __table_args__ = (UniqueConstraint("wallet_id", "category", name="uq_wallet_category"),)

    # Relationships
    wallet = relationship("Wallet", back_populates="budgets")


class Transaction(Base):
    """Transaction model.

    ``seq`` is the insertion order; history is read newest first by it
    because event timestamps can be back-dated.
    """

    __tablename__ = "transactions"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    tx_id = Column(String, nullable=False)
    wallet_id = Column(Integer, ForeignKey("wallets.id"), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    recipient = Column(String, nullable=False)
    sender = Column(String, nullable=False)
    category = Column(String, nullable=False)
    timestamp = Column(BigInteger, nullable=False, index=True)
    status = Column(String, nullable=False)
    risk_score = Column(String, nullable=False)
    round_up_amount = Column(Numeric(14, 2), nullable=True)
    flagged_reason = Column(String, nullable=True)
    kind = Column(String, nullable=True)
    is_split = Column(Boolean, default=False, nullable=False)
    split_with = Column(JSON, nullable=False, default=list)

    __table_args__ = (UniqueConstraint("wallet_id", "tx_id", name="uq_wallet_tx_id"),)

    # Relationships
    wallet = relationship("Wallet", back_populates="transactions")


class FraudAlert(Base):
    """Fraud alert model."""

    __tablename__ = "fraud_alerts"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    alert_id = Column(String, nullable=False)
    wallet_id = Column(Integer, ForeignKey("wallets.id"), nullable=False)
    # Weak reference: no foreign key, the transaction may be gone
    tx_id = Column(String, nullable=False)
    timestamp = Column(BigInteger, nullable=False)
    type = Column(String, nullable=False)
    severity = Column(String, nullable=False)
    description = Column(String, nullable=False)

    # Relationships
    wallet = relationship("Wallet", back_populates="alerts")


class Holding(Base):
    """Stock holding model."""

    __tablename__ = "holdings"

    id = Column(Integer, primary_key=True)
    wallet_id = Column(Integer, ForeignKey("wallets.id"), nullable=False)
    symbol = Column(String, nullable=False)
    quantity = Column(Numeric(18, 6), nullable=False)
    avg_price = Column(Numeric(18, 6), nullable=False)

    __table_args__ = (UniqueConstraint("wallet_id", "symbol", name="uq_wallet_symbol"),)

    # Relationships
    wallet = relationship("Wallet", back_populates="holdings")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions are per thread; connections move between threads via the pool
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
