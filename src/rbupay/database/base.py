"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from rbupay.domain.entities import (
    Wallet,
    Budget,
    Category,
    Transaction,
    FraudAlert,
    Holding,
)


class Database(ABC):
    """Abstract database interface for rbupay.

    Every service reads and writes ledger state through this port. Writes
    commit immediately unless they run inside ``atomic()``, in which case
    they commit together when the outermost block exits.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group writes into one unit of work, rolled back on error."""
        pass

    # Wallet operations
    @abstractmethod
    def create_wallet(self, owner: str, balance: Decimal, currency: str) -> int:
        """Create a new wallet. Returns wallet ID."""
        pass

    @abstractmethod
    def get_wallet(self, wallet_id: int) -> Optional[Wallet]:
        """Get wallet by ID."""
        pass

    @abstractmethod
    def list_wallets(self) -> list[Wallet]:
        """List all wallets."""
        pass

    @abstractmethod
    def update_wallet_balance(self, wallet_id: int, balance: Decimal) -> None:
        """Overwrite the wallet balance."""
        pass

    # Budget operations
    @abstractmethod
    def create_budget(
        self, wallet_id: int, category: Category, limit: Decimal, spent: Decimal
    ) -> None:
        """Create a budget envelope for a wallet category."""
        pass

    @abstractmethod
    def get_budget(self, wallet_id: int, category: Category) -> Optional[Budget]:
        """Get the budget for a wallet category."""
        pass

    @abstractmethod
    def list_budgets(self, wallet_id: int) -> list[Budget]:
        """List budgets for a wallet."""
        pass

    @abstractmethod
    def update_budget(
        self,
        wallet_id: int,
        category: Category,
        limit: Optional[Decimal] = None,
        spent: Optional[Decimal] = None,
    ) -> None:
        """Update limit and/or spent of an existing budget."""
        pass

    # Transaction operations
    @abstractmethod
    def add_transaction(self, wallet_id: int, transaction: Transaction) -> None:
        """Record a transaction at the head of the wallet's history."""
        pass

    @abstractmethod
    def get_transaction(self, wallet_id: int, tx_id: str) -> Optional[Transaction]:
        """Get a transaction by its identifier."""
        pass

    @abstractmethod
    def transaction_exists(self, wallet_id: int, tx_id: str) -> bool:
        """Check if a transaction with given id exists for wallet."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        wallet_id: int,
        since: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions newest first (by insertion, not timestamp).

        Args:
            wallet_id: Wallet ID
            since: Optional epoch-ms cutoff; only transactions with a
                timestamp strictly after it are returned
            limit: Optional maximum number of transactions
        """
        pass

    # Alert operations
    @abstractmethod
    def add_alert(self, wallet_id: int, alert: FraudAlert, capacity: int) -> None:
        """Insert an alert at the head and evict everything past capacity."""
        pass

    @abstractmethod
    def list_alerts(self, wallet_id: int) -> list[FraudAlert]:
        """List alerts newest first."""
        pass

    @abstractmethod
    def clear_alerts(self, wallet_id: int) -> None:
        """Remove every alert of a wallet."""
        pass

    # Holding operations
    @abstractmethod
    def get_holding(self, wallet_id: int, symbol: str) -> Optional[Holding]:
        """Get the holding of a symbol."""
        pass

    @abstractmethod
    def save_holding(self, holding: Holding) -> None:
        """Create or replace a holding."""
        pass

    @abstractmethod
    def delete_holding(self, wallet_id: int, symbol: str) -> None:
        """Delete a holding if present."""
        pass

    @abstractmethod
    def list_holdings(self, wallet_id: int) -> list[Holding]:
        """List holdings ordered by symbol."""
        pass
