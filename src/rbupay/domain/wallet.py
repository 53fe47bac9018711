"""Wallet domain service."""

from decimal import Decimal
from typing import Optional

from rbupay.database.base import Database
from rbupay.domain.entities import Wallet, is_whole_paise
from rbupay.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    too_many_decimals,
    wallet_not_found,
)

DEFAULT_OPENING_BALANCE = Decimal("42500")
SUPPORTED_CURRENCY = "INR"


class WalletService:
    """Service for managing wallets."""

    def __init__(self, db: Database):
        """Initialize wallet service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_wallet(
        self,
        owner: str,
        balance: Decimal = DEFAULT_OPENING_BALANCE,
        currency: str = SUPPORTED_CURRENCY,
    ) -> int:
        """Create a new wallet.

        Args:
            owner: Wallet owner display name
            balance: Opening balance
            currency: Currency code (only INR is supported)

        Returns:
            Wallet ID

        Raises:
            ValidationError: If owner is empty, currency unsupported or the
                balance has more than two decimal places
            ConflictError: If a wallet for owner already exists
        """
        if not owner or not owner.strip():
            raise ValidationError("Wallet owner must not be empty")
        if currency != SUPPORTED_CURRENCY:
            raise ValidationError(f"Unsupported currency '{currency}'")
        if not is_whole_paise(balance):
            raise ValidationError(too_many_decimals(balance))

        for wallet in self.db.list_wallets():
            if wallet.owner == owner:
                raise ConflictError(f"Wallet for '{owner}' already exists")

        return self.db.create_wallet(owner=owner, balance=balance, currency=currency)

    def get_wallet(self, wallet_id: int) -> Optional[Wallet]:
        """Get wallet by ID.

        Args:
            wallet_id: Wallet ID

        Returns:
            Wallet entity or None if not found
        """
        return self.db.get_wallet(wallet_id)

    def require_wallet(self, wallet_id: int) -> Wallet:
        """Get wallet by ID or raise NotFoundError."""
        wallet = self.db.get_wallet(wallet_id)
        if wallet is None:
            raise NotFoundError(wallet_not_found(wallet_id))
        return wallet

    def list_wallets(self) -> list[Wallet]:
        """List all wallets."""
        return self.db.list_wallets()
