"""Utility for resolving wallet owners to IDs."""

from rbupay.domain.wallet import WalletService
from rbupay.domain.errors import NotFoundError


def resolve_wallet(wallet_service: WalletService, wallet: str | int) -> int:
    """Resolve wallet owner name or ID to wallet ID.

    Args:
        wallet_service: WalletService instance
        wallet: Owner name (str) or ID (int or string representation of int)

    Returns:
        Wallet ID

    Raises:
        NotFoundError: If wallet is not found
    """
    # If it's already an integer, use it as ID
    if isinstance(wallet, int):
        if wallet_service.get_wallet(wallet) is None:
            raise NotFoundError(f"Wallet ID {wallet} not found")
        return wallet

    # Try to parse as integer (handles string IDs like "1")
    try:
        wallet_id = int(wallet)
    except (ValueError, TypeError):
        wallet_id = None

    if wallet_id is not None:
        if wallet_service.get_wallet(wallet_id) is None:
            raise NotFoundError(f"Wallet ID {wallet_id} not found")
        return wallet_id

    # Try to find by owner name
    for w in wallet_service.list_wallets():
        if w.owner == wallet:
            return w.id

    raise NotFoundError(f"Wallet '{wallet}' not found")
