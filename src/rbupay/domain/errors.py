"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def wallet_not_found(wallet_id: int) -> str:
    """Return message for missing wallet."""
    return f"Wallet {wallet_id} not found"


def budget_not_found(wallet_id: int, category: str) -> str:
    """Return message for missing budget."""
    return f"No budget for category '{category}' on wallet {wallet_id}"


def duplicate_transaction_id(tx_id: str, wallet_id: int) -> str:
    """Return message for duplicate transaction ID."""
    return f"Transaction with id '{tx_id}' already exists for wallet {wallet_id}"


def non_positive_amount(amount) -> str:
    """Return message for a zero or negative amount."""
    return f"Amount must be positive, got {amount}"


def unbudgeted_category(category: str) -> str:
    """Return message when a budget is requested for an excluded category."""
    return f"Category '{category}' cannot have a budget"


def too_many_decimals(amount, places: int = 2) -> str:
    """Return message for an amount finer than the stored precision."""
    return f"Amount must have at most {places} decimal places, got {amount}"
