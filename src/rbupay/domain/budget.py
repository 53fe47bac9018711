"""Budget domain service."""

from decimal import Decimal
from typing import Optional

from rbupay.database.base import Database
from rbupay.domain.entities import Budget, Category, UNBUDGETED_CATEGORIES, is_whole_paise
from rbupay.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    budget_not_found,
    too_many_decimals,
    unbudgeted_category,
    wallet_not_found,
)


# Starting envelopes for a new student wallet: (category, limit, spent)
DEFAULT_BUDGETS = [
    (Category.FOOD, Decimal("8000"), Decimal("3400")),
    (Category.TRAVEL, Decimal("5000"), Decimal("1200")),
    (Category.INVESTMENTS, Decimal("10000"), Decimal("4000")),
    (Category.UTILITIES, Decimal("2000"), Decimal("450")),
    (Category.SHOPPING, Decimal("6000"), Decimal("2100")),
]


class BudgetService:
    """Service for managing budget envelopes.

    Only the ledger increments spent; this service never lowers it.
    """

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_budget(
        self,
        wallet_id: int,
        category: Category,
        limit: Decimal,
        spent: Decimal = Decimal("0"),
    ) -> None:
        """Create a budget envelope.

        Args:
            wallet_id: Wallet ID
            category: Budgeted category (not Others or Fees)
            limit: Spending ceiling
            spent: Amount already spent

        Raises:
            NotFoundError: If wallet doesn't exist
            ValidationError: If category is excluded or amounts are negative or
                finer than one paisa
            ConflictError: If the category already has a budget
        """
        if self.db.get_wallet(wallet_id) is None:
            raise NotFoundError(wallet_not_found(wallet_id))

        category = Category.parse(category)
        if category in UNBUDGETED_CATEGORIES:
            raise ValidationError(unbudgeted_category(category.value))
        if limit < 0 or spent < 0:
            raise ValidationError("Budget limit and spent must not be negative")
        for amount in (limit, spent):
            if not is_whole_paise(amount):
                raise ValidationError(too_many_decimals(amount))

        if self.db.get_budget(wallet_id, category) is not None:
            raise ConflictError(
                f"Budget for category '{category.value}' already exists on wallet {wallet_id}"
            )

        self.db.create_budget(wallet_id, category, limit, spent)

    def init_default_budgets(self, wallet_id: int) -> int:
        """Create the default budget envelopes that are missing.

        Returns:
            Number of budgets created
        """
        if self.db.get_wallet(wallet_id) is None:
            raise NotFoundError(wallet_not_found(wallet_id))

        created = 0
        for category, limit, spent in DEFAULT_BUDGETS:
            if self.db.get_budget(wallet_id, category) is None:
                self.db.create_budget(wallet_id, category, limit, spent)
                created += 1
        return created

    def set_limit(self, wallet_id: int, category: Category, limit: Decimal) -> None:
        """Change the limit of an existing budget.

        Raises:
            ValidationError: If limit is negative or finer than one paisa
            NotFoundError: If the budget doesn't exist
        """
        category = Category.parse(category)
        if limit < 0:
            raise ValidationError("Budget limit must not be negative")
        if not is_whole_paise(limit):
            raise ValidationError(too_many_decimals(limit))
        if self.db.get_budget(wallet_id, category) is None:
            raise NotFoundError(budget_not_found(wallet_id, category.value))
        self.db.update_budget(wallet_id, category, limit=limit)

    def get_budget(self, wallet_id: int, category: Category) -> Optional[Budget]:
        """Get a budget or None."""
        return self.db.get_budget(wallet_id, Category.parse(category))

    def list_budgets(self, wallet_id: int) -> list[Budget]:
        """List budgets of a wallet."""
        return self.db.list_budgets(wallet_id)
