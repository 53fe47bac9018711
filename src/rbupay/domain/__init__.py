"""Domain layer for rbupay application."""

# Services import the database layer, which imports the entities in this
# package; load them lazily to avoid circular dependencies
_SERVICES = {
    "LedgerService": "rbupay.domain.ledger",
    "AlertStore": "rbupay.domain.alerts",
    "TransactionAnalyzer": "rbupay.domain.risk",
    "RoundUpCalculator": "rbupay.domain.round_up",
    "WalletService": "rbupay.domain.wallet",
    "BudgetService": "rbupay.domain.budget",
    "OrderService": "rbupay.domain.orders",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
