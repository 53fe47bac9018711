"""Shared pytest fixtures for rbupay tests."""

import logging
import tempfile
import os
from decimal import Decimal
import pytest

from rbupay.database.factories import create_sqlite_database
from rbupay.domain.alerts import AlertStore
from rbupay.domain.budget import BudgetService
from rbupay.domain.entities import Category, Transaction, TransactionStatus
from rbupay.domain.ledger import LedgerService
from rbupay.domain.orders import OrderService
from rbupay.domain.wallet import WalletService

# Fixed "now" for deterministic rule windows: 2024-06-10 08:53:20 UTC
NOW_MS = 1_718_009_600_000


class FakeClock:
    """Settable clock returning epoch milliseconds."""

    def __init__(self, now: int = NOW_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def now():
    """Return the fixed current time in epoch milliseconds."""
    return NOW_MS


@pytest.fixture
def clock():
    """Create a fixed clock."""
    return FakeClock()


@pytest.fixture
def wallet_service(temp_db):
    """Create a WalletService with a temporary database."""
    return WalletService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def alert_store(temp_db):
    """Create an AlertStore with a temporary database."""
    return AlertStore(temp_db)


@pytest.fixture
def ledger_service(temp_db, clock):
    """Create a LedgerService with round-up enabled and a fixed clock."""
    return LedgerService(temp_db, clock=clock)


@pytest.fixture
def order_service(temp_db, ledger_service):
    """Create an OrderService on top of the ledger."""
    return OrderService(temp_db, ledger_service)


@pytest.fixture
def sample_wallet(wallet_service):
    """Create a sample wallet with a 10,000 balance."""
    wallet_id = wallet_service.create_wallet(owner="Arjun Sharma", balance=Decimal("10000"))
    return wallet_service.get_wallet(wallet_id)


@pytest.fixture
def sample_budgets(budget_service, sample_wallet):
    """Create the default budgets for the sample wallet."""
    budget_service.init_default_budgets(sample_wallet.id)
    return {b.category: b for b in budget_service.list_budgets(sample_wallet.id)}


@pytest.fixture
def make_tx(clock):
    """Build transactions with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> Transaction:
        counter["n"] += 1
        fields = dict(
            id=f"tx-{counter['n']}",
            amount=Decimal("100"),
            recipient="Campus Mart",
            sender="Arjun Sharma",
            category=Category.FOOD,
            timestamp=clock(),
            status=TransactionStatus.COMPLETED,
        )
        fields.update(overrides)
        return Transaction(**fields)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
