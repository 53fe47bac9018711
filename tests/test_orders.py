"""Tests for stock orders and fee contributions."""

import pytest
from decimal import Decimal

from rbupay.domain.entities import Category, TransactionKind
from rbupay.domain.errors import NotFoundError, ValidationError


def balance_of(temp_db, wallet_id):
    return temp_db.get_wallet(wallet_id).balance


class TestBuyStock:
    """Tests for buying shares."""

    def test_buy_creates_holding(self, temp_db, order_service, sample_wallet, sample_budgets):
        """Test a first purchase."""
        result = order_service.buy_stock(sample_wallet.id, "tcs", Decimal("10"), Decimal("100"))

        holding = order_service.get_holding(sample_wallet.id, "TCS")
        assert holding.quantity == Decimal("10")
        assert holding.avg_price == Decimal("100")

        tx = result.transaction
        assert tx.recipient == "Buy Order: TCS"
        assert tx.category is Category.INVESTMENTS
        assert tx.kind is TransactionKind.STOCK_BUY
        assert tx.amount == Decimal("1000")
        assert tx.sender == "Arjun Sharma"
        assert balance_of(temp_db, sample_wallet.id) == Decimal("9000")

        budget = temp_db.get_budget(sample_wallet.id, Category.INVESTMENTS)
        assert budget.spent == Decimal("5000")

    def test_buy_averages_price(self, order_service, sample_wallet):
        """Test that repeat purchases use the weighted average price."""
        order_service.buy_stock(sample_wallet.id, "TCS", Decimal("10"), Decimal("100"))
        order_service.buy_stock(sample_wallet.id, "TCS", Decimal("10"), Decimal("200"))

        holding = order_service.get_holding(sample_wallet.id, "TCS")
        assert holding.quantity == Decimal("20")
        assert holding.avg_price == Decimal("150")

    def test_buy_uneven_average(self, order_service, sample_wallet):
        """Test weighting by quantity."""
        order_service.buy_stock(sample_wallet.id, "INFY", Decimal("3"), Decimal("100"))
        order_service.buy_stock(sample_wallet.id, "INFY", Decimal("1"), Decimal("500"))

        holding = order_service.get_holding(sample_wallet.id, "INFY")
        assert holding.quantity == Decimal("4")
        assert holding.avg_price == Decimal("200")

    @pytest.mark.parametrize(
        "symbol,quantity,price",
        [
            ("", Decimal("1"), Decimal("100")),
            ("TCS", Decimal("0"), Decimal("100")),
            ("TCS", Decimal("1"), Decimal("-5")),
        ],
    )
    def test_buy_invalid_order(self, order_service, sample_wallet, symbol, quantity, price):
        """Test that invalid orders are rejected."""
        with pytest.raises(ValidationError):
            order_service.buy_stock(sample_wallet.id, symbol, quantity, price)

        assert order_service.list_holdings(sample_wallet.id) == []

    def test_buy_unknown_wallet(self, order_service):
        """Test buying on a missing wallet."""
        with pytest.raises(NotFoundError):
            order_service.buy_stock(99, "TCS", Decimal("1"), Decimal("100"))


class TestSellStock:
    """Tests for selling shares."""

    def test_partial_sell_keeps_average(self, temp_db, order_service, sample_wallet):
        """Test that a partial sale reduces quantity only."""
        order_service.buy_stock(sample_wallet.id, "TCS", Decimal("10"), Decimal("100"))
        result = order_service.sell_stock(sample_wallet.id, "TCS", Decimal("4"), Decimal("120"))

        holding = order_service.get_holding(sample_wallet.id, "TCS")
        assert holding.quantity == Decimal("6")
        assert holding.avg_price == Decimal("100")

        assert result.transaction.recipient == "Sell Order: TCS"
        assert result.transaction.kind is TransactionKind.STOCK_SELL
        assert balance_of(temp_db, sample_wallet.id) == Decimal("9480")

    def test_full_sell_removes_holding(self, order_service, sample_wallet):
        """Test that selling the whole position removes it."""
        order_service.buy_stock(sample_wallet.id, "TCS", Decimal("10"), Decimal("100"))
        order_service.sell_stock(sample_wallet.id, "TCS", Decimal("10"), Decimal("110"))

        assert order_service.get_holding(sample_wallet.id, "TCS") is None
        assert order_service.list_holdings(sample_wallet.id) == []

    def test_sell_without_holding_still_credits(
        self, temp_db, order_service, sample_wallet, sample_budgets
    ):
        """Test that a sale with no position is settled but holds nothing."""
        order_service.sell_stock(sample_wallet.id, "WIPRO", Decimal("5"), Decimal("100"))

        assert balance_of(temp_db, sample_wallet.id) == Decimal("10500")
        assert order_service.list_holdings(sample_wallet.id) == []
        budget = temp_db.get_budget(sample_wallet.id, Category.INVESTMENTS)
        assert budget.spent == Decimal("4000")


class TestFeeContribution:
    """Tests for fee fund contributions."""

    def test_contribution_debits_without_budget(
        self, temp_db, order_service, sample_wallet, sample_budgets
    ):
        """Test that a contribution leaves every budget untouched."""
        result = order_service.contribute_fee(sample_wallet.id, Decimal("1234"), "Semester Fees")

        assert result.transaction.category is Category.FEES
        assert result.transaction.kind is TransactionKind.FEE_CONTRIBUTION
        assert result.transaction.recipient == "Semester Fees"
        assert result.round_up == Decimal("6")
        assert balance_of(temp_db, sample_wallet.id) == Decimal("8760")

        budgets = {b.category: b for b in temp_db.list_budgets(sample_wallet.id)}
        assert budgets == sample_budgets

    def test_contribution_requires_title(self, order_service, sample_wallet):
        """Test that a title is required."""
        with pytest.raises(ValidationError):
            order_service.contribute_fee(sample_wallet.id, Decimal("100"), " ")

    def test_contribution_requires_positive_amount(self, order_service, sample_wallet):
        """Test that the amount must be positive."""
        with pytest.raises(ValidationError):
            order_service.contribute_fee(sample_wallet.id, Decimal("0"), "Hostel")


class TestOrderPrecision:
    """Tests for order totals and quantities at storage precision."""

    def test_order_total_rounded_to_paise(self, temp_db, order_service, sample_wallet):
        """Test that the settled total matches the stored transaction."""
        result = order_service.buy_stock(sample_wallet.id, "INFY", Decimal("3"), Decimal("33.333"))

        assert result.transaction.amount == Decimal("100.00")
        assert temp_db.get_transaction(sample_wallet.id, result.transaction.id) == result.transaction
        assert balance_of(temp_db, sample_wallet.id) == Decimal("9900")
        assert order_service.get_holding(sample_wallet.id, "INFY").avg_price == Decimal("33.333")

    def test_average_price_kept_to_six_places(self, order_service, sample_wallet):
        """Test that a repeating average is stored rounded, not truncated by the database."""
        order_service.buy_stock(sample_wallet.id, "TCS", Decimal("1"), Decimal("100"))
        order_service.buy_stock(sample_wallet.id, "TCS", Decimal("2"), Decimal("100.01"))

        holding = order_service.get_holding(sample_wallet.id, "TCS")
        assert holding.quantity == Decimal("3")
        assert holding.avg_price == Decimal("100.006667")

    def test_quantity_finer_than_storage(self, order_service, sample_wallet):
        """Test that quantities beyond six decimal places are rejected."""
        with pytest.raises(ValidationError, match="6 decimal places"):
            order_service.buy_stock(sample_wallet.id, "TCS", Decimal("0.0000001"), Decimal("100"))

    def test_fee_finer_than_paisa(self, order_service, sample_wallet):
        """Test that fee contributions are not silently rounded."""
        with pytest.raises(ValidationError, match="2 decimal places"):
            order_service.contribute_fee(sample_wallet.id, Decimal("10.005"), "Hostel")


class TestOrderAlerts:
    """Tests for alert delivery around orders."""

    def test_alert_sent_after_order_commits(self, order_service, ledger_service, sample_wallet):
        """Test that a risky order reaches listeners once it is stored."""
        received = []
        ledger_service.add_alert_listener(received.append)

        result = order_service.buy_stock(sample_wallet.id, "TCS", Decimal("200"), Decimal("100"))

        assert result.alert is not None
        assert received == [result.alert]
        assert ledger_service.alert_store.get_alerts(sample_wallet.id) == [result.alert]

    def test_failed_holding_write_sends_no_alert(
        self, temp_db, order_service, ledger_service, sample_wallet, monkeypatch
    ):
        """Test that a rolled back order neither notifies nor keeps its alert."""
        received = []
        ledger_service.add_alert_listener(received.append)

        def broken_save(holding):
            raise RuntimeError("disk full")

        monkeypatch.setattr(temp_db, "save_holding", broken_save)

        with pytest.raises(RuntimeError):
            order_service.buy_stock(sample_wallet.id, "TCS", Decimal("200"), Decimal("100"))

        assert received == []
        assert ledger_service.alert_store.get_alerts(sample_wallet.id) == []
        assert ledger_service.list_transactions(sample_wallet.id) == []
        assert balance_of(temp_db, sample_wallet.id) == Decimal("10000")
