"""Alert store domain service."""

import logging

from rbupay.database.base import Database
from rbupay.domain.entities import FraudAlert

logger = logging.getLogger(__name__)

DEFAULT_ALERT_CAPACITY = 20


class AlertStore:
    """Bounded, newest-first history of fraud alerts per wallet."""

    def __init__(self, db: Database, capacity: int = DEFAULT_ALERT_CAPACITY):
        """Initialize alert store.

        Args:
            db: Database instance
            capacity: Maximum number of alerts kept per wallet
        """
        if capacity < 1:
            raise ValueError(f"Alert capacity must be at least 1, got {capacity}")
        self.db = db
        self.capacity = capacity

    def record(self, wallet_id: int, alert: FraudAlert) -> None:
        """Insert an alert at the head, evicting the oldest beyond capacity."""
        self.db.add_alert(wallet_id, alert, self.capacity)
        logger.warning(
            "Fraud alert recorded",
            extra={
                "wallet_id": wallet_id,
                "tx_id": alert.tx_id,
                "alert_type": alert.type.value,
                "severity": alert.severity.value,
            },
        )

    def get_alerts(self, wallet_id: int) -> list[FraudAlert]:
        """Return alerts newest first."""
        return self.db.list_alerts(wallet_id)

    def clear(self, wallet_id: int) -> None:
        """Remove every alert of a wallet."""
        self.db.clear_alerts(wallet_id)
        logger.info("Fraud alerts cleared", extra={"wallet_id": wallet_id})
