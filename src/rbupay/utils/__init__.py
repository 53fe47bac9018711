"""Utility functions for rbupay."""

from rbupay.utils.amount_parser import parse_amount
from rbupay.utils.timestamp_parser import parse_timestamp, to_epoch_ms, from_epoch_ms

__all__ = ["parse_amount", "parse_timestamp", "to_epoch_ms", "from_epoch_ms"]
