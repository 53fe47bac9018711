"""Timestamp parsing utilities."""

from datetime import datetime, timedelta, UTC
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def to_epoch_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive values are UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp() * 1000)


def from_epoch_ms(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(ms / 1000, tz=UTC)


def parse_timestamp(value: str, now: Optional[datetime] = None) -> int:
    """Parse a timestamp string into epoch milliseconds.

    Supports:
    - Raw epoch milliseconds: "1718000000000"
    - Absolute times: "2024-01-15", "2024-01-15 10:30", "January 15, 2024"
    - Relative words: "now", "today", "yesterday"
    - Offsets into the past: "5 minutes ago", "2 hours ago", "3 days ago",
      "1 month ago"

    Args:
        value: Timestamp string
        now: Reference time for relative values (defaults to current UTC time)

    Returns:
        Epoch milliseconds

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip().lower()
    if now is None:
        now = datetime.now(UTC)

    if text.isdigit():
        return int(text)

    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    relative = {
        "now": now,
        "today": midnight,
        "yesterday": midnight - timedelta(days=1),
    }
    if text in relative:
        return to_epoch_ms(relative[text])

    if text.endswith(" ago"):
        parts = text[:-4].split()
        if len(parts) == 2 and parts[0].isdigit():
            count = int(parts[0])
            unit = parts[1].rstrip("s")
            offsets = {
                "second": timedelta(seconds=count),
                "minute": timedelta(minutes=count),
                "hour": timedelta(hours=count),
                "day": timedelta(days=count),
                "week": timedelta(weeks=count),
                "month": relativedelta(months=count),
            }
            if unit in offsets:
                return to_epoch_ms(now - offsets[unit])
        raise ValueError(f"Could not parse relative time '{value}'")

    # Try parsing as absolute time
    try:
        dt = date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}")
    return to_epoch_ms(dt)
