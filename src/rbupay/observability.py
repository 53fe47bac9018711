"""Structured JSON logging."""

import logging
import sys
from datetime import datetime, UTC
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "rbupay"


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter adding timestamp, level and service fields."""

    def add_fields(
        self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(UTC).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def setup_logging(level: str = "WARNING") -> None:
    """Configure structured JSON logging on stderr.

    stdout stays reserved for command output.
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)
