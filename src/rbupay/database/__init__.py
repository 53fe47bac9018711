"""Database layer for rbupay application."""

from rbupay.database.base import Database
from rbupay.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
