"""Database layer for bankledger application."""

from bankledger.database.base import Database
from bankledger.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
