"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from bankledger.database.sqlalchemy_db import SQLAlchemyDatabase

DEFAULT_SQLITE_TIMEOUT = 30.0


def create_sqlite_database(
    database_path: Optional[str] = None, timeout: Optional[float] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks BANKLEDGER_DB_PATH
            environment variable, then defaults to ~/.bankledger/bankledger.db
        timeout: Seconds a writer waits for the database lock. If None, checks
            BANKLEDGER_DB_TIMEOUT, then defaults to 30 seconds

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("BANKLEDGER_DB_PATH")

    if database_path is None:
        # Default to ~/.bankledger/bankledger.db
        home = Path.home()
        db_dir = home / ".bankledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "bankledger.db")

    if timeout is None:
        timeout = float(os.environ.get("BANKLEDGER_DB_TIMEOUT", DEFAULT_SQLITE_TIMEOUT))

    database_url = f"sqlite:///{database_path}"
    # One Database per thread, but pooled connections may be created elsewhere.
    connect_args = {"timeout": timeout, "check_same_thread": False}
    db = SQLAlchemyDatabase(database_url, connect_args=connect_args)
    db.database_path = database_path
    return db


def create_database(
    database_url: Optional[str] = None, database_path: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a database from a SQLAlchemy URL, falling back to SQLite.

    Args:
        database_url: Any SQLAlchemy URL. If None, checks BANKLEDGER_DB_URL
        database_path: SQLite file used when no URL is configured

    Returns:
        SQLAlchemyDatabase instance
    """
    if database_url is None:
        database_url = os.environ.get("BANKLEDGER_DB_URL")

    if database_url is None or database_url.startswith("sqlite"):
        if database_url is not None and database_path is None:
            database_path = database_url.split(":///", 1)[-1]
        return create_sqlite_database(database_path=database_path)

    return SQLAlchemyDatabase(database_url)
