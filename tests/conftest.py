"""Shared pytest fixtures for bankledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from bankledger.database.factories import create_sqlite_database
from bankledger.domain.account import AccountService
from bankledger.domain.bulk_import import ImportService
from bankledger.domain.category import CategoryService, ChartOfAccountService
from bankledger.domain.transaction import TransactionService
from bankledger.domain.transfer import TransferService

OWNER = 1
OTHER_USER = 2


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def owner():
    """ID of the acting user."""
    return OWNER


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def chart_service(temp_db):
    """Create a ChartOfAccountService with a temporary database."""
    return ChartOfAccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def transfer_service(temp_db):
    """Create a TransferService with a temporary database."""
    return TransferService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create an ImportService with a temporary database."""
    return ImportService(temp_db)


@pytest.fixture
def bank_a(account_service, owner):
    """Bank account 'Bank A' opened with 500.00."""
    account_id = account_service.create_account(
        owner, name="Bank A", initial_balance=Decimal("500.00"), start_date=date(2024, 1, 1)
    )
    return account_service.get_account(owner, account_id)


@pytest.fixture
def bank_b(account_service, owner):
    """Bank account 'Bank B' opened with 100.00."""
    account_id = account_service.create_account(
        owner, name="Bank B", initial_balance=Decimal("100.00"), start_date=date(2024, 1, 1)
    )
    return account_service.get_account(owner, account_id)


@pytest.fixture
def sample_category(category_service, owner):
    """Create a sample category."""
    category_id = category_service.create_category(owner, "Operating Expenses", "Despesas Operacionais")
    return category_service.get_category(owner, category_id)


@pytest.fixture
def sample_plan(chart_service, owner, sample_category):
    """Create a sample chart of account named 'Sales'."""
    chart_id = chart_service.create_chart_of_account(owner, "Sales", sample_category.id)
    return chart_service.get_chart_of_account(owner, chart_id)


@pytest.fixture
def balance_of(account_service, owner):
    """Return a function reading an account's current balance."""
    def _balance(account_id, owner_user_id=owner):
        return account_service.get_account(owner_user_id, account_id).current_balance
    return _balance


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
