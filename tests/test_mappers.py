"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from bankledger.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    ChartOfAccount as ORMChartOfAccount,
    Transaction as ORMTransaction,
    Transfer as ORMTransfer,
)
from bankledger.database.mappers import (
    account_to_domain,
    category_to_domain,
    chart_of_account_to_domain,
    transaction_to_domain,
    transfer_to_domain,
)
from bankledger.domain.entities import (
    Account,
    Category,
    ChartOfAccount,
    Transaction,
    TransactionType,
    Transfer,
)

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def test_account_to_domain():
    orm_account = ORMAccount(
        id=1,
        owner_user_id=7,
        name="Checking",
        initial_balance=Decimal("10.00"),
        current_balance=Decimal("12.50"),
        start_date=date(2024, 1, 1),
        created_at=NOW,
    )
    account = account_to_domain(orm_account)

    assert isinstance(account, Account)
    assert account.owner_user_id == 7
    assert account.current_balance == Decimal("12.50")
    assert account.created_at == NOW


def test_category_and_chart_to_domain():
    category = category_to_domain(
        ORMCategory(id=2, owner_user_id=7, description="Revenue", dre_range="Receita", created_at=NOW)
    )
    chart = chart_of_account_to_domain(
        ORMChartOfAccount(id=3, owner_user_id=7, description="Sales", category_id=2, created_at=NOW)
    )

    assert isinstance(category, Category)
    assert category.dre_range == "Receita"
    assert isinstance(chart, ChartOfAccount)
    assert chart.category_id == 2


def test_transaction_to_domain_wraps_type():
    orm_txn = ORMTransaction(
        id=4,
        owner_user_id=7,
        bank_id=1,
        chart_of_account_id=3,
        type="Expense",
        value=Decimal("99.90"),
        due_date=date(2024, 2, 1),
        payment_date=None,
        description="Internet",
        created_at=NOW,
        updated_at=NOW,
    )
    txn = transaction_to_domain(orm_txn)

    assert isinstance(txn, Transaction)
    assert txn.type is TransactionType.EXPENSE
    assert txn.payment_date is None


def test_transfer_to_domain():
    transfer = transfer_to_domain(
        ORMTransfer(
            id=5,
            owner_user_id=7,
            from_bank_id=1,
            to_bank_id=2,
            value=Decimal("200.00"),
            date=date(2024, 2, 1),
            description=None,
            created_at=NOW,
            updated_at=NOW,
        )
    )

    assert isinstance(transfer, Transfer)
    assert (transfer.from_bank_id, transfer.to_bank_id) == (1, 2)
