"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the services never hold ORM
instances that could be expired or mutated behind their back.
"""

from bankledger.domain import entities as domain
from bankledger.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    ChartOfAccount as ORMChartOfAccount,
    Transaction as ORMTransaction,
    Transfer as ORMTransfer,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        owner_user_id=orm_account.owner_user_id,
        name=orm_account.name,
        initial_balance=orm_account.initial_balance,
        current_balance=orm_account.current_balance,
        start_date=orm_account.start_date,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        owner_user_id=orm_category.owner_user_id,
        description=orm_category.description,
        dre_range=orm_category.dre_range,
        created_at=orm_category.created_at,
    )


def chart_of_account_to_domain(orm_chart: ORMChartOfAccount) -> domain.ChartOfAccount:
    """Convert SQLAlchemy ChartOfAccount model to domain ChartOfAccount entity."""
    return domain.ChartOfAccount(
        id=orm_chart.id,
        owner_user_id=orm_chart.owner_user_id,
        description=orm_chart.description,
        category_id=orm_chart.category_id,
        created_at=orm_chart.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        owner_user_id=orm_transaction.owner_user_id,
        bank_id=orm_transaction.bank_id,
        chart_of_account_id=orm_transaction.chart_of_account_id,
        type=domain.TransactionType(orm_transaction.type),
        value=orm_transaction.value,
        due_date=orm_transaction.due_date,
        payment_date=orm_transaction.payment_date,
        description=orm_transaction.description,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.Transfer:
    """Convert SQLAlchemy Transfer model to domain Transfer entity."""
    return domain.Transfer(
        id=orm_transfer.id,
        owner_user_id=orm_transfer.owner_user_id,
        from_bank_id=orm_transfer.from_bank_id,
        to_bank_id=orm_transfer.to_bank_id,
        value=orm_transfer.value,
        date=orm_transfer.date,
        description=orm_transfer.description,
        created_at=orm_transfer.created_at,
        updated_at=orm_transfer.updated_at,
    )
