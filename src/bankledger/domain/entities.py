"""Domain model entities for bankledger.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these; the SQLAlchemy
models stay behind the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction relative to its bank account."""

    INCOME = "Income"
    EXPENSE = "Expense"


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: int
    owner_user_id: int
    name: str
    initial_balance: Decimal
    current_balance: Decimal
    start_date: date
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category of the chart of accounts.

    ``dre_range`` names the income statement line the category rolls up to.
    """

    id: int
    owner_user_id: int
    description: str
    dre_range: str
    created_at: datetime


@dataclass(frozen=True)
class ChartOfAccount:
    """Chart of account (plan) domain entity."""

    id: int
    owner_user_id: int
    description: str
    category_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Income or expense posted to one bank account."""

    id: int
    owner_user_id: int
    bank_id: int
    chart_of_account_id: int
    type: TransactionType
    value: Decimal
    due_date: date
    payment_date: Optional[date]
    description: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Transfer:
    """Movement of money between two bank accounts of the same owner."""

    id: int
    owner_user_id: int
    from_bank_id: int
    to_bank_id: int
    value: Decimal
    date: date
    description: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BalanceCheck:
    """Cached balance of an account compared to the one derived from history."""

    account_id: int
    initial_balance: Decimal
    cached_balance: Decimal
    derived_balance: Decimal

    @property
    def difference(self) -> Decimal:
        return self.cached_balance - self.derived_balance

    @property
    def is_consistent(self) -> bool:
        return self.difference == 0


@dataclass(frozen=True)
class ImportRow:
    """One spreadsheet row, with banks and plans referenced by name."""

    due_date: Optional[date]
    payment_date: Optional[date]
    type: Optional[str]
    description: Optional[str]
    value: Optional[Decimal]
    bank_name: Optional[str]
    chart_of_account_name: Optional[str]


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a committed import batch."""

    imported: int
    transaction_ids: list[int] = field(default_factory=list)
    balances: dict[int, Decimal] = field(default_factory=dict)
