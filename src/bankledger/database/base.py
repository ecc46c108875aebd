"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from bankledger.domain.entities import (
    Account,
    Category,
    ChartOfAccount,
    Transaction,
    Transfer,
)


class Database(ABC):
    """Abstract database interface for bankledger.

    Every query is scoped by ``owner_user_id``; rows owned by another user are
    reported exactly like missing rows.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[Any]:
        """Open an all-or-nothing scope for writes.

        Writes issued inside the block are committed together when the block
        exits normally and rolled back if it raises. Nested scopes join the
        outermost one. On SQLite the outermost scope takes the database
        write lock up front, so reads inside it are serialized with other
        writers.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self, owner_user_id: int, name: str, initial_balance: Decimal, start_date: date
    ) -> int:
        """Create a bank account whose balance starts at initial_balance. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, owner_user_id: int, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, owner_user_id: int, name: str) -> Optional[Account]:
        """Get account by name."""
        pass

    @abstractmethod
    def list_accounts(self, owner_user_id: int) -> list[Account]:
        """List all accounts of a user."""
        pass

    @abstractmethod
    def update_account(
        self,
        owner_user_id: int,
        account_id: int,
        name: Optional[str] = None,
        start_date: Optional[date] = None,
        initial_balance: Optional[Decimal] = None,
    ) -> None:
        """Update account metadata. Never touches current_balance."""
        pass

    @abstractmethod
    def delete_account(self, owner_user_id: int, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, owner_user_id: int, account_id: int) -> int:
        """Count transactions posted to an account."""
        pass

    @abstractmethod
    def get_account_transfer_count(self, owner_user_id: int, account_id: int) -> int:
        """Count transfers touching an account on either side."""
        pass

    # Balance operations
    @abstractmethod
    def lock_account(self, owner_user_id: int, account_id: int) -> Optional[Account]:
        """Fetch an account row, locking it until the unit of work ends."""
        pass

    @abstractmethod
    def apply_balance_delta(
        self, owner_user_id: int, account_id: int, amount: Decimal
    ) -> Optional[Decimal]:
        """Add amount to the cached balance in one statement.

        Returns the new balance, or None if no owned account matched.
        """
        pass

    # Category operations
    @abstractmethod
    def create_category(self, owner_user_id: int, description: str, dre_range: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, owner_user_id: int, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, owner_user_id: int) -> list[Category]:
        """List categories of a user."""
        pass

    @abstractmethod
    def update_category(
        self,
        owner_user_id: int,
        category_id: int,
        description: Optional[str] = None,
        dre_range: Optional[str] = None,
    ) -> None:
        """Update category fields."""
        pass

    @abstractmethod
    def delete_category(self, owner_user_id: int, category_id: int) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def get_category_chart_count(self, owner_user_id: int, category_id: int) -> int:
        """Count charts of accounts filed under a category."""
        pass

    # Chart of account operations
    @abstractmethod
    def create_chart_of_account(
        self, owner_user_id: int, description: str, category_id: Optional[int] = None
    ) -> int:
        """Create a chart of account. Returns its ID."""
        pass

    @abstractmethod
    def get_chart_of_account(
        self, owner_user_id: int, chart_of_account_id: int
    ) -> Optional[ChartOfAccount]:
        """Get chart of account by ID."""
        pass

    @abstractmethod
    def get_chart_of_account_by_description(
        self, owner_user_id: int, description: str
    ) -> Optional[ChartOfAccount]:
        """Get chart of account by description."""
        pass

    @abstractmethod
    def list_charts_of_accounts(self, owner_user_id: int) -> list[ChartOfAccount]:
        """List charts of accounts of a user."""
        pass

    @abstractmethod
    def update_chart_of_account(
        self,
        owner_user_id: int,
        chart_of_account_id: int,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> None:
        """Update chart of account fields."""
        pass

    @abstractmethod
    def delete_chart_of_account(self, owner_user_id: int, chart_of_account_id: int) -> None:
        """Delete a chart of account."""
        pass

    @abstractmethod
    def get_chart_transaction_count(self, owner_user_id: int, chart_of_account_id: int) -> int:
        """Count transactions classified under a chart of account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        owner_user_id: int,
        bank_id: int,
        chart_of_account_id: int,
        type: str,
        value: Decimal,
        due_date: date,
        payment_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> int:
        """Insert a transaction row. Returns transaction ID.

        Does not touch balances; callers pair it with a balance delta inside
        one unit of work.
        """
        pass

    @abstractmethod
    def get_transaction(self, owner_user_id: int, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def lock_transaction(self, owner_user_id: int, transaction_id: int) -> Optional[Transaction]:
        """Fetch a transaction, locking its row until the unit of work ends.

        Update and delete read the old state through this so that two
        units cannot both reverse the same posting.
        """
        pass

    @abstractmethod
    def update_transaction(
        self,
        owner_user_id: int,
        transaction_id: int,
        bank_id: int,
        chart_of_account_id: int,
        type: str,
        value: Decimal,
        due_date: date,
        payment_date: Optional[date],
        description: Optional[str],
    ) -> None:
        """Replace every field of a transaction row.

        Raises:
            NotFoundError: If no owned row was updated
        """
        pass

    @abstractmethod
    def delete_transaction(self, owner_user_id: int, transaction_id: int) -> None:
        """Delete a transaction row.

        Raises:
            NotFoundError: If no owned row was deleted
        """
        pass

    @abstractmethod
    def list_transactions(
        self,
        owner_user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        date_field: str = "payment_date",
        bank_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            owner_user_id: Owner of the transactions
            start_date: Optional inclusive lower bound on date_field
            end_date: Optional exclusive upper bound on date_field
            date_field: "payment_date" or "due_date"
            bank_id: Optional bank account filter
        """
        pass

    # Transfer operations
    @abstractmethod
    def create_transfer(
        self,
        owner_user_id: int,
        from_bank_id: int,
        to_bank_id: int,
        value: Decimal,
        date: date,
        description: Optional[str] = None,
    ) -> int:
        """Insert a transfer row. Returns transfer ID."""
        pass

    @abstractmethod
    def get_transfer(self, owner_user_id: int, transfer_id: int) -> Optional[Transfer]:
        """Get transfer by ID."""
        pass

    @abstractmethod
    def lock_transfer(self, owner_user_id: int, transfer_id: int) -> Optional[Transfer]:
        """Fetch a transfer, locking its row until the unit of work ends."""
        pass

    @abstractmethod
    def update_transfer(
        self,
        owner_user_id: int,
        transfer_id: int,
        from_bank_id: int,
        to_bank_id: int,
        value: Decimal,
        date: date,
        description: Optional[str],
    ) -> None:
        """Replace every field of a transfer row.

        Raises:
            NotFoundError: If no owned row was updated
        """
        pass

    @abstractmethod
    def delete_transfer(self, owner_user_id: int, transfer_id: int) -> None:
        """Delete a transfer row.

        Raises:
            NotFoundError: If no owned row was deleted
        """
        pass

    @abstractmethod
    def list_transfers(self, owner_user_id: int, bank_id: Optional[int] = None) -> list[Transfer]:
        """List transfers, optionally only those touching bank_id."""
        pass
