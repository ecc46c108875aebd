"""Bank account domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from bankledger.database.base import Database
from bankledger.domain.balance import BalanceMutator
from bankledger.domain.entities import Account as AccountEntity, BalanceCheck
from bankledger.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_name,
)
from bankledger.domain.ledger_events import TransactionPosted, TransferPosted, net_deltas
from bankledger.utils.amount_parser import to_cents

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing bank accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db
        self.balance = BalanceMutator(db)

    def _require_account(self, owner_user_id: int, account_id: int) -> AccountEntity:
        account = self.db.get_account(owner_user_id, account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def _check_name_free(self, owner_user_id: int, name: str, account_id: Optional[int] = None) -> None:
        existing = self.db.get_account_by_name(owner_user_id, name)
        if existing is not None and existing.id != account_id:
            raise ConflictError(duplicate_account_name(name))

    @staticmethod
    def _balance_in_cents(initial_balance) -> Decimal:
        if not isinstance(initial_balance, Decimal):
            initial_balance = Decimal(str(initial_balance))
        if not initial_balance.is_finite():
            raise ValidationError(
                f"Initial balance must be a number, got {initial_balance}", field="initial_balance"
            )
        return to_cents(initial_balance)

    def create_account(
        self,
        owner_user_id: int,
        name: str,
        initial_balance: Decimal = Decimal("0"),
        start_date: Optional[date] = None,
    ) -> int:
        """Create a new bank account.

        Args:
            owner_user_id: Acting user
            name: Account name, unique per user
            initial_balance: Opening balance; the current balance starts here
            start_date: Date the opening balance refers to (defaults to today)

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If the user already has an account with that name
        """
        if not name or not name.strip():
            raise ValidationError("Bank account name is required", field="name")
        name = name.strip()
        self._check_name_free(owner_user_id, name)
        initial_balance = self._balance_in_cents(initial_balance)

        account_id = self.db.create_account(
            owner_user_id=owner_user_id,
            name=name,
            initial_balance=initial_balance,
            start_date=start_date or date.today(),
        )
        logger.info("Created bank account %s for user %s", account_id, owner_user_id)
        return account_id

    def get_account(self, owner_user_id: int, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID, or None if missing or not owned."""
        return self.db.get_account(owner_user_id, account_id)

    def get_account_by_name(self, owner_user_id: int, name: str) -> Optional[AccountEntity]:
        """Get account by name, or None if missing."""
        return self.db.get_account_by_name(owner_user_id, name)

    def list_accounts(self, owner_user_id: int) -> list[AccountEntity]:
        """List all accounts of a user."""
        return self.db.list_accounts(owner_user_id)

    def update_account(
        self,
        owner_user_id: int,
        account_id: int,
        name: Optional[str] = None,
        initial_balance: Optional[Decimal] = None,
        start_date: Optional[date] = None,
    ) -> AccountEntity:
        """Edit an account.

        Changing the initial balance moves the current balance by the same
        difference, in the same unit of work.

        Raises:
            NotFoundError: If account not found
            ConflictError: If the new name is taken
        """
        if initial_balance is not None:
            initial_balance = self._balance_in_cents(initial_balance)

        with self.db.unit_of_work():
            account = self.db.lock_account(owner_user_id, account_id)
            if account is None:
                raise NotFoundError(account_not_found(account_id))
            if name is not None:
                if not name.strip():
                    raise ValidationError("Bank account name is required", field="name")
                name = name.strip()
                self._check_name_free(owner_user_id, name, account_id)

            self.db.update_account(
                owner_user_id,
                account_id,
                name=name,
                start_date=start_date,
                initial_balance=initial_balance,
            )
            if initial_balance is not None:
                self.balance.apply_delta(
                    owner_user_id, account_id, initial_balance - account.initial_balance
                )
        return self._require_account(owner_user_id, account_id)

    def delete_account(self, owner_user_id: int, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If transactions or transfers still reference it
        """
        with self.db.unit_of_work():
            self._require_account(owner_user_id, account_id)

            transaction_count = self.db.get_account_transaction_count(owner_user_id, account_id)
            transfer_count = self.db.get_account_transfer_count(owner_user_id, account_id)
            if transaction_count > 0 or transfer_count > 0:
                raise DependencyError(
                    account_delete_blocked(account_id, transaction_count, transfer_count)
                )

            self.db.delete_account(owner_user_id, account_id)

    def check_balance(self, owner_user_id: int, account_id: int) -> BalanceCheck:
        """Compare the cached balance with the one derived from history.

        The derived balance is the initial balance plus every transaction and
        transfer leg currently posted to the account.
        """
        account = self._require_account(owner_user_id, account_id)
        events = [
            TransactionPosted.of(txn)
            for txn in self.db.list_transactions(owner_user_id, bank_id=account_id)
        ]
        events += [
            TransferPosted.of(transfer)
            for transfer in self.db.list_transfers(owner_user_id, bank_id=account_id)
        ]
        derived = account.initial_balance + net_deltas(events).get(account_id, Decimal("0"))
        return BalanceCheck(
            account_id=account_id,
            initial_balance=account.initial_balance,
            cached_balance=account.current_balance,
            derived_balance=derived,
        )

    def reconcile(self, owner_user_id: int, account_id: int) -> BalanceCheck:
        """Repair a drifted cached balance so it matches the derived one.

        Returns:
            The check taken before the repair
        """
        with self.db.unit_of_work():
            self.balance.apply_delta(owner_user_id, account_id, Decimal("0"))  # lock the row
            check = self.check_balance(owner_user_id, account_id)
            if not check.is_consistent:
                logger.warning(
                    "Bank account %s balance drifted by %s; repairing",
                    account_id,
                    check.difference,
                )
                self.balance.apply_delta(owner_user_id, account_id, -check.difference)
        return check
