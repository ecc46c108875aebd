"""Balance mutator: the only writer of cached account balances."""

import logging
from decimal import Decimal

from bankledger.database.base import Database
from bankledger.domain.errors import NotFoundError, account_not_found
from bankledger.domain.ledger_events import LedgerEvent, event_deltas

logger = logging.getLogger(__name__)


class BalanceMutator:
    """Apply signed amounts to bank balances inside the caller's unit of work.

    Each write is a single ``current_balance = current_balance + delta``
    statement on a row locked for the rest of the unit, so concurrent postings
    to one account serialize at the store instead of overwriting each other.
    """

    def __init__(self, db: Database):
        """Initialize balance mutator.

        Args:
            db: Database instance
        """
        self.db = db

    def _lock(self, owner_user_id: int, account_ids: set[int]) -> dict[int, Decimal]:
        # Fixed lock order so two units touching the same pair cannot deadlock.
        balances = {}
        for account_id in sorted(account_ids):
            account = self.db.lock_account(owner_user_id, account_id)
            if account is None:
                raise NotFoundError(account_not_found(account_id))
            balances[account_id] = account.current_balance
        return balances

    def _write(self, owner_user_id: int, account_id: int, amount: Decimal) -> Decimal:
        new_balance = self.db.apply_balance_delta(owner_user_id, account_id, amount)
        if new_balance is None:
            raise NotFoundError(account_not_found(account_id))
        return new_balance

    def apply_delta(self, owner_user_id: int, account_id: int, amount: Decimal) -> Decimal:
        """Add a signed amount to one account.

        Args:
            owner_user_id: Acting user; must own the account
            account_id: Bank account ID
            amount: Signed amount, zero is a no-op

        Returns:
            The account's new balance

        Raises:
            NotFoundError: If the account is missing or owned by someone else
        """
        with self.db.unit_of_work():
            balance = self._lock(owner_user_id, {account_id})[account_id]
            if amount == 0:
                return balance
            return self._write(owner_user_id, account_id, amount)

    def reverse_and_apply(
        self,
        owner_user_id: int,
        account_id: int,
        old_amount: Decimal,
        new_amount: Decimal,
    ) -> Decimal:
        """Undo a previously applied amount and apply its replacement."""
        with self.db.unit_of_work():
            balance = self._lock(owner_user_id, {account_id})[account_id]
            for amount in (-old_amount, new_amount):
                if amount != 0:
                    balance = self._write(owner_user_id, account_id, amount)
            return balance

    def apply(self, owner_user_id: int, *events: LedgerEvent) -> dict[int, Decimal]:
        """Apply ledger events in order.

        Every account the events touch is locked before the first write.

        Returns:
            Mapping of each touched account ID to its new balance
        """
        deltas = [delta for event in events for delta in event_deltas(event)]
        with self.db.unit_of_work():
            balances = self._lock(owner_user_id, {account_id for account_id, _ in deltas})
            for account_id, amount in deltas:
                if amount != 0:
                    balances[account_id] = self._write(owner_user_id, account_id, amount)

        for event in events:
            logger.info("Applied %s for user %s", event, owner_user_id)
        return balances
