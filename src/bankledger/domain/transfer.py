"""Transfer domain service."""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal

from bankledger.database.base import Database
from bankledger.domain.balance import BalanceMutator
from bankledger.domain.entities import Transfer as TransferEntity
from bankledger.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transfer_not_found,
)
from bankledger.domain.ledger_events import TransferPosted, TransferReversed
from bankledger.domain.transaction import validate_value

logger = logging.getLogger(__name__)


class TransferService:
    """Service for posting transfers between a user's bank accounts.

    Both legs of a transfer (debit on the source, credit on the destination)
    commit together with the transfer row or not at all.
    """

    def __init__(self, db: Database):
        """Initialize transfer service.

        Args:
            db: Database instance
        """
        self.db = db
        self.balance = BalanceMutator(db)

    def _check_banks(self, owner_user_id: int, from_bank_id: int, to_bank_id: int) -> None:
        if from_bank_id == to_bank_id:
            raise ValidationError("Source and destination banks must be different", field="to_bank_id")
        for bank_id in (from_bank_id, to_bank_id):
            if self.db.get_account(owner_user_id, bank_id) is None:
                raise NotFoundError(account_not_found(bank_id))

    def _require_transfer(
        self, owner_user_id: int, transfer_id: int, lock: bool = False
    ) -> TransferEntity:
        fetch = self.db.lock_transfer if lock else self.db.get_transfer
        transfer = fetch(owner_user_id, transfer_id)
        if transfer is None:
            raise NotFoundError(transfer_not_found(transfer_id))
        return transfer

    def create_transfer(
        self,
        owner_user_id: int,
        from_bank_id: int,
        to_bank_id: int,
        value: Decimal,
        date: Optional[date],
        description: Optional[str] = None,
    ) -> int:
        """Create a transfer, debiting the source and crediting the destination.

        Returns:
            Transfer ID

        Raises:
            ValidationError: If the banks are the same, value is not positive or date is missing
            NotFoundError: If either bank is not the user's
        """
        value = validate_value(value)
        if date is None:
            raise ValidationError("Date is required", field="date")

        with self.db.unit_of_work():
            self._check_banks(owner_user_id, from_bank_id, to_bank_id)
            transfer_id = self.db.create_transfer(
                owner_user_id=owner_user_id,
                from_bank_id=from_bank_id,
                to_bank_id=to_bank_id,
                value=value,
                date=date,
                description=description,
            )
            self.balance.apply(owner_user_id, TransferPosted(from_bank_id, to_bank_id, value))

        logger.info(
            "Created transfer %s of %s from bank %s to bank %s",
            transfer_id, value, from_bank_id, to_bank_id,
        )
        return transfer_id

    def get_transfer(self, owner_user_id: int, transfer_id: int) -> Optional[TransferEntity]:
        """Get transfer by ID, or None if missing or not owned."""
        return self.db.get_transfer(owner_user_id, transfer_id)

    def update_transfer(
        self,
        owner_user_id: int,
        transfer_id: int,
        from_bank_id: Optional[int] = None,
        to_bank_id: Optional[int] = None,
        value: Optional[Decimal] = None,
        date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> TransferEntity:
        """Update a transfer.

        The old effect is reversed on the old accounts and the new effect
        applied on the new ones; the two sets may overlap or be disjoint.
        Fields left as None keep their current value.
        """
        if value is not None:
            value = validate_value(value)

        with self.db.unit_of_work():
            old = self._require_transfer(owner_user_id, transfer_id, lock=True)
            new_from = from_bank_id if from_bank_id is not None else old.from_bank_id
            new_to = to_bank_id if to_bank_id is not None else old.to_bank_id
            new_value = value if value is not None else old.value

            self._check_banks(owner_user_id, new_from, new_to)
            self.db.update_transfer(
                owner_user_id,
                transfer_id,
                from_bank_id=new_from,
                to_bank_id=new_to,
                value=new_value,
                date=date if date is not None else old.date,
                description=description if description is not None else old.description,
            )
            self.balance.apply(
                owner_user_id,
                TransferReversed.of(old),
                TransferPosted(new_from, new_to, new_value),
            )

        logger.info("Updated transfer %s", transfer_id)
        return self._require_transfer(owner_user_id, transfer_id)

    def delete_transfer(self, owner_user_id: int, transfer_id: int) -> None:
        """Delete a transfer and reverse both legs."""
        with self.db.unit_of_work():
            transfer = self._require_transfer(owner_user_id, transfer_id, lock=True)
            self.db.delete_transfer(owner_user_id, transfer_id)
            self.balance.apply(owner_user_id, TransferReversed.of(transfer))

        logger.info("Deleted transfer %s", transfer_id)

    def list_transfers(self, owner_user_id: int, bank_id: Optional[int] = None) -> list[TransferEntity]:
        """List transfers, optionally only those touching one bank."""
        return self.db.list_transfers(owner_user_id, bank_id=bank_id)
