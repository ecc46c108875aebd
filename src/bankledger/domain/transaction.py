"""Transaction domain service.

Every write pairs the transaction row change with its balance effect inside
one unit of work: a row is never committed without its delta, or a delta
without its row.
"""

import logging
from typing import Optional
from datetime import date
from decimal import Decimal, InvalidOperation

from bankledger.database.base import Database
from bankledger.domain.balance import BalanceMutator
from bankledger.domain.entities import Transaction as TransactionEntity, TransactionType
from bankledger.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    chart_of_account_not_found,
    transaction_not_found,
)
from bankledger.domain.ledger_events import (
    TransactionPosted,
    TransactionReversed,
    parse_transaction_type,
)
from bankledger.utils.amount_parser import to_cents
from bankledger.utils.date_parser import month_range

logger = logging.getLogger(__name__)

DATE_FIELDS = {"payment": "payment_date", "due": "due_date"}


def validate_value(value: Optional[Decimal]) -> Decimal:
    """Posted values are strictly positive; the type carries the direction.

    Values are rounded to cents here so the stored row and the balance delta
    are the same number.
    """
    if value is None:
        raise ValidationError("Value is required", field="value")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"Value must be a positive number, got {value!r}", field="value")
    if not value.is_finite() or value <= 0:
        raise ValidationError(f"Value must be a positive number, got {value}", field="value")
    cents = to_cents(value)
    if cents <= 0:
        raise ValidationError(f"Value {value} rounds to zero cents", field="value")
    return cents


class TransactionService:
    """Service for posting transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.balance = BalanceMutator(db)

    def _check_references(self, owner_user_id: int, bank_id: int, chart_of_account_id: int) -> None:
        if self.db.get_account(owner_user_id, bank_id) is None:
            raise NotFoundError(account_not_found(bank_id))
        if self.db.get_chart_of_account(owner_user_id, chart_of_account_id) is None:
            raise NotFoundError(chart_of_account_not_found(chart_of_account_id))

    def _require_transaction(
        self, owner_user_id: int, transaction_id: int, lock: bool = False
    ) -> TransactionEntity:
        fetch = self.db.lock_transaction if lock else self.db.get_transaction
        txn = fetch(owner_user_id, transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def create_transaction(
        self,
        owner_user_id: int,
        bank_id: int,
        chart_of_account_id: int,
        type: TransactionType | str,
        value: Decimal,
        due_date: Optional[date],
        payment_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a transaction and apply it to its bank's balance.

        Args:
            owner_user_id: Acting user
            bank_id: Bank account the transaction is posted to
            chart_of_account_id: Chart of account it is classified under
            type: Income or Expense (also "Entrada" / "Saida")
            value: Positive amount
            due_date: Due date
            payment_date: Optional payment date
            description: Optional description

        Returns:
            Transaction ID

        Raises:
            InvalidTypeError: If the type is not income or expense
            ValidationError: If value or due date is invalid
            NotFoundError: If the bank or chart of account is not the user's
        """
        txn_type = parse_transaction_type(type)
        value = validate_value(value)
        if due_date is None:
            raise ValidationError("Due date is required", field="due_date")

        with self.db.unit_of_work():
            self._check_references(owner_user_id, bank_id, chart_of_account_id)
            transaction_id = self.db.create_transaction(
                owner_user_id=owner_user_id,
                bank_id=bank_id,
                chart_of_account_id=chart_of_account_id,
                type=txn_type.value,
                value=value,
                due_date=due_date,
                payment_date=payment_date,
                description=description,
            )
            self.balance.apply(owner_user_id, TransactionPosted(bank_id, txn_type, value))

        logger.info("Created transaction %s on bank %s", transaction_id, bank_id)
        return transaction_id

    def get_transaction(self, owner_user_id: int, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID, or None if missing or not owned."""
        return self.db.get_transaction(owner_user_id, transaction_id)

    def update_transaction(
        self,
        owner_user_id: int,
        transaction_id: int,
        bank_id: Optional[int] = None,
        chart_of_account_id: Optional[int] = None,
        type: Optional[TransactionType | str] = None,
        value: Optional[Decimal] = None,
        due_date: Optional[date] = None,
        payment_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> TransactionEntity:
        """Update transaction fields and move its balance effect.

        Fields left as None keep their current value. The old effect is
        reversed on the old bank and the new effect applied on the new bank,
        which may be a different account.

        Raises:
            NotFoundError: If the transaction, bank or chart of account is not the user's
            InvalidTypeError: If the new type is not income or expense
            ValidationError: If the new value is not positive
        """
        new_type = parse_transaction_type(type) if type is not None else None
        if value is not None:
            value = validate_value(value)

        with self.db.unit_of_work():
            old = self._require_transaction(owner_user_id, transaction_id, lock=True)
            new_bank_id = bank_id if bank_id is not None else old.bank_id
            new_chart_id = chart_of_account_id if chart_of_account_id is not None else old.chart_of_account_id
            new_type = new_type or old.type
            new_value = value if value is not None else old.value

            self._check_references(owner_user_id, new_bank_id, new_chart_id)
            self.db.update_transaction(
                owner_user_id,
                transaction_id,
                bank_id=new_bank_id,
                chart_of_account_id=new_chart_id,
                type=new_type.value,
                value=new_value,
                due_date=due_date if due_date is not None else old.due_date,
                payment_date=payment_date if payment_date is not None else old.payment_date,
                description=description if description is not None else old.description,
            )
            self.balance.apply(
                owner_user_id,
                TransactionReversed.of(old),
                TransactionPosted(new_bank_id, new_type, new_value),
            )

        logger.info("Updated transaction %s", transaction_id)
        return self._require_transaction(owner_user_id, transaction_id)

    def delete_transaction(self, owner_user_id: int, transaction_id: int) -> None:
        """Delete a transaction and reverse its balance effect.

        Raises:
            NotFoundError: If the transaction is not the user's
        """
        with self.db.unit_of_work():
            txn = self._require_transaction(owner_user_id, transaction_id, lock=True)
            self.db.delete_transaction(owner_user_id, transaction_id)
            self.balance.apply(owner_user_id, TransactionReversed.of(txn))

        logger.info("Deleted transaction %s from bank %s", transaction_id, txn.bank_id)

    def list_transactions(
        self,
        owner_user_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
        by: str = "payment",
        bank_id: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters.

        Args:
            owner_user_id: Acting user
            year: Optional year filter
            month: Optional month filter (1-12); without a year it matches
                that month in every year
            by: "payment" to filter on payment date, "due" for due date
            bank_id: Optional bank account filter

        Returns:
            List of transaction entities, newest first
        """
        if by not in DATE_FIELDS:
            raise ValidationError(f"Cannot filter by '{by}': expected payment or due", field="by")
        date_field = DATE_FIELDS[by]
        if month is not None and not 1 <= month <= 12:
            raise ValidationError(f"Invalid month {month}: expected 1-12", field="month")

        start_date = end_date = None
        if year is not None:
            start_date, end_date = month_range(year, month)

        transactions = self.db.list_transactions(
            owner_user_id,
            start_date=start_date,
            end_date=end_date,
            date_field=date_field,
            bank_id=bank_id,
        )
        if month is not None and year is None:
            transactions = [
                txn for txn in transactions
                if getattr(txn, date_field) is not None and getattr(txn, date_field).month == month
            ]
        return transactions
