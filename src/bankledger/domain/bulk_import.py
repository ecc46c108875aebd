"""Bulk import domain service."""

import logging
from typing import Any, Iterable, Sequence

from bankledger.database.base import Database
from bankledger.domain.entities import ImportResult, ImportRow
from bankledger.domain.errors import (
    BatchRowError,
    DomainError,
    NotFoundError,
    ValidationError,
    account_name_not_found,
    chart_of_account_name_not_found,
)
from bankledger.domain.ledger_events import parse_transaction_type
from bankledger.domain.transaction import TransactionService
from bankledger.utils.amount_parser import parse_amount
from bankledger.utils.date_parser import parse_date
from bankledger.utils.spreadsheet import read_records

logger = logging.getLogger(__name__)

# (field, label) for every column a row must fill.
REQUIRED_FIELDS = (
    ("due_date", "due date"),
    ("payment_date", "payment date"),
    ("type", "type"),
    ("description", "description"),
    ("value", "value"),
    ("bank_name", "bank"),
    ("chart_of_account_name", "chart of account"),
)


def record_to_row(record: dict[str, Any]) -> ImportRow:
    """Convert raw spreadsheet cells into an ImportRow.

    Raises:
        ValidationError: If a date or value cell cannot be parsed
    """
    def _date(field: str):
        cell = record.get(field)
        if cell is None:
            return None
        try:
            return parse_date(cell)
        except ValueError as e:
            raise ValidationError(str(e), field=field)

    value = record.get("value")
    if value is not None:
        try:
            value = parse_amount(value)
        except ValueError as e:
            raise ValidationError(str(e), field="value")

    def _text(field: str):
        cell = record.get(field)
        return None if cell is None else str(cell).strip() or None

    return ImportRow(
        due_date=_date("due_date"),
        payment_date=_date("payment_date"),
        type=_text("type"),
        description=_text("description"),
        value=value,
        bank_name=_text("bank_name"),
        chart_of_account_name=_text("chart_of_account_name"),
    )


class ImportService:
    """Service for importing batches of transactions.

    A batch is all-or-nothing: the first failing row rolls back every row
    posted before it and is reported by its row number in the source sheet.
    """

    def __init__(self, db: Database):
        """Initialize import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)

    def _post_row(self, owner_user_id: int, row: ImportRow) -> tuple[int, int]:
        """Post one row through the transaction create path.

        Returns:
            Tuple of (transaction ID, bank ID)
        """
        for field, label in REQUIRED_FIELDS:
            if getattr(row, field) is None:
                raise ValidationError(f"Missing {label}", field=field)

        txn_type = parse_transaction_type(row.type)

        bank = self.db.get_account_by_name(owner_user_id, row.bank_name)
        if bank is None:
            raise NotFoundError(account_name_not_found(row.bank_name))
        chart = self.db.get_chart_of_account_by_description(owner_user_id, row.chart_of_account_name)
        if chart is None:
            raise NotFoundError(chart_of_account_name_not_found(row.chart_of_account_name))

        transaction_id = self.transaction_service.create_transaction(
            owner_user_id=owner_user_id,
            bank_id=bank.id,
            chart_of_account_id=chart.id,
            type=txn_type,
            value=row.value,
            due_date=row.due_date,
            payment_date=row.payment_date,
            description=row.description,
        )
        return transaction_id, bank.id

    def _post_batch(self, owner_user_id: int, numbered_rows: Iterable[tuple[int, Any]]) -> ImportResult:
        transaction_ids = []
        bank_ids = set()

        with self.db.unit_of_work():
            for row_number, row in numbered_rows:
                try:
                    if isinstance(row, dict):
                        row = record_to_row(row)
                    transaction_id, bank_id = self._post_row(owner_user_id, row)
                except DomainError as e:
                    logger.warning("Import aborted at row %s: %s", row_number, e)
                    raise BatchRowError(row_number, e) from e
                transaction_ids.append(transaction_id)
                bank_ids.add(bank_id)

            balances = {
                bank_id: self.db.get_account(owner_user_id, bank_id).current_balance
                for bank_id in sorted(bank_ids)
            }

        logger.info("Imported %s transactions for user %s", len(transaction_ids), owner_user_id)
        return ImportResult(
            imported=len(transaction_ids),
            transaction_ids=transaction_ids,
            balances=balances,
        )

    def import_rows(
        self, owner_user_id: int, rows: Sequence[ImportRow], header_offset: int = 1
    ) -> ImportResult:
        """Import an ordered batch of rows as one unit of work.

        Args:
            owner_user_id: Acting user
            rows: Rows in posting order; later rows see earlier rows' balances
            header_offset: Rows above the first data row in the source sheet

        Returns:
            ImportResult with the new transaction IDs and final balances

        Raises:
            BatchRowError: If any row fails; nothing from the batch is kept
        """
        return self._post_batch(owner_user_id, enumerate(rows, start=header_offset + 1))

    def import_file(self, owner_user_id: int, file_path: str) -> ImportResult:
        """Import a CSV or XLSX export.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValidationError: If the file type is unsupported or columns are missing
            BatchRowError: If any row fails; nothing from the file is kept
        """
        return self._post_batch(owner_user_id, read_records(file_path))
