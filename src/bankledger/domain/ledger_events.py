"""Ledger events and the balance deltas they imply.

Every change to a bank balance is described by one of four events. Posting
paths build events; ``event_deltas`` is the only place that turns them into
signed per-account amounts.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from bankledger.domain.entities import Transaction, TransactionType, Transfer
from bankledger.domain.errors import InvalidTypeError, invalid_transaction_type

# Spellings accepted from user input and spreadsheet exports.
_TYPE_ALIASES = {
    "income": TransactionType.INCOME,
    "entrada": TransactionType.INCOME,
    "expense": TransactionType.EXPENSE,
    "saida": TransactionType.EXPENSE,
    "saída": TransactionType.EXPENSE,
}


def parse_transaction_type(value: object) -> TransactionType:
    """Normalize a transaction type.

    Raises:
        InvalidTypeError: If value is not a known income or expense spelling
    """
    if isinstance(value, TransactionType):
        return value
    if isinstance(value, str):
        txn_type = _TYPE_ALIASES.get(value.strip().lower())
        if txn_type is not None:
            return txn_type
    raise InvalidTypeError(invalid_transaction_type(value))


def signed_amount(txn_type: TransactionType, value: Decimal) -> Decimal:
    """Income credits the account, expense debits it."""
    if txn_type is TransactionType.INCOME:
        return value
    if txn_type is TransactionType.EXPENSE:
        return -value
    raise InvalidTypeError(invalid_transaction_type(txn_type))


@dataclass(frozen=True)
class TransactionPosted:
    bank_id: int
    type: TransactionType
    value: Decimal

    @classmethod
    def of(cls, transaction: Transaction) -> "TransactionPosted":
        return cls(transaction.bank_id, transaction.type, transaction.value)


@dataclass(frozen=True)
class TransactionReversed:
    bank_id: int
    type: TransactionType
    value: Decimal

    @classmethod
    def of(cls, transaction: Transaction) -> "TransactionReversed":
        return cls(transaction.bank_id, transaction.type, transaction.value)


@dataclass(frozen=True)
class TransferPosted:
    from_bank_id: int
    to_bank_id: int
    value: Decimal

    @classmethod
    def of(cls, transfer: Transfer) -> "TransferPosted":
        return cls(transfer.from_bank_id, transfer.to_bank_id, transfer.value)


@dataclass(frozen=True)
class TransferReversed:
    from_bank_id: int
    to_bank_id: int
    value: Decimal

    @classmethod
    def of(cls, transfer: Transfer) -> "TransferReversed":
        return cls(transfer.from_bank_id, transfer.to_bank_id, transfer.value)


LedgerEvent = Union[TransactionPosted, TransactionReversed, TransferPosted, TransferReversed]


def event_deltas(event: LedgerEvent) -> list[tuple[int, Decimal]]:
    """Return the (account_id, signed amount) pairs an event applies, in order."""
    if isinstance(event, TransactionPosted):
        return [(event.bank_id, signed_amount(event.type, event.value))]
    if isinstance(event, TransactionReversed):
        return [(event.bank_id, -signed_amount(event.type, event.value))]
    if isinstance(event, TransferPosted):
        return [(event.from_bank_id, -event.value), (event.to_bank_id, event.value)]
    if isinstance(event, TransferReversed):
        return [(event.from_bank_id, event.value), (event.to_bank_id, -event.value)]
    raise TypeError(f"Unknown ledger event {event!r}")


def net_deltas(events: list[LedgerEvent]) -> dict[int, Decimal]:
    """Sum the deltas of several events per account.

    Accounts whose deltas cancel out are kept with a zero amount so callers
    still see every account the events touched.
    """
    totals: dict[int, Decimal] = {}
    for event in events:
        for account_id, amount in event_deltas(event):
            totals[account_id] = totals.get(account_id, Decimal("0")) + amount
    return totals
