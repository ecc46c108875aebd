"""Shared domain error messages and error types."""

from typing import Any, Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``kind`` is the stable name
    reported to callers in structured error payloads.
    """

    kind = "DomainError"

    def to_dict(self) -> dict[str, Any]:
        """Return the structured ``{kind, message}`` error payload."""
        return {"kind": self.kind, "message": str(self)}


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    kind = "ValidationError"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.field is not None:
            payload["field"] = self.field
        return payload


class InvalidTypeError(ValidationError):
    """Transaction type is neither income nor expense."""

    kind = "InvalidType"

    def __init__(self, message: str):
        super().__init__(message, field="type")


class NotFoundError(DomainError):
    """Requested entity does not exist or is not owned by the caller."""

    kind = "NotFound"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    kind = "Conflict"


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""

    kind = "Dependency"


class PersistenceError(DomainError):
    """The store was unreachable or the unit of work was aborted."""

    kind = "PersistenceFailure"

    # Callers see this instead of driver details.
    public_message = "Internal error while saving changes; nothing was applied."

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.public_message}


class BatchRowError(DomainError):
    """An import row failed; the whole batch was rolled back."""

    kind = "BatchRowError"

    def __init__(self, row_number: int, cause: Exception):
        detail = getattr(cause, "public_message", None) or str(cause)
        super().__init__(f"Row {row_number}: {detail}")
        self.row_number = row_number
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        cause_kind = getattr(self.cause, "kind", type(self.cause).__name__)
        return {
            "kind": self.kind,
            "message": str(self),
            "row": self.row_number,
            "cause": cause_kind,
        }


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Bank account {account_id} not found"


def account_name_not_found(name: str) -> str:
    """Return message for missing account looked up by name."""
    return f"Bank account '{name}' not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def chart_of_account_not_found(chart_of_account_id: int) -> str:
    """Return message for missing chart of account by ID."""
    return f"Chart of account {chart_of_account_id} not found"


def chart_of_account_name_not_found(description: str) -> str:
    """Return message for missing chart of account by description."""
    return f"Chart of account '{description}' not found"


def transaction_not_found(transaction_id: int) -> str:
    return f"Transaction {transaction_id} not found"


def transfer_not_found(transfer_id: int) -> str:
    return f"Transfer {transfer_id} not found"


def invalid_transaction_type(value: object) -> str:
    return f"Invalid transaction type '{value}': expected Income or Expense"


def duplicate_account_name(name: str) -> str:
    return f"Bank account with name '{name}' already exists"


def duplicate_chart_of_account(description: str) -> str:
    return f"Chart of account '{description}' already exists"


def account_delete_blocked(
    account_id: int, transaction_count: int, transfer_count: int
) -> str:
    """Return message when an account still has postings."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if transfer_count > 0:
        parts.append(f"{transfer_count} transfer{'s' if transfer_count != 1 else ''}")
    return (
        f"Cannot delete bank account {account_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
