"""Tests for domain error types."""

from bankledger.domain.errors import (
    BatchRowError,
    ConflictError,
    DependencyError,
    DomainError,
    InvalidTypeError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    account_delete_blocked,
)


def test_errors_are_value_errors():
    for error_type in (ValidationError, NotFoundError, ConflictError, DependencyError, PersistenceError):
        assert issubclass(error_type, DomainError)
        assert issubclass(error_type, ValueError)


def test_validation_error_payload():
    assert ValidationError("Value is required", field="value").to_dict() == {
        "kind": "ValidationError",
        "message": "Value is required",
        "field": "value",
    }
    assert ValidationError("Bad").to_dict() == {"kind": "ValidationError", "message": "Bad"}


def test_invalid_type_error():
    error = InvalidTypeError("Invalid transaction type 'X'")
    assert isinstance(error, ValidationError)
    assert error.to_dict()["kind"] == "InvalidType"
    assert error.field == "type"


def test_persistence_error_hides_details():
    payload = PersistenceError("database is locked").to_dict()
    assert payload["kind"] == "PersistenceFailure"
    assert "locked" not in payload["message"]


def test_batch_row_error():
    cause = NotFoundError("Bank account 'Z' not found")
    error = BatchRowError(5, cause)

    assert str(error) == "Row 5: Bank account 'Z' not found"
    assert error.to_dict() == {
        "kind": "BatchRowError",
        "message": "Row 5: Bank account 'Z' not found",
        "row": 5,
        "cause": "NotFound",
    }


def test_batch_row_error_with_plain_cause():
    assert BatchRowError(2, KeyError("x")).to_dict()["cause"] == "KeyError"


def test_account_delete_blocked_message():
    assert account_delete_blocked(3, 2, 0) == (
        "Cannot delete bank account 3: it has 2 transactions. Please reassign or delete them first."
    )
    assert "1 transfer." in account_delete_blocked(3, 0, 1)
