"""Tests for the Database interface returning domain models."""

import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy.exc import OperationalError

from bankledger.database.factories import create_database, create_sqlite_database
from bankledger.domain import entities
from bankledger.domain.errors import NotFoundError, PersistenceError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_create_and_get_account(self, temp_db):
        account_id = temp_db.create_account(1, "Checking", Decimal("10.00"), date(2024, 1, 1))

        account = temp_db.get_account(1, account_id)
        assert isinstance(account, entities.Account)
        assert account.current_balance == Decimal("10.00")
        assert temp_db.get_account(2, account_id) is None

    def test_update_account_never_touches_current_balance(self, temp_db):
        account_id = temp_db.create_account(1, "Checking", Decimal("10.00"), date(2024, 1, 1))

        temp_db.update_account(1, account_id, initial_balance=Decimal("99.00"))

        account = temp_db.get_account(1, account_id)
        assert account.initial_balance == Decimal("99.00")
        assert account.current_balance == Decimal("10.00")

    def test_update_missing_account(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_account(1, 123, name="X")

    def test_apply_balance_delta(self, temp_db):
        account_id = temp_db.create_account(1, "Checking", Decimal("10.00"), date(2024, 1, 1))

        assert temp_db.apply_balance_delta(1, account_id, Decimal("-2.50")) == Decimal("7.50")
        assert temp_db.apply_balance_delta(2, account_id, Decimal("1")) is None
        assert temp_db.get_account(1, account_id).current_balance == Decimal("7.50")

    def test_lock_account(self, temp_db):
        account_id = temp_db.create_account(1, "Checking", Decimal("10.00"), date(2024, 1, 1))

        with temp_db.unit_of_work():
            assert temp_db.lock_account(1, account_id).id == account_id
            assert temp_db.lock_account(2, account_id) is None

    def test_transaction_rows(self, temp_db):
        account_id = temp_db.create_account(1, "Checking", Decimal("0"), date(2024, 1, 1))
        chart_id = temp_db.create_chart_of_account(1, "Sales")

        transaction_id = temp_db.create_transaction(
            1, account_id, chart_id, "Income", Decimal("5.00"), date(2024, 1, 2)
        )

        txn = temp_db.get_transaction(1, transaction_id)
        assert isinstance(txn, entities.Transaction)
        assert txn.type is entities.TransactionType.INCOME
        assert temp_db.get_account_transaction_count(1, account_id) == 1
        assert temp_db.get_chart_transaction_count(1, chart_id) == 1
        # Row writes never move balances on their own
        assert temp_db.get_account(1, account_id).current_balance == Decimal("0")

    def test_list_transactions_rejects_unknown_date_field(self, temp_db):
        with pytest.raises(ValueError):
            temp_db.list_transactions(1, date_field="created_at")

    def test_transfer_rows(self, temp_db):
        a = temp_db.create_account(1, "A", Decimal("0"), date(2024, 1, 1))
        b = temp_db.create_account(1, "B", Decimal("0"), date(2024, 1, 1))

        transfer_id = temp_db.create_transfer(1, a, b, Decimal("3.00"), date(2024, 1, 2))

        assert isinstance(temp_db.get_transfer(1, transfer_id), entities.Transfer)
        assert temp_db.get_account_transfer_count(1, b) == 1
        assert [t.id for t in temp_db.list_transfers(1, bank_id=a)] == [transfer_id]

    def test_lock_transaction_and_transfer(self, temp_db):
        a = temp_db.create_account(1, "A", Decimal("0"), date(2024, 1, 1))
        b = temp_db.create_account(1, "B", Decimal("0"), date(2024, 1, 1))
        chart_id = temp_db.create_chart_of_account(1, "Sales")
        transaction_id = temp_db.create_transaction(
            1, a, chart_id, "Income", Decimal("5.00"), date(2024, 1, 2)
        )
        transfer_id = temp_db.create_transfer(1, a, b, Decimal("3.00"), date(2024, 1, 2))

        with temp_db.unit_of_work():
            assert temp_db.lock_transaction(1, transaction_id).value == Decimal("5.00")
            assert temp_db.lock_transaction(2, transaction_id) is None
            assert temp_db.lock_transfer(1, transfer_id).to_bank_id == b
            assert temp_db.lock_transfer(2, transfer_id) is None

    def test_writes_to_rows_deleted_elsewhere_raise_not_found(self, temp_db):
        a = temp_db.create_account(1, "A", Decimal("0"), date(2024, 1, 1))
        b = temp_db.create_account(1, "B", Decimal("0"), date(2024, 1, 1))
        chart_id = temp_db.create_chart_of_account(1, "Sales")
        transaction_id = temp_db.create_transaction(
            1, a, chart_id, "Income", Decimal("5.00"), date(2024, 1, 2)
        )
        transfer_id = temp_db.create_transfer(1, a, b, Decimal("3.00"), date(2024, 1, 2))
        assert temp_db.get_transaction(1, transaction_id) is not None
        assert temp_db.get_transfer(1, transfer_id) is not None

        other = create_sqlite_database(database_path=temp_db.database_path)
        other.delete_transaction(1, transaction_id)
        other.delete_transfer(1, transfer_id)
        other.disconnect()

        with pytest.raises(NotFoundError):
            temp_db.delete_transaction(1, transaction_id)
        with pytest.raises(NotFoundError):
            temp_db.update_transaction(
                1, transaction_id, a, chart_id, "Expense", Decimal("1.00"), date(2024, 1, 2), None, None
            )
        with pytest.raises(NotFoundError):
            temp_db.delete_transfer(1, transfer_id)
        with pytest.raises(NotFoundError):
            temp_db.update_transfer(1, transfer_id, a, b, Decimal("1.00"), date(2024, 1, 2), None)

    def test_delete_of_other_users_transaction_raises_not_found(self, temp_db):
        a = temp_db.create_account(1, "A", Decimal("0"), date(2024, 1, 1))
        chart_id = temp_db.create_chart_of_account(1, "Sales")
        transaction_id = temp_db.create_transaction(
            1, a, chart_id, "Income", Decimal("5.00"), date(2024, 1, 2)
        )

        with pytest.raises(NotFoundError):
            temp_db.delete_transaction(2, transaction_id)
        assert temp_db.get_transaction(1, transaction_id) is not None

    def test_unit_of_work_rolls_back_on_error(self, temp_db):
        with pytest.raises(RuntimeError):
            with temp_db.unit_of_work():
                temp_db.create_account(1, "Ghost", Decimal("0"), date(2024, 1, 1))
                raise RuntimeError("boom")

        assert temp_db.list_accounts(1) == []

    def test_store_failure_becomes_persistence_error(self, temp_db, monkeypatch):
        def fail(*args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(temp_db._get_session(), "flush", fail)

        with pytest.raises(PersistenceError) as exc_info:
            temp_db.create_account(1, "Checking", Decimal("0"), date(2024, 1, 1))
        assert isinstance(exc_info.value.__cause__, OperationalError)


def test_create_database_defaults_to_sqlite(tmp_path, monkeypatch):
    monkeypatch.delenv("BANKLEDGER_DB_URL", raising=False)
    db_path = str(tmp_path / "ledger.db")

    db = create_database(database_path=db_path)

    assert db.database_url == f"sqlite:///{db_path}"
    assert db.database_path == db_path
    db.disconnect()


def test_create_database_from_sqlite_url(tmp_path, monkeypatch):
    db_path = str(tmp_path / "from_env.db")
    monkeypatch.setenv("BANKLEDGER_DB_URL", f"sqlite:///{db_path}")

    db = create_database()

    assert db.database_path == db_path


def test_sqlite_path_from_environment(tmp_path, monkeypatch):
    db_path = str(tmp_path / "env.db")
    monkeypatch.setenv("BANKLEDGER_DB_PATH", db_path)

    assert create_sqlite_database().database_path == db_path
