"""Tests for transfers between bank accounts."""

import pytest
from datetime import date
from decimal import Decimal

from bankledger.cli.main import cli
from bankledger.domain.errors import NotFoundError, ValidationError


def test_create_transfer_moves_money(transfer_service, owner, bank_a, bank_b, balance_of):
    transfer_id = transfer_service.create_transfer(
        owner, bank_a.id, bank_b.id, Decimal("200"), date(2024, 4, 1), "Savings"
    )

    transfer = transfer_service.get_transfer(owner, transfer_id)
    assert transfer.from_bank_id == bank_a.id
    assert transfer.to_bank_id == bank_b.id
    assert transfer.description == "Savings"
    assert balance_of(bank_a.id) == Decimal("300.00")
    assert balance_of(bank_b.id) == Decimal("300.00")


def test_transfer_to_same_bank_rejected(transfer_service, owner, bank_a):
    with pytest.raises(ValidationError, match="must be different"):
        transfer_service.create_transfer(owner, bank_a.id, bank_a.id, Decimal("1"), date(2024, 4, 1))


def test_transfer_to_unknown_bank_changes_nothing(transfer_service, owner, bank_a, balance_of):
    with pytest.raises(NotFoundError):
        transfer_service.create_transfer(owner, bank_a.id, 999, Decimal("50"), date(2024, 4, 1))

    assert balance_of(bank_a.id) == Decimal("500.00")
    assert transfer_service.list_transfers(owner) == []


def test_transfer_requires_positive_value(transfer_service, owner, bank_a, bank_b):
    with pytest.raises(ValidationError):
        transfer_service.create_transfer(owner, bank_a.id, bank_b.id, Decimal("-1"), date(2024, 4, 1))


def test_delete_transfer_restores_balances(transfer_service, owner, bank_a, bank_b, balance_of):
    transfer_id = transfer_service.create_transfer(owner, bank_a.id, bank_b.id, Decimal("200"), date(2024, 4, 1))

    transfer_service.delete_transfer(owner, transfer_id)

    assert balance_of(bank_a.id) == Decimal("500.00")
    assert balance_of(bank_b.id) == Decimal("100.00")
    assert transfer_service.get_transfer(owner, transfer_id) is None


def test_update_transfer_value(transfer_service, owner, bank_a, bank_b, balance_of):
    transfer_id = transfer_service.create_transfer(owner, bank_a.id, bank_b.id, Decimal("200"), date(2024, 4, 1))

    transfer = transfer_service.update_transfer(owner, transfer_id, value=Decimal("50"))

    assert transfer.value == Decimal("50.00")
    assert balance_of(bank_a.id) == Decimal("450.00")
    assert balance_of(bank_b.id) == Decimal("150.00")


def test_update_transfer_accounts(transfer_service, account_service, owner, bank_a, bank_b, balance_of):
    bank_c = account_service.create_account(owner, "Bank C", initial_balance=Decimal("0"))
    transfer_id = transfer_service.create_transfer(owner, bank_a.id, bank_b.id, Decimal("200"), date(2024, 4, 1))

    transfer_service.update_transfer(owner, transfer_id, from_bank_id=bank_b.id, to_bank_id=bank_c)

    assert balance_of(bank_a.id) == Decimal("500.00")
    assert balance_of(bank_b.id) == Decimal("-100.00")
    assert balance_of(bank_c) == Decimal("200.00")
    for account_id in (bank_a.id, bank_b.id, bank_c):
        assert account_service.check_balance(owner, account_id).is_consistent


def test_update_transfer_missing(transfer_service, owner):
    with pytest.raises(NotFoundError, match="Transfer 3 not found"):
        transfer_service.update_transfer(owner, 3, value=Decimal("1"))


def test_list_transfers_by_bank(transfer_service, account_service, owner, bank_a, bank_b):
    bank_c = account_service.create_account(owner, "Bank C")
    transfer_service.create_transfer(owner, bank_a.id, bank_b.id, Decimal("1"), date(2024, 4, 1))
    transfer_service.create_transfer(owner, bank_b.id, bank_c, Decimal("1"), date(2024, 4, 2))

    assert len(transfer_service.list_transfers(owner)) == 2
    assert len(transfer_service.list_transfers(owner, bank_id=bank_a.id)) == 1
    assert len(transfer_service.list_transfers(owner, bank_id=bank_b.id)) == 2
    assert transfer_service.list_transfers(2) == []


def test_transfer_commands(cli_runner, temp_db, bank_a, bank_b, balance_of):
    db_args = ["--db-path", temp_db.database_path]

    result = cli_runner.invoke(
        cli, db_args + ["transfer", "add", "--from", "Bank A", "--to", "Bank B", "--value", "200", "--date", "2024-04-01"]
    )
    assert result.exit_code == 0
    assert "Bank A: 300.00" in result.output
    assert "Bank B: 300.00" in result.output

    result = cli_runner.invoke(cli, db_args + ["transfer", "list", "--bank", "Bank B"])
    assert result.exit_code == 0
    assert "Bank A -> Bank B" in result.output

    transfer_id = result.output.split("|")[0].strip()
    result = cli_runner.invoke(cli, db_args + ["transfer", "delete", transfer_id, "--yes"])
    assert result.exit_code == 0
    assert balance_of(bank_a.id) == Decimal("500.00")
    assert balance_of(bank_b.id) == Decimal("100.00")


def test_transfer_command_same_bank(cli_runner, temp_db, bank_a):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "transfer", "add", "--from", "Bank A", "--to", "Bank A", "--value", "1"],
    )

    assert result.exit_code == 1
    assert "must be different" in result.output
