"""Transfer management commands."""

import click
from bankledger.cli.account_resolution import resolve_account_or_exit
from bankledger.cli.error_handling import handle_domain_error
from bankledger.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit
from bankledger.domain.account import AccountService
from bankledger.domain.errors import DomainError
from bankledger.domain.transfer import TransferService


@click.group()
def transfer_group():
    """Manage transfers between bank accounts."""
    pass


@transfer_group.command("add")
@click.option("--from", "from_bank", required=True, help="Source bank account name or ID")
@click.option("--to", "to_bank", required=True, help="Destination bank account name or ID")
@click.option("--value", required=True, help="Positive amount")
@click.option("--date", "transfer_date", default="today", show_default=True, help="Transfer date")
@click.option("--description", help="Transfer description")
@click.pass_context
def add_transfer(ctx, from_bank: str, to_bank: str, value: str, transfer_date: str, description: str | None):
    """Move money from one bank account to another.

    Examples:
        bankledger transfer add --from Checking --to Savings --value 200
    """
    db = ctx.obj["db"]
    service = TransferService(db)
    account_service = AccountService(db)
    owner = ctx.obj["user_id"]

    from_id = resolve_account_or_exit(ctx, account_service, from_bank)
    to_id = resolve_account_or_exit(ctx, account_service, to_bank)
    amount = parse_amount_or_exit(ctx, value)
    when = parse_date_or_exit(ctx, transfer_date)

    try:
        transfer_id = service.create_transfer(owner, from_id, to_id, amount, when, description)
    except DomainError as e:
        handle_domain_error(ctx, e)

    source = account_service.get_account(owner, from_id)
    destination = account_service.get_account(owner, to_id)
    click.echo(f"Created transfer {transfer_id}")
    click.echo(f"  {source.name}: {source.current_balance:,.2f}")
    click.echo(f"  {destination.name}: {destination.current_balance:,.2f}")


@transfer_group.command("update")
@click.argument("transfer_id", type=int)
@click.option("--from", "from_bank", help="Source bank account name or ID")
@click.option("--to", "to_bank", help="Destination bank account name or ID")
@click.option("--value", help="Positive amount")
@click.option("--date", "transfer_date", help="Transfer date")
@click.option("--description", help="Transfer description")
@click.pass_context
def update_transfer(
    ctx,
    transfer_id: int,
    from_bank: str | None,
    to_bank: str | None,
    value: str | None,
    transfer_date: str | None,
    description: str | None,
):
    """Update a transfer. Updates only the fields that are provided."""
    db = ctx.obj["db"]
    service = TransferService(db)
    account_service = AccountService(db)

    from_id = resolve_account_or_exit(ctx, account_service, from_bank) if from_bank is not None else None
    to_id = resolve_account_or_exit(ctx, account_service, to_bank) if to_bank is not None else None
    amount = parse_amount_or_exit(ctx, value)
    when = parse_date_or_exit(ctx, transfer_date)

    try:
        transfer = service.update_transfer(
            ctx.obj["user_id"],
            transfer_id,
            from_bank_id=from_id,
            to_bank_id=to_id,
            value=amount,
            date=when,
            description=description,
        )
        click.echo(f"Updated transfer {transfer.id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transfer_group.command("delete")
@click.argument("transfer_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_transfer(ctx, transfer_id: int, yes: bool):
    """Delete a transfer and reverse both legs."""
    db = ctx.obj["db"]
    service = TransferService(db)

    if not yes and not click.confirm(f"Are you sure you want to delete transfer {transfer_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transfer(ctx.obj["user_id"], transfer_id)
        click.echo(f"Deleted transfer {transfer_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transfer_group.command("list")
@click.option("--bank", help="Only transfers touching this bank account")
@click.pass_context
def list_transfers(ctx, bank: str | None):
    """List transfers, newest first."""
    db = ctx.obj["db"]
    service = TransferService(db)
    account_service = AccountService(db)
    owner = ctx.obj["user_id"]

    bank_id = resolve_account_or_exit(ctx, account_service, bank) if bank is not None else None
    transfers = service.list_transfers(owner, bank_id=bank_id)
    if not transfers:
        click.echo("No transfers found.")
        return

    names = {acc.id: acc.name for acc in account_service.list_accounts(owner)}
    for t in transfers:
        click.echo(
            f"{t.id:5d} | {t.date} | {names.get(t.from_bank_id, '?')} -> {names.get(t.to_bank_id, '?')} | "
            f"{t.value:>12,.2f} | {t.description or ''}"
        )


def register_commands(cli):
    """Register transfer commands with main CLI."""
    cli.add_command(transfer_group, name="transfer")
