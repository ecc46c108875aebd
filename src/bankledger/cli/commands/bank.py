"""Bank account management commands."""

import click
from bankledger.cli.account_resolution import resolve_account_or_exit
from bankledger.cli.error_handling import handle_domain_error
from bankledger.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit
from bankledger.domain.account import AccountService
from bankledger.domain.errors import DomainError


@click.group()
def bank_group():
    """Manage bank accounts."""
    pass


@bank_group.command("create")
@click.argument("name", metavar="BANK_NAME")
@click.option("--initial-balance", default="0", show_default=True, help="Opening balance (e.g., 1500.00)")
@click.option("--start-date", help="Date of the opening balance (defaults to today)")
@click.pass_context
def create_bank(ctx, name: str, initial_balance: str, start_date: str | None):
    """Create a new bank account.

    The current balance starts at the initial balance.

    Examples:
        bankledger bank create "Checking" --initial-balance 1500.00
        bankledger bank create "Savings" --start-date 2024-01-01
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    balance = parse_amount_or_exit(ctx, initial_balance, "initial balance")
    opened = parse_date_or_exit(ctx, start_date, "start date")

    try:
        account_id = service.create_account(
            ctx.obj["user_id"], name=name, initial_balance=balance, start_date=opened
        )
        click.echo(f"Created bank account '{name.strip()}' (ID: {account_id})")
        click.echo(f"  Initial balance: {balance:,.2f}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@bank_group.command("list")
@click.pass_context
def list_banks(ctx):
    """List all bank accounts with their current balances."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(ctx.obj["user_id"])
    if not accounts:
        click.echo("No bank accounts found.")
        return

    click.echo("\nBank accounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Balance: {acc.current_balance:>14,.2f}")


@bank_group.command("show")
@click.argument("bank", metavar="BANK")
@click.pass_context
def show_bank(ctx, bank: str):
    """Show a bank account.

    BANK can be a bank account name or ID.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, bank)
    acc = service.get_account(ctx.obj["user_id"], account_id)

    click.echo(f"Bank account {acc.id}: {acc.name}")
    click.echo(f"  Start date:      {acc.start_date}")
    click.echo(f"  Initial balance: {acc.initial_balance:,.2f}")
    click.echo(f"  Current balance: {acc.current_balance:,.2f}")


@bank_group.command("edit")
@click.argument("bank", metavar="BANK")
@click.option("--name", help="New name")
@click.option("--initial-balance", help="New opening balance; the current balance moves by the difference")
@click.option("--start-date", help="New start date")
@click.pass_context
def edit_bank(ctx, bank: str, name: str | None, initial_balance: str | None, start_date: str | None):
    """Edit a bank account.

    BANK can be a bank account name or ID. Only the options given are changed.

    Examples:
        bankledger bank edit "Checking" --name "Main Checking"
        bankledger bank edit 1 --initial-balance 2000
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, bank)
    balance = parse_amount_or_exit(ctx, initial_balance, "initial balance")
    opened = parse_date_or_exit(ctx, start_date, "start date")

    if name is None and balance is None and opened is None:
        click.echo("Error: Nothing to change. Use --name, --initial-balance or --start-date.", err=True)
        ctx.exit(1)

    try:
        acc = service.update_account(
            ctx.obj["user_id"], account_id, name=name, initial_balance=balance, start_date=opened
        )
        click.echo(f"Updated bank account '{acc.name}' (ID: {acc.id})")
        click.echo(f"  Current balance: {acc.current_balance:,.2f}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@bank_group.command("delete")
@click.argument("bank", metavar="BANK")
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_bank(ctx, bank: str, yes: bool) -> None:
    """Delete a bank account.

    BANK can be a bank account name or ID.

    The account can only be deleted if no transactions or transfers
    reference it. Delete or move them first.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, bank)
    acc = service.get_account(ctx.obj["user_id"], account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete bank account '{acc.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(ctx.obj["user_id"], account_id)
        click.echo(f"Deleted bank account '{acc.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@bank_group.command("reconcile")
@click.argument("bank", metavar="BANK")
@click.option("--fix", is_flag=True, help="Rewrite the current balance if it has drifted")
@click.pass_context
def reconcile_bank(ctx, bank: str, fix: bool) -> None:
    """Check a bank account's balance against its history.

    Recomputes the balance from the initial balance plus every transaction
    and transfer, and compares it with the stored current balance. Exits
    with status 1 if they differ and --fix was not given.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, bank)
    try:
        if fix:
            check = service.reconcile(ctx.obj["user_id"], account_id)
        else:
            check = service.check_balance(ctx.obj["user_id"], account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Stored balance:  {check.cached_balance:,.2f}")
    click.echo(f"Derived balance: {check.derived_balance:,.2f}")
    if check.is_consistent:
        click.echo("Balance is consistent.")
    elif fix:
        click.echo(f"Repaired a difference of {check.difference:,.2f}.")
    else:
        click.echo(f"Balance differs by {check.difference:,.2f}. Run with --fix to repair.", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register bank commands with main CLI."""
    cli.add_command(bank_group, name="bank")
