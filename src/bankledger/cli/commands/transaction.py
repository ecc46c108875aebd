"""Transaction management commands."""

import click
from bankledger.cli.account_resolution import resolve_account_or_exit
from bankledger.cli.error_handling import handle_domain_error
from bankledger.cli.input_parsing import parse_amount_or_exit, parse_date_or_exit
from bankledger.domain.account import AccountService
from bankledger.domain.errors import DomainError, NotFoundError, transaction_not_found
from bankledger.domain.transaction import TransactionService


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--bank", required=True, help="Bank account name or ID")
@click.option("--plan", "plan_id", required=True, type=int, help="Chart of account ID")
@click.option("--type", "txn_type", required=True, help="Income or Expense (Entrada/Saida also accepted)")
@click.option("--value", required=True, help="Positive amount (e.g., 123.45 or 1.234,56)")
@click.option("--due-date", required=True, help="Due date (YYYY-MM-DD or relative like 'today')")
@click.option("--payment-date", help="Payment date")
@click.option("--description", help="Transaction description")
@click.pass_context
def add_transaction(
    ctx,
    bank: str,
    plan_id: int,
    txn_type: str,
    value: str,
    due_date: str,
    payment_date: str | None,
    description: str | None,
):
    """Add a transaction and apply it to the bank's balance.

    Examples:
        bankledger transaction add --bank Checking --plan 1 --type Income --value 1000 --due-date 2024-01-05
        bankledger transaction add --bank 2 --plan 3 --type Expense --value 89.90 --due-date today
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)
    owner = ctx.obj["user_id"]

    bank_id = resolve_account_or_exit(ctx, account_service, bank)
    amount = parse_amount_or_exit(ctx, value)
    due = parse_date_or_exit(ctx, due_date, "due date")
    paid = parse_date_or_exit(ctx, payment_date, "payment date")

    try:
        transaction_id = transaction_service.create_transaction(
            owner,
            bank_id=bank_id,
            chart_of_account_id=plan_id,
            type=txn_type,
            value=amount,
            due_date=due,
            payment_date=paid,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    acc = account_service.get_account(owner, bank_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Bank: {acc.name}")
    click.echo(f"  Value: {amount:,.2f}")
    click.echo(f"  New balance: {acc.current_balance:,.2f}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--bank", help="Bank account name or ID")
@click.option("--plan", "plan_id", type=int, help="Chart of account ID")
@click.option("--type", "txn_type", help="Income or Expense")
@click.option("--value", help="Positive amount")
@click.option("--due-date", help="Due date")
@click.option("--payment-date", help="Payment date")
@click.option("--description", help="Transaction description")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    bank: str | None,
    plan_id: int | None,
    txn_type: str | None,
    value: str | None,
    due_date: str | None,
    payment_date: str | None,
    description: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. The old amount is taken off
    the old bank and the new amount applied to the new one.

    Examples:
        bankledger transaction update 1 --value 150
        bankledger transaction update 1 --bank Savings --type Expense
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)

    bank_id = resolve_account_or_exit(ctx, account_service, bank) if bank is not None else None
    amount = parse_amount_or_exit(ctx, value)
    due = parse_date_or_exit(ctx, due_date, "due date")
    paid = parse_date_or_exit(ctx, payment_date, "payment date")

    try:
        txn = transaction_service.update_transaction(
            ctx.obj["user_id"],
            transaction_id,
            bank_id=bank_id,
            chart_of_account_id=plan_id,
            type=txn_type,
            value=amount,
            due_date=due,
            payment_date=paid,
            description=description,
        )
        click.echo(f"Updated transaction {txn.id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction and reverse its effect on the bank's balance."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    owner = ctx.obj["user_id"]

    txn = service.get_transaction(owner, transaction_id)
    if txn is None:
        handle_domain_error(ctx, NotFoundError(transaction_not_found(transaction_id)))

    if not yes:
        click.echo(f"Transaction {txn.id}: {txn.due_date} | {txn.type.value} {txn.value:,.2f} | {txn.description or ''}")
        if not click.confirm("Are you sure you want to delete this transaction?"):
            click.echo("Deletion cancelled.")
            return

    try:
        service.delete_transaction(owner, transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--year", type=int, help="Only transactions in this year")
@click.option("--month", type=click.IntRange(1, 12), help="Only transactions in this month")
@click.option(
    "--by",
    type=click.Choice(["payment", "due"], case_sensitive=False),
    default="payment",
    show_default=True,
    help="Which date the year/month filter applies to",
)
@click.option("--bank", help="Bank account name or ID")
@click.pass_context
def list_transactions(ctx, year: int | None, month: int | None, by: str, bank: str | None):
    """List transactions, newest first.

    Examples:
        bankledger transaction list --year 2024 --month 3
        bankledger transaction list --year 2024 --by due --bank Checking
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_service = AccountService(db)
    owner = ctx.obj["user_id"]

    bank_id = resolve_account_or_exit(ctx, account_service, bank) if bank is not None else None

    try:
        transactions = service.list_transactions(
            owner, year=year, month=month, by=by.lower(), bank_id=bank_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    names = {acc.id: acc.name for acc in account_service.list_accounts(owner)}
    click.echo(f"\n{'ID':>5} | {'Due':10} | {'Paid':10} | {'Bank':15} | {'Type':7} | {'Value':>12} | Description")
    click.echo("-" * 90)
    for txn in transactions:
        paid = str(txn.payment_date) if txn.payment_date else "-"
        click.echo(
            f"{txn.id:5d} | {txn.due_date!s:10} | {paid:10} | {names.get(txn.bank_id, '?'):15.15} | "
            f"{txn.type.value:7} | {txn.value:>12,.2f} | {txn.description or ''}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
