"""Spreadsheet import command."""

import click
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.bulk_import import ImportService
from bankledger.domain.errors import DomainError


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_file(ctx, file: str):
    """Import transactions from a CSV or XLSX file.

    The header row names the columns (Portuguese or English):
    Data Vencimento, Data Pagamento, Tipo, Descrição, Valor, Banco,
    Plano de Contas. Banks and plans are matched by name.

    The whole file is imported or nothing is: the first bad row aborts the
    import and is reported by its row number.
    """
    db = ctx.obj["db"]
    service = ImportService(db)

    try:
        result = service.import_file(ctx.obj["user_id"], file)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} transactions")
    if result.balances:
        click.echo("  Balances:")
        for bank_id, balance in result.balances.items():
            click.echo(f"    Bank {bank_id}: {balance:,.2f}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_file)
