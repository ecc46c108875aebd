"""Chart of account (plan) management commands."""

import click
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.category import ChartOfAccountService
from bankledger.domain.errors import DomainError


@click.group()
def plan_group():
    """Manage charts of accounts (plans)."""
    pass


@plan_group.command("list")
@click.pass_context
def list_plans(ctx):
    """List all charts of accounts."""
    db = ctx.obj["db"]
    service = ChartOfAccountService(db)

    charts = service.list_charts_of_accounts(ctx.obj["user_id"])
    if not charts:
        click.echo("No charts of accounts found.")
        return

    click.echo("\nCharts of accounts:")
    for chart in charts:
        category = chart.category_id if chart.category_id is not None else "-"
        click.echo(f"ID: {chart.id:3d} | {chart.description:30s} | Category: {category}")


@plan_group.command("create")
@click.argument("description")
@click.option("--category", "category_id", type=int, help="Category ID the plan belongs to")
@click.pass_context
def create_plan(ctx, description: str, category_id: int | None):
    """Create a new chart of account.

    Imports look plans up by description, so descriptions are unique.

    Examples:
        bankledger plan create "Salary"
        bankledger plan create "Rent" --category 2
    """
    db = ctx.obj["db"]
    service = ChartOfAccountService(db)

    try:
        chart_id = service.create_chart_of_account(ctx.obj["user_id"], description, category_id)
        click.echo(f"Created chart of account '{description}' (ID: {chart_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@plan_group.command("edit")
@click.argument("plan_id", type=int)
@click.option("--description", help="New description")
@click.option("--category", "category_id", type=int, help="New category ID")
@click.pass_context
def edit_plan(ctx, plan_id: int, description: str | None, category_id: int | None):
    """Edit a chart of account."""
    db = ctx.obj["db"]
    service = ChartOfAccountService(db)

    try:
        service.update_chart_of_account(
            ctx.obj["user_id"], plan_id, description=description, category_id=category_id
        )
        click.echo(f"Updated chart of account {plan_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@plan_group.command("delete")
@click.argument("plan_id", type=int)
@click.pass_context
def delete_plan(ctx, plan_id: int):
    """Delete a chart of account no transaction uses."""
    db = ctx.obj["db"]
    service = ChartOfAccountService(db)

    try:
        service.delete_chart_of_account(ctx.obj["user_id"], plan_id)
        click.echo(f"Deleted chart of account {plan_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register plan commands with main CLI."""
    cli.add_command(plan_group, name="plan")
