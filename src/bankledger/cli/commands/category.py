"""Category management commands."""

import click
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.category import CategoryService
from bankledger.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(ctx.obj["user_id"])
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"ID: {cat.id:3d} | {cat.description:30s} | DRE: {cat.dre_range}")


@category_group.command("create")
@click.argument("description")
@click.option("--dre-range", required=True, help="Income statement line the category rolls up to")
@click.pass_context
def create_category(ctx, description: str, dre_range: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(ctx.obj["user_id"], description, dre_range)
        click.echo(f"Created category '{description}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("edit")
@click.argument("category_id", type=int)
@click.option("--description", help="New description")
@click.option("--dre-range", help="New DRE range")
@click.pass_context
def edit_category(ctx, category_id: int, description: str | None, dre_range: str | None):
    """Edit a category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.update_category(
            ctx.obj["user_id"], category_id, description=description, dre_range=dre_range
        )
        click.echo(f"Updated category {category_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete_category(ctx, category_id: int):
    """Delete a category no chart of account uses."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.delete_category(ctx.obj["user_id"], category_id)
        click.echo(f"Deleted category {category_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
