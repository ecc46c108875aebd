"""CLI error handling helpers."""

import click

from bankledger.domain.errors import DomainError, PersistenceError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Store failures were already logged with their details; the user only
    gets the generic message.
    """
    if isinstance(error, PersistenceError):
        click.echo(f"Error: {error.public_message}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
