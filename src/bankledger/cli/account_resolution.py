"""CLI helpers for bank account resolution and error handling."""

from __future__ import annotations

import click
from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.account import AccountService
from bankledger.domain.errors import DomainError
from bankledger.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve a bank name or ID for the acting user, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, ctx.obj["user_id"], account)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
