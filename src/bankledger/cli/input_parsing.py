"""CLI helpers for parsing date and amount options."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import click
from bankledger.utils.amount_parser import parse_amount
from bankledger.utils.date_parser import parse_date


def parse_date_or_exit(ctx: click.Context, value: str | None, label: str = "date") -> date | None:
    """Parse a date option, exiting with a CLI error if it is malformed.

    None passes through so optional options can be handed straight over.
    """
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str | None, label: str = "value") -> Decimal | None:
    """Parse an amount option, exiting with a CLI error if it is malformed."""
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
