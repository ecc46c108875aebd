"""Utility functions for bankledger."""

from bankledger.utils.date_parser import parse_date, parse_optional_date, month_range
from bankledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_optional_date", "month_range", "parse_amount"]
