"""Amount parsing utilities."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import re

_CURRENCY = re.compile(r"R\$|[$€£¥]")
CENT = Decimal("0.01")


def _normalize_separators(amount_str: str) -> str:
    """Reduce thousands and decimal separators to a plain decimal string.

    "1.234,56" and "1,234.56" both become "1234.56". A single comma followed
    by one or two digits ("10,5", "10,50") is a decimal comma; followed by
    three digits ("1,000") it could be either, so it is rejected. Several
    commas ("1,234,567") are thousands separators.
    """
    if "," in amount_str and "." in amount_str:
        if amount_str.rfind(",") > amount_str.rfind("."):
            return amount_str.replace(".", "").replace(",", ".")
        return amount_str.replace(",", "")
    if amount_str.count(",") == 1:
        head, _, tail = amount_str.partition(",")
        if len(tail) in (1, 2):
            return f"{head}.{tail}"
        if len(tail) == 3:
            raise ValueError(
                f"Ambiguous amount '{amount_str}': write 1.000,00 or 1,000.00"
            )
        return amount_str
    if "," in amount_str:
        return amount_str.replace(",", "")
    return amount_str


def to_cents(value: Decimal) -> Decimal:
    """Round to the two decimal places the balance columns store."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_amount(amount: object) -> Decimal:
    """Parse an amount into a Decimal.

    Handles various formats:
    - 123.45 (int, float or Decimal from a spreadsheet cell)
    - "123.45", "-123.45", "$123.45", "R$ 123,45"
    - "1,234.56" and "1.234,56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount: Amount value

    Returns:
        Decimal amount

    Raises:
        ValueError: If the amount cannot be parsed
    """
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, int) and not isinstance(amount, bool):
        return Decimal(amount)
    if isinstance(amount, float):
        # Through str so 0.1 stays 0.1 instead of its binary expansion.
        return Decimal(str(amount))
    if not isinstance(amount, str) or not amount.strip():
        raise ValueError("Empty amount string")

    amount_str = amount.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = _CURRENCY.sub("", amount_str).replace(" ", "")
    amount_str = _normalize_separators(amount_str)

    try:
        value = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount}'")
    if not value.is_finite():
        raise ValueError(f"Could not parse amount '{amount}'")
    return -value if is_negative else value
