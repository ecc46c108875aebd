"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Day zero of spreadsheet serial dates (1900 date system, leap-year bug included).
EXCEL_EPOCH = date(1899, 12, 30)


def excel_serial_to_date(serial: float) -> date:
    """Convert a spreadsheet serial day number to a date."""
    return EXCEL_EPOCH + timedelta(days=int(serial))


def parse_date(value: object) -> date:
    """Parse a user or spreadsheet supplied value into a date object.

    Supports:
    - date and datetime objects (as returned by spreadsheet readers)
    - spreadsheet serial numbers, e.g. 45306 or "45306"
    - ISO dates: "2024-01-15"
    - day-first dates: "15/01/2024", "15-01-2024", "15 Jan 2024"
    - relative dates: "today", "yesterday", "tomorrow"

    Args:
        value: Value to parse

    Returns:
        Date object

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return excel_serial_to_date(value)
    if not isinstance(value, str):
        raise ValueError(f"Could not parse date '{value}'")

    date_str = value.strip().lower()
    if not date_str:
        raise ValueError("Empty date string")

    today = date.today()
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.isdigit() and len(date_str) <= 6:
        return excel_serial_to_date(int(date_str))

    # ISO first: dayfirst parsing would swap month and day in "2024-01-05".
    try:
        return date.fromisoformat(date_str[:10])
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def parse_optional_date(value: object) -> Optional[date]:
    """Like parse_date, but blank values give None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_date(value)


def month_range(year: int, month: Optional[int] = None) -> tuple[date, date]:
    """Get the [start, end) dates of a month, or of a whole year.

    Args:
        year: Calendar year
        month: Optional month (1-12); the whole year when None

    Returns:
        Tuple of (inclusive start, exclusive end)

    Raises:
        ValueError: If month is out of range
    """
    if month is None:
        start = date(year, 1, 1)
        return start, start + relativedelta(years=1)
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month}: expected 1-12")
    start = date(year, month, 1)
    return start, start + relativedelta(months=1)
