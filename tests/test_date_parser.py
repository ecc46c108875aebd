"""Tests for date parsing."""

import pytest
from datetime import date, datetime, timedelta
from bankledger.utils.date_parser import (
    excel_serial_to_date,
    month_range,
    parse_date,
    parse_optional_date,
)


def test_parse_iso_date():
    """ISO dates are never read day-first."""
    assert parse_date("2024-01-05") == date(2024, 1, 5)


def test_parse_iso_datetime_string():
    assert parse_date("2024-01-05 13:45:00") == date(2024, 1, 5)


def test_parse_day_first():
    assert parse_date("05/01/2024") == date(2024, 1, 5)
    assert parse_date("31-12-2023") == date(2023, 12, 31)


def test_parse_today():
    assert parse_date("today") == date.today()


def test_parse_yesterday():
    assert parse_date("Yesterday") == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    assert parse_date("tomorrow") == date.today() + timedelta(days=1)


def test_parse_date_and_datetime_objects():
    assert parse_date(date(2024, 2, 29)) == date(2024, 2, 29)
    assert parse_date(datetime(2024, 2, 29, 8, 30)) == date(2024, 2, 29)


def test_parse_spreadsheet_serial():
    assert parse_date(45306) == date(2024, 1, 15)
    assert parse_date(45306.75) == date(2024, 1, 15)
    assert parse_date("45306") == date(2024, 1, 15)
    assert excel_serial_to_date(1) == date(1899, 12, 31)


@pytest.mark.parametrize("value", ["", "   ", "not a date", None, True])
def test_parse_invalid(value):
    with pytest.raises(ValueError):
        parse_date(value)


def test_parse_optional_date():
    assert parse_optional_date(None) is None
    assert parse_optional_date("  ") is None
    assert parse_optional_date("2024-03-01") == date(2024, 3, 1)


def test_month_range():
    assert month_range(2024, 2) == (date(2024, 2, 1), date(2024, 3, 1))
    assert month_range(2024, 12) == (date(2024, 12, 1), date(2025, 1, 1))


def test_year_range():
    assert month_range(2024) == (date(2024, 1, 1), date(2025, 1, 1))


def test_month_range_invalid_month():
    with pytest.raises(ValueError):
        month_range(2024, 13)
