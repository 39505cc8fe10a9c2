"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative words used on the calendar: "today", "yesterday", "tomorrow".

    Args:
        date_str: Date string in various formats
        today: Reference date for relative words (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str, today: Optional[date] = None) -> date:
    """Parse a month reference into the first day of that month.

    Accepts "2024-03", "March 2024", "this month", "last month", "next month".

    Raises:
        ValueError: If the string cannot be parsed
    """
    month_str = month_str.strip().lower()
    today = today or date.today()
    first_of_month = today.replace(day=1)

    if month_str == "this month":
        return first_of_month
    if month_str == "last month":
        return first_of_month - relativedelta(months=1)
    if month_str == "next month":
        return first_of_month + relativedelta(months=1)

    try:
        dt = date_parser.parse(month_str, default=datetime(today.year, 1, 1))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse month '{month_str}': {e}")
    return dt.date().replace(day=1)


def month_range(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    start = date(year, month, 1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end


def year_range(year: int) -> tuple[date, date]:
    """Return January 1 and December 31 of a year."""
    return date(year, 1, 1), date(year, 12, 31)
