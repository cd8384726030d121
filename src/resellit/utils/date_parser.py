"""Date parsing utilities."""

import calendar
import re
from datetime import date, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_YMD_SLASH = re.compile(r"^\d{4}/\d{1,2}/\d{1,2}$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Slash-separated dates are read day first.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str, dayfirst="/" in date_str and not _YMD_SLASH.match(date_str))
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_optional_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a date leniently, returning None for blank or unparseable input."""
    if date_str is None or not date_str.strip():
        return None
    try:
        return parse_date(date_str)
    except ValueError:
        return None


def parse_day_first_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a strict DD/MM/YYYY date as used by settlement reports.

    Single-digit days and months are accepted. Anything else, including
    impossible calendar dates, yields None.
    """
    if date_str is None:
        return None
    parts = date_str.replace('"', "").strip().split("/")
    if len(parts) != 3:
        return None
    day, month, year = (part.strip() for part in parts)
    if not (day.isdigit() and month.isdigit() and year.isdigit() and len(year) == 4):
        return None
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def month_key(value: date) -> str:
    """Return the zero-padded YYYY-MM key for a date."""
    return f"{value.year}-{value.month:02d}"


def month_key_from_parts(year: int, month: int) -> str:
    """Return the zero-padded YYYY-MM key for a year and month."""
    return f"{year}-{month:02d}"


def shift_month_key(key: str, months: int) -> str:
    """Move a YYYY-MM key by a number of calendar months."""
    year, month = (int(part) for part in key.split("-"))
    shifted = date(year, month, 1) + relativedelta(months=months)
    return month_key(shifted)


def days_left_in_month(today: date) -> int:
    """Days after today up to and including the last day of the month."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return last_day - today.day


def get_month_range(value: date) -> tuple[date, date]:
    """Get the first and last dates of the month containing value."""
    start_date = value.replace(day=1)
    end_date = start_date + relativedelta(months=1) - timedelta(days=1)
    return (start_date, end_date)


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, last-month, this-year, last-year)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "last-month":
        return get_month_range(today - relativedelta(months=1))

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, last-month, this-year, last-year"
        )
