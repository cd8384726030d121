"""Tests for date parsing helpers."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
from resellit.utils.date_parser import (
    days_left_in_month,
    get_date_range,
    get_month_range,
    month_key,
    parse_date,
    parse_day_first_date,
    parse_optional_date,
    shift_month_key,
)


def test_parse_absolute_date():
    """Test parsing ISO dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_slash_date_is_day_first():
    """Slash dates from UK spreadsheets are read day first."""
    assert parse_date("05/01/2024") == date(2024, 1, 5)


def test_parse_year_first_slash_date():
    """A four digit leading year is not mistaken for a day."""
    assert parse_date("2024/01/05") == date(2024, 1, 5)


def test_parse_relative_dates():
    """Test parsing today, yesterday and tomorrow."""
    today = date.today()
    assert parse_date("today") == today
    assert parse_date("Yesterday") == today - timedelta(days=1)
    assert parse_date(" tomorrow ") == today + timedelta(days=1)


def test_parse_invalid_date():
    """Test that garbage raises ValueError."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")


def test_parse_optional_date_is_lenient():
    assert parse_optional_date(None) is None
    assert parse_optional_date("   ") is None
    assert parse_optional_date("rubbish") is None
    assert parse_optional_date("2025-01-20") == date(2025, 1, 20)


class TestDayFirstDate:
    """Tests for strict DD/MM/YYYY settlement dates."""

    def test_valid(self):
        assert parse_day_first_date("03/02/2024") == date(2024, 2, 3)

    def test_single_digit_parts(self):
        assert parse_day_first_date("3/2/2024") == date(2024, 2, 3)

    def test_quoted(self):
        assert parse_day_first_date('"03/02/2024"') == date(2024, 2, 3)

    def test_impossible_date(self):
        assert parse_day_first_date("31/02/2024") is None

    def test_wrong_shape(self):
        assert parse_day_first_date("2024-02-03") is None
        assert parse_day_first_date("03/02/24") is None
        assert parse_day_first_date("") is None
        assert parse_day_first_date(None) is None


def test_month_key_is_zero_padded():
    assert month_key(date(2024, 3, 9)) == "2024-03"


def test_shift_month_key_across_year():
    assert shift_month_key("2024-01", -1) == "2023-12"
    assert shift_month_key("2023-12", 1) == "2024-01"
    assert shift_month_key("2024-05", -3) == "2024-02"


def test_days_left_in_month():
    assert days_left_in_month(date(2024, 6, 21)) == 9
    assert days_left_in_month(date(2024, 6, 30)) == 0
    assert days_left_in_month(date(2024, 2, 1)) == 28


def test_get_month_range_leap_year():
    assert get_month_range(date(2024, 2, 14)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_get_date_range_this_month():
    """Test this-month covers the first of the month through today."""
    today = date.today()
    start, end = get_date_range("this-month")
    assert start == today.replace(day=1)
    assert end == today


def test_get_date_range_last_month():
    """Test last-month covers the whole previous month."""
    first_of_this_month = date.today().replace(day=1)
    start, end = get_date_range("last-month")
    assert start == first_of_this_month - relativedelta(months=1)
    assert end == first_of_this_month - timedelta(days=1)


def test_get_date_range_last_year():
    today = date.today()
    start, end = get_date_range("last-year")
    assert start == date(today.year - 1, 1, 1)
    assert end == date(today.year - 1, 12, 31)


def test_get_date_range_unknown_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-week")
