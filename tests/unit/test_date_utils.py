"""Unit tests for calendar month arithmetic"""

import pytest
from datetime import date
from obligation_reminders.utils.date_utils import add_months_clamped, clamp_day, days_until


def test_add_months_clamped_leap_year():
    """Jan 31 + 1 month lands on Feb 29 in a leap year"""
    assert add_months_clamped(date(2024, 1, 31), 1) == date(2024, 2, 29)


def test_add_months_clamped_non_leap_year():
    assert add_months_clamped(date(2023, 1, 31), 1) == date(2023, 2, 28)


def test_add_months_clamped_zero_months():
    assert add_months_clamped(date(2024, 5, 31), 0) == date(2024, 5, 31)


@pytest.mark.parametrize(
    "start, months, expected",
    [
        (date(2024, 3, 31), -1, date(2024, 2, 29)),
        (date(2024, 1, 15), -1, date(2023, 12, 15)),
        (date(2024, 3, 31), -13, date(2023, 2, 28)),
    ],
)
def test_add_months_clamped_negative(start, months, expected):
    assert add_months_clamped(start, months) == expected


def test_add_months_clamped_crosses_year_end():
    assert add_months_clamped(date(2023, 11, 30), 3) == date(2024, 2, 29)
    assert add_months_clamped(date(2023, 12, 15), 1) == date(2024, 1, 15)


def test_add_months_clamped_keeps_day_after_short_month():
    """Clamping is per call: Jan 31 + 2 months is Mar 31, not Mar 29"""
    assert add_months_clamped(date(2024, 1, 31), 2) == date(2024, 3, 31)


def test_add_months_clamped_thirty_day_month():
    assert add_months_clamped(date(2024, 3, 31), 1) == date(2024, 4, 30)


def test_clamp_day():
    assert clamp_day(2023, 2, 30) == date(2023, 2, 28)
    assert clamp_day(2024, 4, 31) == date(2024, 4, 30)
    assert clamp_day(2024, 4, 15) == date(2024, 4, 15)


def test_days_until_signed():
    today = date(2024, 3, 10)
    assert days_until(date(2024, 3, 12), today) == 2
    assert days_until(date(2024, 3, 10), today) == 0
    assert days_until(date(2024, 3, 5), today) == -5
    assert days_until(date(2024, 4, 5), today) == 26
