"""Date manipulation utilities"""

import calendar
from datetime import date


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given calendar month"""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping day to the last valid day of the month"""
    return date(year, month, min(day, days_in_month(year, month)))


def add_months_clamped(from_date: date, months: int) -> date:
    """
    Add whole calendar months, keeping the day-of-month where possible.

    If the target month is shorter than from_date's day, the result is the
    last day of the target month (Jan 31 + 1 month -> Feb 28/29).
    Zero and negative month offsets are supported.
    """
    month_index = from_date.year * 12 + (from_date.month - 1) + months
    year, month = divmod(month_index, 12)
    return clamp_day(year, month + 1, from_date.day)


def days_until(target: date, today: date) -> int:
    """Signed number of whole days from today to target (negative if past)"""
    return (target - today).days
