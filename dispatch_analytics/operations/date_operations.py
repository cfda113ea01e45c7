"""
Calendar arithmetic shared by the payout and report modules.

All functions work on ``datetime.date``; weeks start on Monday.
"""

import calendar
from datetime import date, timedelta

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def week_start(value: date) -> date:
    """Monday of the week containing ``value``."""
    return value - timedelta(days=value.weekday())


def week_end(start: date) -> date:
    return start + timedelta(days=6)


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def adjust_for_weekend(value: date) -> date:
    """Move a Saturday or Sunday forward to the following Monday."""
    if value.weekday() == 5:
        return value + timedelta(days=2)
    if value.weekday() == 6:
        return value + timedelta(days=1)
    return value


def next_weekday_after(value: date, weekday: int) -> date:
    """First ``weekday`` strictly after ``value``."""
    days_ahead = (weekday - value.weekday()) % 7 or 7
    return value + timedelta(days=days_ahead)


def days_between(start: date, end: date) -> int:
    return (end - start).days


def business_days_between(start: date, end: date) -> int:
    """Count Monday-Friday days from ``start`` to ``end`` inclusive."""
    if end < start:
        return 0
    count = 0
    current = start
    while current <= end:
        if current.weekday() < 5:
            count += 1
        current += timedelta(days=1)
    return count


def business_days_in_month(month_key: str) -> int:
    year, month = parse_month_key(month_key)
    return business_days_between(date(year, month, 1), last_day_of_month(year, month))


def month_key(value: date) -> str:
    return f"{value.year}-{value.month:02d}"


def parse_month_key(key: str) -> tuple[int, int]:
    year, month = key.split("-")
    return int(year), int(month)


def previous_month(value: date) -> date:
    """First day of the month before ``value``."""
    first_of_month = value.replace(day=1)
    return (first_of_month - timedelta(days=1)).replace(day=1)


def next_month(value: date) -> date:
    """First day of the month after ``value``."""
    return last_day_of_month(value.year, value.month) + timedelta(days=1)


def format_day_label(value: date) -> str:
    """Short label such as ``Mon, Jan 6``."""
    return f"{value.strftime('%a')}, {value.strftime('%b')} {value.day}"


def format_week_label(value: date) -> str:
    """Label such as ``Jan 6, 2025``."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"
