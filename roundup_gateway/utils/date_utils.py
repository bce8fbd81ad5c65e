"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import List


def generate_date_range(start: date, end: date, step_days: int = 1) -> List[date]:
    """Generate list of dates from start to end (inclusive), step_days apart"""
    if end < start:
        return []
    days = (end - start).days
    return [start + timedelta(days=i) for i in range(0, days + 1, step_days)]


def add_months(from_date: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping the day to the target month's length"""
    month_index = from_date.year * 12 + (from_date.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
