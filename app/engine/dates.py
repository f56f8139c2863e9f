"""
Calendar and clock helpers shared by the generator and the reporting view.

Weekdays are numbered Sunday = 0 … Saturday = 6 throughout the engine, and
clock times are handled as minutes after midnight and rendered ``HH:MM``.
"""

from __future__ import annotations

import calendar
import math
from datetime import date

MINUTES_PER_DAY = 1440
SUNDAY = 0

WEEKDAY_NAMES = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")


def month_days(month: int, year: int) -> list[date]:
    """Every calendar date of the month, in order."""
    _, count = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, count + 1)]


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]


def weekday_index(day: date) -> int:
    return (day.weekday() + 1) % 7


def weekday_name(index: int) -> str:
    if 0 <= index < len(WEEKDAY_NAMES):
        return WEEKDAY_NAMES[index]
    return WEEKDAY_NAMES[SUNDAY]


def parse_hhmm(value: str) -> int:
    hours, minutes = value.strip().split(":", 1)
    return int(hours) * 60 + int(minutes)


def format_time(total_minutes: int) -> str:
    """Render minutes as ``HH:MM``, wrapping across midnight either way."""
    n = total_minutes % MINUTES_PER_DAY
    return f"{n // 60:02d}:{n % 60:02d}"


def duration_minutes(start: int, end: int) -> int:
    diff = end - start
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def round2(value: float) -> float:
    """Round half-up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100
