"""
Validation of generated employee-months.

``validate_records`` is the acceptance check every month must pass before it
is written: clock fields consistent with the status, no hours on rest days,
and an exact credit match against the target.

The placement checks below it look at how natural the month reads (no long
unexplained absence streaks, presence spread over the month). They are only
applied when ``INOUT_ENFORCE_PLACEMENT_RULES`` is switched on.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, timedelta

from app.engine.records import (CREDIT_TOLERANCE, WORKING_STATUSES,
                                AttendanceRow, DayStatus, total_credits)

MAX_ABSENT_RUN = 3
PRESENCE_WINDOW = 4


def validate_records(records: Sequence[AttendanceRow], target_credits: float) -> str | None:
    """Return the first violation found, or ``None`` when the month is valid."""
    for row in records:
        has_in = bool(row.in_time)
        has_out = bool(row.out_time)
        if has_in != has_out:
            return f"In/Out time mismatch on {row.date.isoformat()}"
        if row.status in WORKING_STATUSES:
            if not has_in:
                return f"Missing times for status {row.status.value}"
        else:
            if has_in:
                return f"Invalid times for status {row.status.value}"
            if row.work_hours != 0 or row.ot_hours != 0:
                return f"Non-zero hours for status {row.status.value}"

    credits = total_credits(list(records))
    if abs(credits - target_credits) > CREDIT_TOLERANCE:
        return f"Credit mismatch ({credits:g} vs {target_credits:g})"
    return None


# ── Placement heuristics ────────────────────────────────────────────
def _is_adjacent_to(day: date, others: set[date]) -> bool:
    return (day - timedelta(days=1)) in others or (day + timedelta(days=1)) in others


def has_no_long_absence_runs(records: Sequence[AttendanceRow]) -> bool:
    """Absence streaks longer than three days must touch a weekly-off."""
    weekly_offs = {row.date for row in records if row.status is DayStatus.WEEKLY_OFF}
    run: list[date] = []
    for row in [*records, None]:
        if row is not None and row.status is DayStatus.ABSENT:
            run.append(row.date)
            continue
        if len(run) > MAX_ABSENT_RUN and not any(_is_adjacent_to(d, weekly_offs) for d in run):
            return False
        run = []
    return True


def has_presence_every_window(
    records: Sequence[AttendanceRow],
    holidays: set[date],
    window: int = PRESENCE_WINDOW,
) -> bool:
    """Every run of ``window`` consecutive working days has a present day."""
    track = [
        row
        for row in records
        if row.date not in holidays and row.status is not DayStatus.WEEKLY_OFF
    ]
    for i in range(len(track) - window + 1):
        if not any(row.status is DayStatus.PRESENT for row in track[i : i + window]):
            return False
    return True


def has_presence_spread(records: Sequence[AttendanceRow], holidays: set[date]) -> bool:
    """Each third of the working days holds a fair share of the present days."""
    working = [
        row
        for row in records
        if row.date not in holidays and row.status is not DayStatus.WEEKLY_OFF
    ]
    present_count = sum(1 for row in working if row.status is DayStatus.PRESENT)
    if present_count < 3:
        return True
    size = math.ceil(len(working) / 3)
    segments = [working[:size], working[size : size * 2], working[size * 2 :]]
    minimum = max(1, present_count // 6)
    return all(
        sum(1 for row in segment if row.status is DayStatus.PRESENT) >= minimum
        for segment in segments
    )


def check_placement(records: Sequence[AttendanceRow], holidays: set[date]) -> str | None:
    if not has_no_long_absence_runs(records):
        return "Absence run longer than 3 days away from weekly-off"
    if not has_presence_every_window(records, holidays):
        return f"No present day within {PRESENCE_WINDOW} consecutive working days"
    if not has_presence_spread(records, holidays):
        return "Present days not spread across the month"
    return None
