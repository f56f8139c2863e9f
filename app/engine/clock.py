"""
Clock-time and work-hour synthesis for generated attendance days.

Present and half days get an in-time jittered around the shift's canonical
start, a fixed one-hour break and a random amount of overtime capped so the
whole span never exceeds twelve hours. Every other status carries no clock
times and zero hours.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date

from app.engine.dates import format_time, round2
from app.engine.records import (WORKING_STATUSES, AttendanceRow, DayStatus,
                                ShiftCode)
from app.engine.rng import SeededRandom

# Canonical start times used instead of the configured window.
CANONICAL_SHIFT_START: dict[ShiftCode, int] = {
    ShiftCode.GENERAL: 9 * 60 + 30,
    ShiftCode.A: 8 * 60,
    ShiftCode.B: 16 * 60,
    ShiftCode.C: 30,
}

FULL_DAY_WORK_MINUTES = 8 * 60
HALF_DAY_WORK_MINUTES = 4 * 60
BREAK_MINUTES = 60
MAX_OT_MINUTES = 4 * 60
MAX_SPAN_MINUTES = 12 * 60
MAX_IN_TIME_JITTER = 10
STANDARD_WORK_HOURS = 8


def rest_day_row(
    employee_id: int,
    day: date,
    status: DayStatus,
    seed_tag: str,
    month: int,
    year: int,
) -> AttendanceRow:
    return AttendanceRow(
        employee_id=employee_id,
        date=day,
        status=status,
        generation_seed=seed_tag,
        in_time=None,
        out_time=None,
        break_minutes=0,
        work_hours=0.0,
        ot_hours=0.0,
        month=month,
        year=year,
    )


def working_day_row(
    employee_id: int,
    day: date,
    status: DayStatus,
    shift_start: int,
    rng: SeededRandom,
    seed_tag: str,
    month: int,
    year: int,
) -> AttendanceRow:
    offset = rng.randint(0, MAX_IN_TIME_JITTER)
    sign = -1 if rng.random() < 0.5 else 1
    in_minutes = shift_start + sign * offset

    work_minutes = FULL_DAY_WORK_MINUTES if status is DayStatus.PRESENT else HALF_DAY_WORK_MINUTES
    max_ot = max(0, min(MAX_OT_MINUTES, MAX_SPAN_MINUTES - (work_minutes + BREAK_MINUTES)))
    ot_minutes = int(rng.random() * (max_ot + 1))
    out_minutes = in_minutes + work_minutes + BREAK_MINUTES + ot_minutes

    work_hours = round2((work_minutes + ot_minutes) / 60)
    return AttendanceRow(
        employee_id=employee_id,
        date=day,
        status=status,
        generation_seed=seed_tag,
        in_time=format_time(in_minutes),
        out_time=format_time(out_minutes),
        break_minutes=BREAK_MINUTES,
        work_hours=work_hours,
        ot_hours=round2(max(0.0, work_hours - STANDARD_WORK_HOURS)),
        month=month,
        year=year,
    )


def synthesize_month(
    employee_id: int,
    shift_start: int,
    days: Sequence[date],
    statuses: Mapping[date, DayStatus],
    rng: SeededRandom,
    seed_tag: str,
    month: int,
    year: int,
) -> list[AttendanceRow]:
    """Attach clock times to a full month of statuses, drawing in date order."""
    rows = []
    for day in days:
        status = statuses.get(day, DayStatus.ABSENT)
        if status in WORKING_STATUSES:
            rows.append(
                working_day_row(employee_id, day, status, shift_start, rng, seed_tag, month, year)
            )
        else:
            rows.append(rest_day_row(employee_id, day, status, seed_tag, month, year))
    return rows
