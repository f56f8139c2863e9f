"""
Deterministic fallback allocator.

Used when the randomized solver keeps failing. Holidays are paid leave and
the weekly-off weekday is off, but there is no extra paid leave day. Present
days are spread evenly over the open dates by index, one half day is added
for a ``.5`` remainder and the rest is absent. Clock times follow the
configured shift window with no jitter and no overtime.

The allocator always returns a month; when the target does not fit the
capacity the credits are clamped and the reason says so, which the caller's
validation then rejects.
"""

from __future__ import annotations

import math
from datetime import date
from typing import AbstractSet

from app.engine.clock import BREAK_MINUTES, rest_day_row
from app.engine.dates import duration_minutes, format_time, month_days, round2
from app.engine.records import (CREDIT_TOLERANCE, AttendanceRow, DayStatus,
                                EmployeeContext, FallbackSolved, ShiftConfig,
                                total_credits)
from app.engine.solver import partition_month


def fallback_seed_tag(employee: EmployeeContext) -> str:
    return f"fallback-{employee.base_seed}"


def spread_indices(count: int, size: int) -> set[int]:
    """``count`` evenly spaced indices in ``range(size)``.

    Collisions are topped up from the start of the range.
    """
    if count <= 0 or size <= 0:
        return set()
    picked = {min(size - 1, (i * size) // count) for i in range(count)}
    index = 0
    while len(picked) < count and index < size:
        picked.add(index)
        index += 1
    return picked


def allocate_fallback(
    employee: EmployeeContext,
    month: int,
    year: int,
    holidays: AbstractSet[date],
    shift_config: ShiftConfig,
) -> FallbackSolved:
    days = month_days(month, year)
    holiday_dates, weekly_off_dates, open_dates = partition_month(
        days, holidays, employee.weekly_off_day
    )

    target = float(employee.pay_days or 0)
    remaining = min(max(target - len(holiday_dates), 0.0), float(len(open_dates)))
    fraction = remaining - math.floor(remaining)
    half_needed = 1 if abs(fraction - 0.5) <= CREDIT_TOLERANCE else 0
    present_count = math.floor(remaining)
    if present_count + half_needed > len(open_dates):
        present_count = max(0, len(open_dates) - half_needed)

    statuses: dict[date, DayStatus] = {}
    for day in holiday_dates:
        statuses[day] = DayStatus.PAID_LEAVE
    for day in weekly_off_dates:
        statuses[day] = DayStatus.WEEKLY_OFF

    present_slots = spread_indices(present_count, len(open_dates))
    half_assigned = 0
    for index, day in enumerate(open_dates):
        if index in present_slots:
            statuses[day] = DayStatus.PRESENT
        elif half_assigned < half_needed:
            statuses[day] = DayStatus.HALF_DAY
            half_assigned += 1
        else:
            statuses[day] = DayStatus.ABSENT

    slot = shift_config.shifts[employee.shift]
    full_work = max(0, duration_minutes(slot.start, slot.end) - BREAK_MINUTES)
    half_work = full_work // 2
    seed_tag = fallback_seed_tag(employee)

    records: list[AttendanceRow] = []
    for day in days:
        status = statuses[day]
        if status in (DayStatus.PRESENT, DayStatus.HALF_DAY):
            work = full_work if status is DayStatus.PRESENT else half_work
            records.append(
                AttendanceRow(
                    employee_id=employee.employee_id,
                    date=day,
                    status=status,
                    generation_seed=seed_tag,
                    in_time=format_time(slot.start),
                    out_time=format_time(slot.start + BREAK_MINUTES + work),
                    break_minutes=BREAK_MINUTES,
                    work_hours=round2(work / 60),
                    ot_hours=0.0,
                    month=month,
                    year=year,
                )
            )
        else:
            records.append(rest_day_row(employee.employee_id, day, status, seed_tag, month, year))

    credits = total_credits(records)
    if abs(credits - target) <= CREDIT_TOLERANCE:
        reason = "fallback credits-only sequential distribution"
    else:
        reason = f"fallback credits adjusted ({credits:g} vs target {target:g})"
    return FallbackSolved(records, reason)
