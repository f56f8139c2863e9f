"""
Credit-driven day-status solver.

Builds one employee-month whose status credits add up exactly to the payroll
pay-day target:

* holidays are paid leave (``PL``), the weekly-off weekday is ``WO``;
* one further open day is drawn as an extra ``PL``, following the payroll
  sheet convention of one paid leave per employee per month;
* the remaining credit is split into half days and present days, and the
  leftover open days are absent.

The solver is pure. It returns :class:`Solved` or :class:`Infeasible` and
never raises for an unsatisfiable target; the caller decides whether to
reseed or fall back.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date
from typing import AbstractSet

from app.engine.clock import CANONICAL_SHIFT_START, synthesize_month
from app.engine.dates import month_days, weekday_index
from app.engine.records import (CREDIT_TOLERANCE, DayStatus, EmployeeContext,
                                Infeasible, ShiftConfig, Solved)
from app.engine.rng import SeededRandom, shuffle_deterministic

MAX_HALF_DAYS = 3


def has_half_credit(target: float) -> bool:
    """True when ``target`` carries a ``.5`` component."""
    return math.floor(target * 2 + 0.5) % 2 == 1


def partition_month(
    days: Sequence[date],
    holidays: AbstractSet[date],
    weekly_off_day: int,
) -> tuple[list[date], list[date], list[date]]:
    """Split a month into holiday, weekly-off and open dates.

    A holiday that falls on the weekly-off weekday counts as a holiday.
    """
    holiday_dates: list[date] = []
    weekly_off_dates: list[date] = []
    open_dates: list[date] = []
    for day in days:
        if day in holidays:
            holiday_dates.append(day)
        elif weekday_index(day) == weekly_off_day:
            weekly_off_dates.append(day)
        else:
            open_dates.append(day)
    return holiday_dates, weekly_off_dates, open_dates


def choose_day_counts(
    remaining_credits: float,
    half_required: bool,
    capacity: int,
    rng: SeededRandom,
) -> tuple[int, int] | None:
    """Pick ``(half_count, present_count)`` covering ``remaining_credits``.

    With a ``.5`` target exactly one half day is used; otherwise half-day
    counts 0..3 are tried in a shuffled order so employees don't all end up
    with the same mix.
    """
    options = [1] if half_required else shuffle_deterministic(range(MAX_HALF_DAYS + 1), rng)
    for half_count in options:
        if half_count > capacity:
            continue
        present_raw = remaining_credits - half_count * 0.5
        if present_raw < 0:
            continue
        if abs(present_raw - round(present_raw)) > CREDIT_TOLERANCE:
            continue
        present_count = int(round(present_raw))
        if present_count + half_count > capacity:
            continue
        return half_count, present_count
    return None


def solve_month(
    employee: EmployeeContext,
    month: int,
    year: int,
    holidays: AbstractSet[date],
    shift_config: ShiftConfig,
    seed: int,
) -> Solved | Infeasible:
    target = float(employee.pay_days or 0)
    if target < 0:
        return Infeasible(f"Negative pay days target ({target})")

    days = month_days(month, year)
    rng = SeededRandom(seed)
    holiday_dates, weekly_off_dates, open_dates = partition_month(
        days, holidays, employee.weekly_off_day
    )
    if not open_dates:
        return Infeasible("No open working days in month")

    statuses: dict[date, DayStatus] = {}
    for day in holiday_dates:
        statuses[day] = DayStatus.PAID_LEAVE
    for day in weekly_off_dates:
        statuses[day] = DayStatus.WEEKLY_OFF

    extra_paid_leave = shuffle_deterministic(open_dates, rng)[0]
    statuses[extra_paid_leave] = DayStatus.PAID_LEAVE
    assignable = [day for day in open_dates if day != extra_paid_leave]

    remaining = target - (len(holiday_dates) + 1)
    if remaining < 0:
        return Infeasible(
            f"Pay days {target} below paid leave credits ({len(holiday_dates) + 1})"
        )

    counts = choose_day_counts(remaining, has_half_credit(target), len(assignable), rng)
    if counts is None:
        return Infeasible(
            f"No half/present split fits {remaining} credits into {len(assignable)} days"
        )
    half_count, present_count = counts

    shuffled = shuffle_deterministic(assignable, rng)
    for index, day in enumerate(shuffled):
        if index < half_count:
            statuses[day] = DayStatus.HALF_DAY
        elif index < half_count + present_count:
            statuses[day] = DayStatus.PRESENT
        else:
            statuses[day] = DayStatus.ABSENT

    shift_start = CANONICAL_SHIFT_START.get(employee.shift)
    if shift_start is None:
        shift_start = shift_config.shifts[employee.shift].start

    records = synthesize_month(
        employee.employee_id,
        shift_start,
        days,
        statuses,
        rng,
        str(seed),
        month,
        year,
    )
    return Solved(records)
