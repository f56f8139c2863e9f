"""
Value types passed between the generator stages.

Everything here is immutable and free of I/O; the service layer converts
ORM rows into these before the engine runs and back afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class DayStatus(str, Enum):
    PRESENT = "P"
    ABSENT = "A"
    HALF_DAY = "H"
    PAID_LEAVE = "PL"
    WEEKLY_OFF = "WO"


class ShiftCode(str, Enum):
    GENERAL = "G"
    A = "A"
    B = "B"
    C = "C"


STATUS_CREDITS: dict[DayStatus, float] = {
    DayStatus.PRESENT: 1.0,
    DayStatus.PAID_LEAVE: 1.0,
    DayStatus.HALF_DAY: 0.5,
    DayStatus.ABSENT: 0.0,
    DayStatus.WEEKLY_OFF: 0.0,
}

WORKING_STATUSES = frozenset({DayStatus.PRESENT, DayStatus.HALF_DAY})

CREDIT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class ShiftSlot:
    start: int  # minutes after midnight
    end: int


@dataclass(frozen=True)
class ShiftConfig:
    weekend_type: str  # shift master policy only; weekly-offs are derived per employee
    enabled_shifts: tuple[ShiftCode, ...]
    shifts: dict[ShiftCode, ShiftSlot]


@dataclass(frozen=True)
class EmployeeContext:
    employee_id: int
    emp_code: str
    employee_name: str
    pay_days: float
    ot_hours_target: float
    gender: str | None
    shift: ShiftCode
    weekly_off_day: int
    base_seed: int


@dataclass(frozen=True)
class AttendanceRow:
    employee_id: int
    date: date
    status: DayStatus
    generation_seed: str
    in_time: str | None
    out_time: str | None
    break_minutes: int
    work_hours: float
    ot_hours: float
    month: int
    year: int

    @property
    def credit(self) -> float:
        return STATUS_CREDITS[self.status]


def total_credits(rows: list[AttendanceRow]) -> float:
    return sum(row.credit for row in rows)


# ── Solve outcomes ──────────────────────────────────────────────────
@dataclass(frozen=True)
class Solved:
    records: list[AttendanceRow]
    reason: str = "credit-driven exact match"
    attempts: int = 1


@dataclass(frozen=True)
class FallbackSolved:
    records: list[AttendanceRow]
    reason: str
    attempts: int = 0


@dataclass(frozen=True)
class Infeasible:
    reason: str
    attempts: int = 0


SolveOutcome = Solved | FallbackSolved | Infeasible
