"""
In-Out generation service — loads inputs, runs the engine, persists rows.

All queries for a run happen up front; the engine itself is pure. Each
employee's month is written as one commit, keyed on ``(employee_id, date)``,
so a rerun overwrites instead of duplicating.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.engine.context import (EmployeeMaster, MappingWarning, PayrollTarget,
                                build_employee_contexts,
                                normalize_employee_code)
from app.engine.dates import (days_in_month, month_days, parse_hhmm, round2,
                              weekday_name)
from app.engine.generator import solve_employee
from app.engine.records import (AttendanceRow, DayStatus, EmployeeContext,
                                FallbackSolved, Infeasible, ShiftCode,
                                ShiftConfig, ShiftSlot)
from app.models.employee import AttendanceRecord, Employee
from app.models.holiday import ClientHoliday
from app.models.payroll import PayrollRecord
from app.models.shift_config import ClientShiftConfig

logger = logging.getLogger(__name__)

SHIFT_NOT_CONFIGURED = "Shift timing not configured for this client"
NO_SHIFT_ENABLED = "No shift is enabled for this client"
NO_MAPPED_EMPLOYEES = "No payroll mapped employees"


# ── Report types ────────────────────────────────────────────────────
@dataclass
class SuccessEntry:
    employee_id: int
    emp_code: str
    seed: str
    outcome: str  # solved | fallback
    message: str


@dataclass
class FailureEntry:
    employee_id: int
    emp_code: str
    reason: str


@dataclass
class GenerationReport:
    error: str | None = None
    inserted: int = 0
    employees: int = 0
    success_employees: list[SuccessEntry] = field(default_factory=list)
    failed_employees: list[FailureEntry] = field(default_factory=list)
    warnings: list[MappingWarning] = field(default_factory=list)
    days_in_month: int = 0
    fallback_used: bool = False

    @property
    def success_count(self) -> int:
        return len(self.success_employees)

    @property
    def failure_count(self) -> int:
        return len(self.failed_employees)

    @property
    def partial_success(self) -> bool:
        return bool(self.failed_employees)


@dataclass
class GeneratorInputs:
    shift_config: ShiftConfig
    holidays: set[date]
    employees: list[EmployeeContext]
    warnings: list[MappingWarning]
    days_in_month: int


@dataclass
class InputError:
    error: str
    warnings: list[MappingWarning] = field(default_factory=list)


# ── Loaders ─────────────────────────────────────────────────────────
def shift_config_from_row(row: ClientShiftConfig) -> ShiftConfig:
    flags = [
        (ShiftCode.GENERAL, row.general_shift_enabled, row.general_shift_start, row.general_shift_end),
        (ShiftCode.A, row.shift_a_enabled, row.shift_a_start, row.shift_a_end),
        (ShiftCode.B, row.shift_b_enabled, row.shift_b_start, row.shift_b_end),
        (ShiftCode.C, row.shift_c_enabled, row.shift_c_start, row.shift_c_end),
    ]
    return ShiftConfig(
        weekend_type=row.weekend_type,
        enabled_shifts=tuple(code for code, enabled, _, _ in flags if enabled),
        shifts={
            code: ShiftSlot(start=parse_hhmm(start), end=parse_hhmm(end))
            for code, _, start, end in flags
        },
    )


async def load_shift_config(db: AsyncSession, client_id: str) -> ShiftConfig | None:
    result = await db.execute(
        select(ClientShiftConfig).where(ClientShiftConfig.client_id == client_id)
    )
    row = result.scalar_one_or_none()
    return shift_config_from_row(row) if row is not None else None


async def load_holiday_set(db: AsyncSession, client_id: str, year: int) -> set[date]:
    result = await db.execute(
        select(ClientHoliday.date).where(
            ClientHoliday.client_id == client_id, ClientHoliday.year == year
        )
    )
    return {date.fromisoformat(value) for value in result.scalars().all()}


async def load_payroll_targets(
    db: AsyncSession, client_id: str, month: int, year: int
) -> list[PayrollTarget]:
    result = await db.execute(
        select(PayrollRecord)
        .where(
            PayrollRecord.client_id == client_id,
            PayrollRecord.month == month,
            PayrollRecord.year == year,
        )
        .order_by(PayrollRecord.id)
    )
    return [
        PayrollTarget(
            employee_id=row.employee_id,
            employee_code=normalize_employee_code(row.employee_code),
            employee_name=(row.employee_name or "").strip(),
            pay_days=float(row.pay_days or 0),
            ot_hours_target=float(row.ot_hours_target or 0),
        )
        for row in result.scalars().all()
    ]


async def load_employee_masters(db: AsyncSession, client_id: str) -> list[EmployeeMaster]:
    result = await db.execute(
        select(Employee)
        .where(Employee.client_id == client_id)
        .order_by(Employee.created_at.asc(), Employee.id.asc())
    )
    return [
        EmployeeMaster(id=e.id, emp_no=e.emp_no, full_name=e.full_name, gender=e.gender)
        for e in result.scalars().all()
    ]


async def load_generator_inputs(
    db: AsyncSession, client_id: str, month: int, year: int
) -> GeneratorInputs | InputError:
    shift_config = await load_shift_config(db, client_id)
    if shift_config is None:
        return InputError(SHIFT_NOT_CONFIGURED)
    if not shift_config.enabled_shifts:
        return InputError(NO_SHIFT_ENABLED)

    holidays = await load_holiday_set(db, client_id, year)
    payroll_rows = await load_payroll_targets(db, client_id, month, year)
    employees = await load_employee_masters(db, client_id)

    contexts, warnings = build_employee_contexts(
        client_id,
        month,
        year,
        payroll_rows,
        employees,
        shift_config.enabled_shifts,
        settings.GENERAL_SHIFT_GENDERS,
    )
    if not contexts:
        return InputError(NO_MAPPED_EMPLOYEES, warnings)

    return GeneratorInputs(
        shift_config=shift_config,
        holidays=holidays,
        employees=contexts,
        warnings=warnings,
        days_in_month=days_in_month(month, year),
    )


# ── Persistence ─────────────────────────────────────────────────────
async def upsert_attendance(db: AsyncSession, employee_id: int, rows: list[AttendanceRow]) -> int:
    """Write one employee's month in a single commit, overwriting prior rows."""
    iso_dates = [row.date.isoformat() for row in rows]
    result = await db.execute(
        select(AttendanceRecord).where(
            AttendanceRecord.employee_id == employee_id,
            AttendanceRecord.date.in_(iso_dates),
        )
    )
    existing = {record.date: record for record in result.scalars().all()}

    try:
        for row in rows:
            iso = row.date.isoformat()
            record = existing.get(iso)
            if record is None:
                record = AttendanceRecord(employee_id=employee_id, date=iso)
                db.add(record)
            record.status = row.status.value
            record.in_time = row.in_time
            record.out_time = row.out_time
            record.break_minutes = row.break_minutes
            record.work_hours = row.work_hours
            record.ot_hours = row.ot_hours
            record.month = row.month
            record.year = row.year
            record.generation_seed = row.generation_seed
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return len(rows)


# ── Generation ──────────────────────────────────────────────────────
async def generate_in_out_for_client(
    db: AsyncSession, client_id: str, month: int, year: int
) -> GenerationReport:
    """Generate and persist a month of attendance for every payroll employee.

    Configuration problems come back as a report with ``error`` set and
    nothing written; per-employee failures are listed and skipped.
    """
    loaded = await load_generator_inputs(db, client_id, month, year)
    if isinstance(loaded, InputError):
        logger.warning(
            "inout.generate.rejected client_id=%s month=%s year=%s error=%s",
            client_id, month, year, loaded.error,
        )
        return GenerationReport(error=loaded.error, warnings=loaded.warnings)

    logger.info(
        "inout.generate.start client_id=%s month=%s year=%s employees=%d warnings=%d",
        client_id, month, year, len(loaded.employees), len(loaded.warnings),
    )
    report = GenerationReport(
        employees=len(loaded.employees),
        warnings=loaded.warnings,
        days_in_month=loaded.days_in_month,
    )

    for employee in loaded.employees:
        outcome = solve_employee(
            employee,
            month,
            year,
            loaded.holidays,
            loaded.shift_config,
            max_attempts=settings.INOUT_MAX_ATTEMPTS,
            recheck_attempts=settings.INOUT_RECHECK_ATTEMPTS,
            enforce_placement=settings.INOUT_ENFORCE_PLACEMENT_RULES,
        )

        if isinstance(outcome, Infeasible):
            report.failed_employees.append(
                FailureEntry(employee.employee_id, employee.emp_code, outcome.reason)
            )
            logger.warning(
                "inout.employee.failed client_id=%s employee_id=%s emp_code=%s reason=%s",
                client_id, employee.employee_id, employee.emp_code, outcome.reason,
            )
            continue

        report.inserted += await upsert_attendance(db, employee.employee_id, outcome.records)
        is_fallback = isinstance(outcome, FallbackSolved)
        report.fallback_used = report.fallback_used or is_fallback
        seed = outcome.records[0].generation_seed if outcome.records else str(employee.base_seed)
        report.success_employees.append(
            SuccessEntry(
                employee_id=employee.employee_id,
                emp_code=employee.emp_code,
                seed=seed,
                outcome="fallback" if is_fallback else "solved",
                message=outcome.reason,
            )
        )
        logger.info(
            "inout.employee.success client_id=%s employee_id=%s emp_code=%s seed=%s reason=%s",
            client_id, employee.employee_id, employee.emp_code, seed, outcome.reason,
        )

    logger.info(
        "inout.generate.done client_id=%s month=%s year=%s inserted=%d success=%d failed=%d",
        client_id, month, year, report.inserted, report.success_count, report.failure_count,
    )
    return report


# ── Preview ─────────────────────────────────────────────────────────
async def preview_in_out_generator(
    db: AsyncSession, client_id: str, month: int, year: int
) -> dict:
    loaded = await load_generator_inputs(db, client_id, month, year)
    if isinstance(loaded, InputError):
        return {
            "error": loaded.error,
            "days_in_month": days_in_month(month, year),
            "holidays_count": 0,
            "employees": [],
            "warnings": [asdict(w) for w in loaded.warnings],
        }

    month_holidays = [d for d in loaded.holidays if d.month == month]
    return {
        "error": None,
        "days_in_month": loaded.days_in_month,
        "holidays_count": len(month_holidays),
        "employees": [
            {
                "employee_id": e.employee_id,
                "emp_code": e.emp_code,
                "employee_name": e.employee_name,
                "pay_days": e.pay_days,
                "ot_hours_target": e.ot_hours_target,
                "gender": e.gender,
                "shift": e.shift.value,
                "weekly_off": weekday_name(e.weekly_off_day),
                "generation_seed": str(e.base_seed),
            }
            for e in loaded.employees
        ],
        "warnings": [asdict(w) for w in loaded.warnings],
    }


# ── Read side ───────────────────────────────────────────────────────
_COUNTERS = {
    DayStatus.PRESENT.value: "present",
    DayStatus.PAID_LEAVE.value: "pl",
    DayStatus.HALF_DAY.value: "half",
    DayStatus.WEEKLY_OFF.value: "wo",
}


async def load_attendance_view(
    db: AsyncSession, client_id: str, month: int, year: int
) -> dict:
    """Per-employee monthly counts plus a day-by-day grid for reporting."""
    days = [d.day for d in month_days(month, year)]

    emp_result = await db.execute(
        select(Employee)
        .where(Employee.client_id == client_id)
        .order_by(Employee.created_at.asc(), Employee.id.asc())
    )
    employees = emp_result.scalars().all()

    att_result = await db.execute(
        select(AttendanceRecord)
        .join(Employee, AttendanceRecord.employee_id == Employee.id)
        .where(
            Employee.client_id == client_id,
            AttendanceRecord.month == month,
            AttendanceRecord.year == year,
        )
        .order_by(AttendanceRecord.employee_id, AttendanceRecord.date)
    )
    by_employee: dict[int, list[AttendanceRecord]] = defaultdict(list)
    for record in att_result.scalars().all():
        by_employee[record.employee_id].append(record)

    rows = []
    for employee in employees:
        counts = {"present": 0, "pl": 0, "half": 0, "wo": 0, "absent": 0}
        ot_hours = 0.0
        by_day: dict[int, dict] = {}
        for record in by_employee.get(employee.id, []):
            counts[_COUNTERS.get(record.status, "absent")] += 1
            ot_hours += float(record.ot_hours or 0)
            by_day[date.fromisoformat(record.date).day] = {
                "status": record.status,
                "in_time": record.in_time,
                "out_time": record.out_time,
            }

        rows.append(
            {
                "employee_id": employee.id,
                "emp_code": employee.emp_no or "",
                "employee_name": employee.full_name or "",
                **counts,
                "ot_hours": round2(ot_hours),
                "status": "Generated" if by_day else "Not Generated",
                "days": [
                    {"day": day, **by_day.get(day, {"status": "-", "in_time": None, "out_time": None})}
                    for day in days
                ],
            }
        )

    return {"days": days, "rows": rows}


async def load_pay_days_by_code(
    db: AsyncSession, client_id: str, month: int, year: int
) -> dict[str, float]:
    pay_days: dict[str, float] = {}
    for target in await load_payroll_targets(db, client_id, month, year):
        if target.employee_code:
            pay_days[target.employee_code] = target.pay_days
    return pay_days
