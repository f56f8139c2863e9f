"""
Per-employee context derivation: shift, weekly-off day and base seed.

Payroll rows are the objective for a run; each one is matched against the
employee master. Rows that cannot be matched become warnings instead of
failing the run. Matched employees get a seeded shift and weekly-off day,
unless a gender rule pins them to the General shift with Sunday off.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from app.engine.dates import SUNDAY
from app.engine.records import EmployeeContext, ShiftCode
from app.engine.rng import SeededRandom, hash_seed, seed_key

UNMAPPED_PAYROLL_REASON = "Payroll row is not mapped to employee master"
MISSING_EMPLOYEE_REASON = "Mapped employee not found in employee master"


@dataclass(frozen=True)
class PayrollTarget:
    employee_id: int | None
    employee_code: str
    employee_name: str
    pay_days: float
    ot_hours_target: float


@dataclass(frozen=True)
class EmployeeMaster:
    id: int
    emp_no: str | None
    full_name: str | None
    gender: str | None


@dataclass(frozen=True)
class MappingWarning:
    employee_id: int | None
    employee_code: str
    employee_name: str
    reason: str


def normalize_employee_code(value: object) -> str:
    """Trim, upper-case and strip leading zeros (``"0042a"`` → ``"42A"``)."""
    if value is None:
        return ""
    return str(value).strip().upper().lstrip("0")


def is_general_shift_gender(gender: str | None, general_genders: Iterable[str]) -> bool:
    return (gender or "").strip().lower() in set(general_genders)


def choose_shift(
    client_id: str,
    employee_id: int,
    gender: str | None,
    enabled_shifts: Sequence[ShiftCode],
    general_genders: Iterable[str],
) -> ShiftCode:
    if is_general_shift_gender(gender, general_genders):
        return ShiftCode.GENERAL
    if not enabled_shifts:
        return ShiftCode.GENERAL
    rng = SeededRandom(hash_seed(seed_key("shift", client_id, employee_id)))
    return rng.choice(enabled_shifts)


def choose_weekly_off_day(
    client_id: str,
    employee_id: int,
    gender: str | None,
    shift: ShiftCode,
    month: int,
    year: int,
    general_genders: Iterable[str],
) -> int:
    if is_general_shift_gender(gender, general_genders):
        return SUNDAY
    if shift is ShiftCode.GENERAL:
        return SUNDAY
    rng = SeededRandom(hash_seed(seed_key("wo", client_id, employee_id, month, year)))
    return rng.randint(0, 6)


def base_seed_for(client_id: str, employee_id: int, month: int, year: int) -> int:
    return hash_seed(seed_key(client_id, employee_id, month, year))


def build_employee_contexts(
    client_id: str,
    month: int,
    year: int,
    payroll_rows: Sequence[PayrollTarget],
    employees: Sequence[EmployeeMaster],
    enabled_shifts: Sequence[ShiftCode],
    general_genders: Iterable[str],
) -> tuple[list[EmployeeContext], list[MappingWarning]]:
    """Match payroll rows to the employee master and derive a context each."""
    general_genders = [g.lower() for g in general_genders]
    by_id = {employee.id: employee for employee in employees}
    contexts: list[EmployeeContext] = []
    warnings: list[MappingWarning] = []

    for payroll in payroll_rows:
        if payroll.employee_id is None:
            warnings.append(
                MappingWarning(
                    employee_id=None,
                    employee_code=payroll.employee_code,
                    employee_name=payroll.employee_name,
                    reason=UNMAPPED_PAYROLL_REASON,
                )
            )
            continue

        employee = by_id.get(payroll.employee_id)
        if employee is None:
            warnings.append(
                MappingWarning(
                    employee_id=payroll.employee_id,
                    employee_code=payroll.employee_code,
                    employee_name=payroll.employee_name,
                    reason=MISSING_EMPLOYEE_REASON,
                )
            )
            continue

        shift = choose_shift(client_id, employee.id, employee.gender, enabled_shifts, general_genders)
        contexts.append(
            EmployeeContext(
                employee_id=employee.id,
                emp_code=payroll.employee_code or (employee.emp_no or "").strip(),
                employee_name=payroll.employee_name or (employee.full_name or "").strip(),
                pay_days=payroll.pay_days,
                ot_hours_target=payroll.ot_hours_target,
                gender=employee.gender,
                shift=shift,
                weekly_off_day=choose_weekly_off_day(
                    client_id, employee.id, employee.gender, shift, month, year, general_genders
                ),
                base_seed=base_seed_for(client_id, employee.id, month, year),
            )
        )

    return contexts, warnings
