"""
Per-employee solve loop: reseeded retries, fallback, and a final recheck.

State per employee: ``Pending → Solving (attempts 1..N) → Solved |
FallbackSolved | Failed``. The loop is pure; persistence and reporting
happen in :mod:`app.services.inout`.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import AbstractSet

from app.engine.fallback import allocate_fallback
from app.engine.records import (AttendanceRow, EmployeeContext, FallbackSolved,
                                Infeasible, ShiftConfig, SolveOutcome, Solved)
from app.engine.rng import hash_seed, seed_key
from app.engine.solver import solve_month
from app.engine.validation import check_placement, validate_records

logger = logging.getLogger(__name__)


def attempt_seed(employee: EmployeeContext, tag: str, attempt: int) -> int:
    return hash_seed(seed_key(employee.base_seed, tag, attempt))


def _accept(
    records: list[AttendanceRow],
    target: float,
    holidays: AbstractSet[date],
    enforce_placement: bool,
) -> str | None:
    error = validate_records(records, target)
    if error is None and enforce_placement:
        error = check_placement(records, set(holidays))
    return error


def _search(
    employee: EmployeeContext,
    month: int,
    year: int,
    holidays: AbstractSet[date],
    shift_config: ShiftConfig,
    tag: str,
    attempts: range,
    enforce_placement: bool,
) -> tuple[Solved | None, str]:
    reason = "Validation failed"
    for attempt in attempts:
        result = solve_month(
            employee, month, year, holidays, shift_config, attempt_seed(employee, tag, attempt)
        )
        if isinstance(result, Infeasible):
            reason = f"No valid placement in attempt {attempt + 1}: {result.reason}"
            continue
        error = _accept(result.records, employee.pay_days, holidays, enforce_placement)
        if error is None:
            return Solved(result.records, result.reason, attempts=attempt + 1), reason
        reason = f"Attempt {attempt + 1} rejected: {error}"
    return None, reason


def solve_employee(
    employee: EmployeeContext,
    month: int,
    year: int,
    holidays: AbstractSet[date],
    shift_config: ShiftConfig,
    *,
    max_attempts: int = 20,
    recheck_attempts: int = 20,
    enforce_placement: bool = False,
) -> SolveOutcome:
    """Produce one employee-month, or explain why none could be produced."""
    outcome: Solved | FallbackSolved | None
    outcome, reason = _search(
        employee, month, year, holidays, shift_config,
        "attempt", range(max_attempts), enforce_placement,
    )

    if outcome is None:
        logger.warning(
            "inout.employee.fallback employee_id=%s emp_code=%s reason=%s",
            employee.employee_id,
            employee.emp_code,
            reason,
        )
        outcome = allocate_fallback(employee, month, year, holidays, shift_config)
        outcome = FallbackSolved(outcome.records, outcome.reason, attempts=max_attempts)

    error = validate_records(outcome.records, employee.pay_days)
    if error is None:
        return outcome

    logger.warning(
        "inout.employee.invalid employee_id=%s emp_code=%s error=%s",
        employee.employee_id,
        employee.emp_code,
        error,
    )
    rechecked, _ = _search(
        employee, month, year, holidays, shift_config,
        "recheck", range(max_attempts, max_attempts + recheck_attempts), enforce_placement,
    )
    if rechecked is not None:
        return rechecked
    return Infeasible(error, attempts=max_attempts + recheck_attempts)
