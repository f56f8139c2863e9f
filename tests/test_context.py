"""Tests for payroll mapping and shift / weekly-off derivation."""

from app.engine.context import (MISSING_EMPLOYEE_REASON,
                                UNMAPPED_PAYROLL_REASON, EmployeeMaster,
                                PayrollTarget, build_employee_contexts,
                                choose_shift, choose_weekly_off_day,
                                normalize_employee_code)
from app.engine.records import ShiftCode

GENDERS = ["female", "f"]


def _payroll(employee_id, code="E1", pay_days=20.0):
    return PayrollTarget(
        employee_id=employee_id,
        employee_code=code,
        employee_name=f"Name {code}",
        pay_days=pay_days,
        ot_hours_target=0.0,
    )


def test_normalize_employee_code():
    assert normalize_employee_code(" 0042a ") == "42A"
    assert normalize_employee_code(None) == ""
    assert normalize_employee_code(7) == "7"


def test_female_pinned_to_general_with_sunday_off():
    shift = choose_shift("acme", 1, "Female", [ShiftCode.B, ShiftCode.C], GENDERS)
    assert shift is ShiftCode.GENERAL
    assert choose_weekly_off_day("acme", 1, "F", ShiftCode.GENERAL, 6, 2025, GENDERS) == 0


def test_shift_drawn_from_enabled_shifts():
    shift = choose_shift("acme", 1, "male", [ShiftCode.B], GENDERS)
    assert shift is ShiftCode.B
    assert choose_shift("acme", 1, "male", [], GENDERS) is ShiftCode.GENERAL


def test_general_shift_gets_sunday_off():
    assert choose_weekly_off_day("acme", 5, "male", ShiftCode.GENERAL, 6, 2025, GENDERS) == 0


def test_weekly_off_is_deterministic():
    first = choose_weekly_off_day("acme", 5, "male", ShiftCode.A, 6, 2025, GENDERS)
    second = choose_weekly_off_day("acme", 5, "male", ShiftCode.A, 6, 2025, GENDERS)
    assert first == second
    assert 0 <= first <= 6


def test_unmapped_and_missing_rows_become_warnings():
    employees = [EmployeeMaster(id=1, emp_no="E1", full_name="Asha", gender="female")]
    rows = [_payroll(1, "E1"), _payroll(None, "E2"), _payroll(99, "E3")]

    contexts, warnings = build_employee_contexts(
        "acme", 6, 2025, rows, employees, (ShiftCode.GENERAL,), GENDERS
    )

    assert [c.employee_id for c in contexts] == [1]
    assert [w.reason for w in warnings] == [UNMAPPED_PAYROLL_REASON, MISSING_EMPLOYEE_REASON]
    assert warnings[0].employee_id is None
    assert warnings[1].employee_code == "E3"


def test_context_carries_payroll_target_and_seed():
    employees = [EmployeeMaster(id=3, emp_no="E3", full_name="Ravi", gender="male")]
    contexts, _ = build_employee_contexts(
        "acme", 6, 2025, [_payroll(3, "E3", 21.5)], employees, (ShiftCode.A,), GENDERS
    )
    ctx = contexts[0]
    assert ctx.pay_days == 21.5
    assert ctx.shift is ShiftCode.A
    assert ctx.emp_code == "E3"

    again, _ = build_employee_contexts(
        "acme", 6, 2025, [_payroll(3, "E3", 21.5)], employees, (ShiftCode.A,), GENDERS
    )
    assert again[0].base_seed == ctx.base_seed
    assert again[0].weekly_off_day == ctx.weekly_off_day
