"""Tests for the In-Out generate / preview / attendance endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.employee import AttendanceRecord, Employee
from app.models.payroll import PayrollRecord
from app.models.shift_config import ClientShiftConfig

CLIENT = "acme"
JUNE = {"client_id": CLIENT, "month": 6, "year": 2025}


@pytest.fixture
def seed_client(async_client: AsyncClient, db_session: AsyncSession, shift_body):
    """Shift config + June holidays over HTTP, employees and payroll directly."""

    async def _seed(payroll: list[tuple[str, str | None, float]]) -> list[Employee]:
        resp = await async_client.put(f"/api/v1/shift-config/{CLIENT}", json=shift_body)
        assert resp.status_code == 200
        for day in ("2025-06-05", "2025-06-10", "2025-06-17", "2025-06-26", "2025-07-04"):
            resp = await async_client.post(
                "/api/v1/holidays",
                json={"client_id": CLIENT, "date": day, "name": f"Holiday {day}", "year": 2025},
            )
            assert resp.status_code == 201

        employees = []
        for code, gender, _ in payroll:
            employee = Employee(client_id=CLIENT, emp_no=code, full_name=f"Emp {code}", gender=gender)
            db_session.add(employee)
            employees.append(employee)
        await db_session.flush()

        for employee, (code, _, pay_days) in zip(employees, payroll):
            db_session.add(
                PayrollRecord(
                    client_id=CLIENT,
                    month=6,
                    year=2025,
                    employee_id=employee.id,
                    employee_code=code,
                    employee_name=employee.full_name,
                    pay_days=pay_days,
                )
            )
        await db_session.commit()
        return employees

    return _seed


async def _attendance_count(db_session: AsyncSession) -> int:
    result = await db_session.execute(select(func.count()).select_from(AttendanceRecord))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_generate_writes_full_month(
    async_client: AsyncClient, db_session: AsyncSession, seed_client
):
    """A feasible payroll target should produce one row per calendar day."""
    await seed_client([("E001", "female", 20.5)])

    resp = await async_client.post("/api/v1/in-out/generate", json=JUNE)
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "Attendance generated successfully"
    assert data["inserted"] == 30
    assert data["employees"] == 1
    assert data["success_count"] == 1
    assert data["failure_count"] == 0
    assert data["days_in_month"] == 30
    assert data["partial_success"] is False
    assert data["success_employees"][0]["outcome"] == "solved"
    assert await _attendance_count(db_session) == 30


@pytest.mark.asyncio
async def test_rerun_overwrites_instead_of_duplicating(
    async_client: AsyncClient, db_session: AsyncSession, seed_client
):
    """Generating twice for the same month should upsert, not append."""
    await seed_client([("E001", "female", 20.5)])

    first = await async_client.post("/api/v1/in-out/generate", json=JUNE)
    view_one = await async_client.get("/api/v1/in-out/attendance", params=JUNE)
    second = await async_client.post("/api/v1/in-out/generate", json=JUNE)
    view_two = await async_client.get("/api/v1/in-out/attendance", params=JUNE)

    assert first.status_code == second.status_code == 200
    assert await _attendance_count(db_session) == 30
    assert first.json()["success_employees"][0]["seed"] == second.json()["success_employees"][0]["seed"]
    assert view_one.json()["rows"] == view_two.json()["rows"]


@pytest.mark.asyncio
async def test_partial_failure_keeps_good_employees(
    async_client: AsyncClient, db_session: AsyncSession, seed_client
):
    """One unreachable target should not block the rest of the run."""
    employees = await seed_client([("E001", "female", 20.5), ("E002", "male", 40)])

    resp = await async_client.post("/api/v1/in-out/generate", json=JUNE)
    assert resp.status_code == 200
    data = resp.json()
    assert data["partial_success"] is True
    assert data["message"] == "Attendance generated with partial success. Some employees failed."
    assert data["inserted"] == 30
    assert data["failed_employees"][0]["employee_id"] == employees[1].id
    assert "Credit mismatch" in data["failed_employees"][0]["reason"]

    result = await db_session.execute(
        select(func.count())
        .select_from(AttendanceRecord)
        .where(AttendanceRecord.employee_id == employees[1].id)
    )
    assert result.scalar_one() == 0


@pytest.mark.asyncio
async def test_unmapped_payroll_rows_are_warnings(
    async_client: AsyncClient, db_session: AsyncSession, seed_client
):
    await seed_client([("E001", "female", 20.5)])
    db_session.add(
        PayrollRecord(
            client_id=CLIENT, month=6, year=2025, employee_id=None,
            employee_code="X9", employee_name="Ghost", pay_days=10,
        )
    )
    await db_session.commit()

    resp = await async_client.post("/api/v1/in-out/generate", json=JUNE)
    assert resp.status_code == 200
    warnings = resp.json()["warnings"]
    assert len(warnings) == 1
    assert warnings[0]["employee_code"] == "X9"
    assert warnings[0]["reason"] == "Payroll row is not mapped to employee master"


@pytest.mark.asyncio
async def test_generate_without_shift_config(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/in-out/generate", json=JUNE)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Shift timing not configured for this client"
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_generate_with_no_enabled_shift_writes_nothing(
    async_client: AsyncClient, db_session: AsyncSession
):
    employee = Employee(client_id=CLIENT, emp_no="E001", full_name="Asha", gender="female")
    db_session.add(employee)
    db_session.add(
        ClientShiftConfig(
            client_id=CLIENT,
            general_shift_enabled=False,
            shift_a_enabled=False,
            shift_b_enabled=False,
            shift_c_enabled=False,
        )
    )
    await db_session.flush()
    db_session.add(
        PayrollRecord(
            client_id=CLIENT, month=6, year=2025, employee_id=employee.id,
            employee_code="E001", employee_name="Asha", pay_days=20,
        )
    )
    await db_session.commit()

    resp = await async_client.post("/api/v1/in-out/generate", json=JUNE)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "No shift is enabled for this client"
    assert await _attendance_count(db_session) == 0


@pytest.mark.asyncio
async def test_generate_without_mapped_payroll(async_client: AsyncClient, shift_body):
    await async_client.put(f"/api/v1/shift-config/{CLIENT}", json=shift_body)
    resp = await async_client.post("/api/v1/in-out/generate", json=JUNE)
    assert resp.status_code == 400
    data = resp.json()
    assert data["detail"] == "No payroll mapped employees"
    assert data["missing_employee_payroll"] == []


@pytest.mark.asyncio
async def test_generate_rejects_bad_month(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/v1/in-out/generate", json={"client_id": CLIENT, "month": 13, "year": 2025}
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_preview_shows_shift_and_weekly_off(
    async_client: AsyncClient, db_session: AsyncSession, seed_client
):
    await seed_client([("E001", "female", 20.5)])

    resp = await async_client.get("/api/v1/in-out/preview", params=JUNE)
    assert resp.status_code == 200
    data = resp.json()
    assert data["error"] is None
    assert data["days_in_month"] == 30
    assert data["holidays_count"] == 4
    employee = data["employees"][0]
    assert employee["shift"] == "G"
    assert employee["weekly_off"] == "SUN"
    assert employee["pay_days"] == 20.5
    assert await _attendance_count(db_session) == 0


@pytest.mark.asyncio
async def test_attendance_view_counts(
    async_client: AsyncClient, db_session: AsyncSession, seed_client
):
    employees = await seed_client([("E001", "female", 20.5)])
    idle = Employee(client_id=CLIENT, emp_no="E002", full_name="Idle", gender="male")
    db_session.add(idle)
    await db_session.commit()

    await async_client.post("/api/v1/in-out/generate", json=JUNE)
    resp = await async_client.get("/api/v1/in-out/attendance", params=JUNE)
    assert resp.status_code == 200
    data = resp.json()
    assert data["days"] == list(range(1, 31))

    rows = {row["employee_id"]: row for row in data["rows"]}
    generated = rows[employees[0].id]
    assert generated["status"] == "Generated"
    assert generated["present"] == 15
    assert generated["pl"] == 5
    assert generated["half"] == 1
    assert generated["wo"] == 5
    assert generated["absent"] == 4
    assert generated["days"][0]["status"] == "WO"

    missing = rows[idle.id]
    assert missing["status"] == "Not Generated"
    assert all(cell["status"] == "-" for cell in missing["days"])


@pytest.mark.asyncio
async def test_pay_days_keyed_by_normalized_code(
    async_client: AsyncClient, db_session: AsyncSession, seed_client
):
    await seed_client([("007", "female", 21.0)])

    resp = await async_client.get("/api/v1/in-out/paydays", params=JUNE)
    assert resp.status_code == 200
    assert resp.json()["pay_days_by_code"] == {"7": 21.0}


@pytest.mark.asyncio
async def test_weekend_policy_does_not_override_derived_weekly_off(
    async_client: AsyncClient, seed_client, shift_body
):
    """A fixed SAT policy is kept on the shift master, General staff still rest on Sunday."""
    await seed_client([("E001", "female", 20.5)])
    resp = await async_client.put(
        f"/api/v1/shift-config/{CLIENT}", json={**shift_body, "weekend_type": "SAT"}
    )
    assert resp.json()["weekend_type"] == "SAT"

    resp = await async_client.get("/api/v1/in-out/preview", params=JUNE)
    assert resp.json()["employees"][0]["weekly_off"] == "SUN"
