"""Pydantic schemas for In-Out generation, preview and the attendance view."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


# ── Generate ────────────────────────────────────────────────────────
class GenerateRequest(BaseModel):
    client_id: str
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=2000, le=2100)

    @field_validator("client_id")
    @classmethod
    def _client_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("client_id must not be empty")
        return v


class MappingWarningRead(BaseModel):
    employee_id: int | None
    employee_code: str
    employee_name: str
    reason: str

    model_config = {"from_attributes": True}


class SuccessEmployee(BaseModel):
    employee_id: int
    emp_code: str
    seed: str
    outcome: str  # solved | fallback
    message: str

    model_config = {"from_attributes": True}


class FailedEmployee(BaseModel):
    employee_id: int
    emp_code: str
    reason: str

    model_config = {"from_attributes": True}


class GenerationReportRead(BaseModel):
    success: bool = True
    message: str
    inserted: int
    employees: int
    success_count: int
    failure_count: int
    success_employees: list[SuccessEmployee]
    failed_employees: list[FailedEmployee]
    warnings: list[MappingWarningRead]
    days_in_month: int
    partial_success: bool
    fallback_used: bool

    model_config = {"from_attributes": True}


# ── Preview ─────────────────────────────────────────────────────────
class PreviewEmployee(BaseModel):
    employee_id: int
    emp_code: str
    employee_name: str
    pay_days: float
    ot_hours_target: float
    gender: str | None
    shift: str
    weekly_off: str
    generation_seed: str


class PreviewResponse(BaseModel):
    error: str | None = None
    days_in_month: int
    holidays_count: int
    employees: list[PreviewEmployee]
    warnings: list[MappingWarningRead]


# ── Attendance view ─────────────────────────────────────────────────
class AttendanceDayCell(BaseModel):
    day: int
    status: str
    in_time: str | None = None
    out_time: str | None = None


class AttendanceViewRow(BaseModel):
    employee_id: int
    emp_code: str
    employee_name: str
    present: int
    pl: int
    half: int
    wo: int
    absent: int
    ot_hours: float
    status: str  # Generated | Not Generated
    days: list[AttendanceDayCell]


class AttendanceViewResponse(BaseModel):
    days: list[int]
    rows: list[AttendanceViewRow]


class PayDaysResponse(BaseModel):
    month: int
    year: int
    pay_days_by_code: dict[str, float]


# ── Health ─────────────────────────────────────────────────────────
class HealthResponse(BaseModel):
    db: bool
    redis: bool


# ── Generic ────────────────────────────────────────────────────────
class DeleteResponse(BaseModel):
    success: bool
    message: str
