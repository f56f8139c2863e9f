"""
In-Out generator endpoints.

- POST /in-out/generate    run the generator for a client/month/year
- GET  /in-out/preview     derived shift / weekly-off per payroll employee
- GET  /in-out/attendance  generated month, aggregated per employee
- GET  /in-out/paydays     payroll pay days keyed by employee code

Configuration problems (no shift config, no shift enabled, nobody mapped
from payroll) answer 400 and write nothing. Individual employees that
cannot be solved are reported in the 200 body instead.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_db
from app.schemas.attendance import (AttendanceViewResponse, GenerateRequest,
                                    GenerationReportRead, PayDaysResponse,
                                    PreviewResponse)
from app.services.inout import (generate_in_out_for_client,
                                load_attendance_view, load_pay_days_by_code,
                                preview_in_out_generator)

router = APIRouter(prefix="/in-out", tags=["in-out"])
logger = logging.getLogger(__name__)


@router.post(
    "/generate",
    response_model=GenerationReportRead,
    responses={400: {"description": "Generator configuration error"}},
)
async def generate(
    body: GenerateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Generate (or regenerate) attendance for every payroll employee."""
    report = await generate_in_out_for_client(db, body.client_id, body.month, body.year)
    if report.error is not None:
        return JSONResponse(
            status_code=400,
            content={
                "detail": report.error,
                "success": False,
                "missing_employee_payroll": [
                    asdict(w) for w in report.warnings
                ],
            },
        )

    message = (
        "Attendance generated with partial success. Some employees failed."
        if report.partial_success
        else "Attendance generated successfully"
    )
    return GenerationReportRead(
        message=message,
        inserted=report.inserted,
        employees=report.employees,
        success_count=report.success_count,
        failure_count=report.failure_count,
        success_employees=[asdict(e) for e in report.success_employees],
        failed_employees=[asdict(e) for e in report.failed_employees],
        warnings=[asdict(w) for w in report.warnings],
        days_in_month=report.days_in_month,
        partial_success=report.partial_success,
        fallback_used=report.fallback_used,
    )


@router.get("/preview", response_model=PreviewResponse)
async def preview(
    client_id: str = Query(..., min_length=1),
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2000, le=2100),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Show how each payroll employee would be placed, without writing."""
    return await preview_in_out_generator(db, client_id, month, year)


@router.get("/attendance", response_model=AttendanceViewResponse)
async def attendance_view(
    client_id: str = Query(..., min_length=1),
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2000, le=2100),
    db: AsyncSession = Depends(get_db),
) -> dict:
    return await load_attendance_view(db, client_id, month, year)


@router.get("/paydays", response_model=PayDaysResponse)
async def pay_days(
    client_id: str = Query(..., min_length=1),
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2000, le=2100),
    db: AsyncSession = Depends(get_db),
) -> PayDaysResponse:
    return PayDaysResponse(
        month=month,
        year=year,
        pay_days_by_code=await load_pay_days_by_code(db, client_id, month, year),
    )
