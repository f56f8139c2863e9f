"""
Holiday master endpoints — per-client, per-year holiday calendar.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_db
from app.models.holiday import ClientHoliday
from app.schemas.attendance import DeleteResponse
from app.schemas.master import HolidayCreate, HolidayRead

router = APIRouter(tags=["holidays"])
logger = logging.getLogger(__name__)


@router.get("/holidays", response_model=list[HolidayRead])
async def list_holidays(
    client_id: str = Query(..., min_length=1),
    year: int = Query(..., ge=2000, le=2100),
    db: AsyncSession = Depends(get_db),
) -> list[ClientHoliday]:
    """List a client's holidays for one year, oldest first."""
    result = await db.execute(
        select(ClientHoliday)
        .where(ClientHoliday.client_id == client_id, ClientHoliday.year == year)
        .order_by(ClientHoliday.date.asc())
    )
    return list(result.scalars().all())


@router.post("/holidays", response_model=HolidayRead, status_code=201)
async def create_holiday(
    body: HolidayCreate,
    db: AsyncSession = Depends(get_db),
) -> ClientHoliday:
    """Add a holiday. The date must fall in ``year`` and be unique per client."""
    if body.date.year != body.year:
        raise HTTPException(status_code=400, detail="Date must belong to selected year")

    iso = body.date.isoformat()
    existing = await db.execute(
        select(ClientHoliday.id).where(
            ClientHoliday.client_id == body.client_id, ClientHoliday.date == iso
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=400, detail="Holiday date already exists for this client")

    holiday = ClientHoliday(client_id=body.client_id, date=iso, name=body.name, year=body.year)
    db.add(holiday)
    await db.commit()
    await db.refresh(holiday)
    logger.info("Holiday added for client %s: %s (%s)", body.client_id, iso, body.name)
    return holiday


@router.delete("/holidays/{holiday_id}", response_model=DeleteResponse)
async def delete_holiday(
    holiday_id: int,
    db: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    holiday = await db.get(ClientHoliday, holiday_id)
    if holiday is None:
        raise HTTPException(status_code=404, detail="Holiday not found")
    await db.delete(holiday)
    await db.commit()
    logger.info("Holiday %s deleted", holiday_id)
    return DeleteResponse(success=True, message="Holiday deleted")
