"""
Shift master endpoints — per-client shift windows and weekly-off policy.

One row per client. GET returns it (404 when the client has none yet),
PUT creates or replaces it. At least one shift must stay enabled, since the
In-Out generator refuses to run without one.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_db
from app.models.shift_config import ClientShiftConfig
from app.schemas.master import ShiftConfigRead, ShiftConfigUpdate

router = APIRouter(tags=["shift-config"])
logger = logging.getLogger(__name__)


async def _get_config(db: AsyncSession, client_id: str) -> ClientShiftConfig | None:
    result = await db.execute(
        select(ClientShiftConfig).where(ClientShiftConfig.client_id == client_id)
    )
    return result.scalar_one_or_none()


@router.get("/shift-config/{client_id}", response_model=ShiftConfigRead)
async def get_shift_config(
    client_id: str,
    db: AsyncSession = Depends(get_db),
) -> ClientShiftConfig:
    """Get a client's shift timings."""
    config = await _get_config(db, client_id)
    if config is None:
        raise HTTPException(status_code=404, detail="Shift config not found")
    return config


@router.put("/shift-config/{client_id}", response_model=ShiftConfigRead)
async def upsert_shift_config(
    client_id: str,
    body: ShiftConfigUpdate,
    db: AsyncSession = Depends(get_db),
) -> ClientShiftConfig:
    """Create or replace a client's shift timings and weekly-off policy."""
    config = await _get_config(db, client_id)
    if config is None:
        config = ClientShiftConfig(client_id=client_id)
        db.add(config)

    for field, value in body.model_dump().items():
        setattr(config, field, value)

    await db.commit()
    await db.refresh(config)
    logger.info("Shift config saved for client %s: %s", client_id, body.model_dump())
    return config
