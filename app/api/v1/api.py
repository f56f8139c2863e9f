"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health, holidays, inout, shift_config

api_router = APIRouter()

# Shift master (per-client shift windows and weekly-off policy)
api_router.include_router(shift_config.router)

# Holiday master
api_router.include_router(holidays.router)

# In-Out generator, preview, attendance view
api_router.include_router(inout.router)

# Health
api_router.include_router(health.router)
