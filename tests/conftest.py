"""
Shared test fixtures for the In-Out generator test suite.

Each test gets a fresh in-memory SQLite database (aiosqlite + AsyncSession).
"""

import os
import sys
from datetime import date
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
# CORS fix (JSON format)
os.environ["CORS_ORIGINS"] = '["*"]'

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.v1.deps import get_db
from app.db.base import Base
from app.engine.records import EmployeeContext, ShiftCode, ShiftConfig, ShiftSlot
from app.main import app


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create all tables on a private engine and drop them afterwards."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


# ── Engine fixtures ─────────────────────────────────────────────────
# June 2025 starts on a Sunday: weekly-offs fall on 1, 8, 15, 22 and 29.
JUNE_HOLIDAYS = {date(2025, 6, 5), date(2025, 6, 10), date(2025, 6, 17), date(2025, 6, 26)}


@pytest.fixture
def shift_config() -> ShiftConfig:
    return ShiftConfig(
        weekend_type="SUN",
        enabled_shifts=(ShiftCode.GENERAL,),
        shifts={
            ShiftCode.GENERAL: ShiftSlot(start=570, end=1110),
            ShiftCode.A: ShiftSlot(start=480, end=960),
            ShiftCode.B: ShiftSlot(start=960, end=0),
            ShiftCode.C: ShiftSlot(start=0, end=480),
        },
    )


@pytest.fixture
def make_employee():
    def _make(pay_days: float = 20.5, shift: ShiftCode = ShiftCode.GENERAL, weekly_off_day: int = 0):
        return EmployeeContext(
            employee_id=1,
            emp_code="E001",
            employee_name="Asha",
            pay_days=pay_days,
            ot_hours_target=0.0,
            gender="female",
            shift=shift,
            weekly_off_day=weekly_off_day,
            base_seed=123456789,
        )

    return _make


@pytest.fixture
def june_holidays() -> set[date]:
    return set(JUNE_HOLIDAYS)


@pytest.fixture
def shift_body() -> dict:
    """Shift master payload with only the General shift enabled."""
    return {
        "weekend_type": "SUN",
        "general_shift_enabled": True,
        "general_shift_start": "09:30",
        "general_shift_end": "18:30",
        "shift_a_enabled": False,
        "shift_a_start": "08:00",
        "shift_a_end": "16:00",
        "shift_b_enabled": False,
        "shift_b_start": "16:00",
        "shift_b_end": "00:00",
        "shift_c_enabled": False,
        "shift_c_start": "00:00",
        "shift_c_end": "08:00",
    }
