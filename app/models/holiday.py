"""
ClientHoliday model — per-client holiday calendar.

Holidays are credited as paid leave (``PL``) by the attendance generator
and take precedence over the employee's weekly-off day.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (Column, DateTime, Index, Integer, String,
                        UniqueConstraint)

from app.db.base import Base


class ClientHoliday(Base):
    __tablename__ = "client_holidays"
    __table_args__ = (
        UniqueConstraint("client_id", "date", name="uq_holiday_client_date"),
        Index("ix_holiday_client_year", "client_id", "year"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    client_id: str = Column(String(64), nullable=False)  # type: ignore[assignment]
    date: str = Column(String(10), nullable=False)  # type: ignore[assignment]  # YYYY-MM-DD
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    year: int = Column(Integer, nullable=False)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
