"""
PayrollRecord model — monthly payroll output per employee.

Produced by the upstream payroll step; the attendance generator only reads
``pay_days`` and ``ot_hours_target`` from it.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String

from app.db.base import Base


class PayrollRecord(Base):
    __tablename__ = "payroll_records"
    __table_args__ = (Index("ix_payroll_client_month_year", "client_id", "month", "year"),)

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    client_id: str = Column(String(64), nullable=False)  # type: ignore[assignment]
    month: int = Column(Integer, nullable=False)  # type: ignore[assignment]
    year: int = Column(Integer, nullable=False)  # type: ignore[assignment]
    employee_id: int | None = Column(Integer, ForeignKey("employees.id"), nullable=True)  # type: ignore[assignment]
    employee_code: str | None = Column(String(64), nullable=True)  # type: ignore[assignment]
    employee_name: str | None = Column(String(200), nullable=True)  # type: ignore[assignment]
    pay_days: float = Column(Float, nullable=False, default=0.0)  # type: ignore[assignment]
    ot_hours_target: float = Column(Float, nullable=False, default=0.0)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
