"""
Employee master & generated attendance models — core business domain.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (Boolean, Column, DateTime, Float, ForeignKey, Index,
                        Integer, String, UniqueConstraint)
from sqlalchemy.orm import relationship

from app.db.base import Base


class Employee(Base):
    __tablename__ = "employees"
    __table_args__ = (Index("ix_employees_client_created", "client_id", "created_at"),)

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    client_id: str = Column(String(64), nullable=False, index=True)  # type: ignore[assignment]
    emp_no: str | None = Column(String(64), nullable=True)  # type: ignore[assignment]
    full_name: str | None = Column(String(200), nullable=True)  # type: ignore[assignment]
    gender: str | None = Column(String(20), nullable=True)  # type: ignore[assignment]
    type_of_employment: str | None = Column(String(50), nullable=True)  # type: ignore[assignment]
    is_active: bool = Column(Boolean, default=True, server_default="true")  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    attendances = relationship(
        "AttendanceRecord",
        back_populates="employee",
        cascade="all, delete-orphan",
    )


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_attendance_emp_date"),
        Index("ix_attendance_month_year", "month", "year"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(Integer, ForeignKey("employees.id"), nullable=False)  # type: ignore[assignment]
    date: str = Column(String(10), nullable=False)  # type: ignore[assignment]  # YYYY-MM-DD
    status: str = Column(String(2), nullable=False)  # type: ignore[assignment]
    # P | A | H | PL | WO
    in_time: str | None = Column(String(5), nullable=True)  # type: ignore[assignment]  # HH:MM
    out_time: str | None = Column(String(5), nullable=True)  # type: ignore[assignment]  # HH:MM
    break_minutes: int = Column(Integer, nullable=False, default=0)  # type: ignore[assignment]
    work_hours: float = Column(Float, nullable=False, default=0.0)  # type: ignore[assignment]
    ot_hours: float = Column(Float, nullable=False, default=0.0)  # type: ignore[assignment]
    month: int = Column(Integer, nullable=False)  # type: ignore[assignment]
    year: int = Column(Integer, nullable=False)  # type: ignore[assignment]
    generation_seed: str | None = Column(String(64), nullable=True)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    employee = relationship("Employee", back_populates="attendances")
