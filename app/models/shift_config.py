"""
Client shift configuration — one row per client.

Holds the weekly-off policy and the four shift windows (General, A, B, C).
The generator reads it to decide which shifts employees can be placed on;
times are stored as ``HH:MM`` strings.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from app.db.base import Base


class ClientShiftConfig(Base):
    __tablename__ = "client_shift_configs"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    client_id: str = Column(String(64), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    weekend_type: str = Column(String(12), nullable=False, default="SUN")  # type: ignore[assignment]
    # SUN | MON | TUE | WED | THU | FRI | SAT | ROTATIONAL

    general_shift_enabled: bool = Column(Boolean, nullable=False, default=True)  # type: ignore[assignment]
    general_shift_start: str = Column(String(5), nullable=False, default="09:30")  # type: ignore[assignment]
    general_shift_end: str = Column(String(5), nullable=False, default="18:30")  # type: ignore[assignment]

    shift_a_enabled: bool = Column(Boolean, nullable=False, default=False)  # type: ignore[assignment]
    shift_a_start: str = Column(String(5), nullable=False, default="08:00")  # type: ignore[assignment]
    shift_a_end: str = Column(String(5), nullable=False, default="16:00")  # type: ignore[assignment]

    shift_b_enabled: bool = Column(Boolean, nullable=False, default=False)  # type: ignore[assignment]
    shift_b_start: str = Column(String(5), nullable=False, default="16:00")  # type: ignore[assignment]
    shift_b_end: str = Column(String(5), nullable=False, default="00:00")  # type: ignore[assignment]

    shift_c_enabled: bool = Column(Boolean, nullable=False, default=False)  # type: ignore[assignment]
    shift_c_start: str = Column(String(5), nullable=False, default="00:00")  # type: ignore[assignment]
    shift_c_end: str = Column(String(5), nullable=False, default="08:00")  # type: ignore[assignment]

    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
