"""Pydantic schemas for the shift and holiday masters."""

from __future__ import annotations

import datetime as dt
import re

from pydantic import BaseModel, Field, field_validator, model_validator

_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

WEEKEND_TYPES = ["SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT", "ROTATIONAL"]


# ── Shift config ────────────────────────────────────────────────────
class ShiftConfigRead(BaseModel):
    client_id: str
    weekend_type: str
    general_shift_enabled: bool
    general_shift_start: str
    general_shift_end: str
    shift_a_enabled: bool
    shift_a_start: str
    shift_a_end: str
    shift_b_enabled: bool
    shift_b_start: str
    shift_b_end: str
    shift_c_enabled: bool
    shift_c_start: str
    shift_c_end: str
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


class ShiftConfigUpdate(BaseModel):
    weekend_type: str = "SUN"
    general_shift_enabled: bool
    general_shift_start: str
    general_shift_end: str
    shift_a_enabled: bool
    shift_a_start: str
    shift_a_end: str
    shift_b_enabled: bool
    shift_b_start: str
    shift_b_end: str
    shift_c_enabled: bool
    shift_c_start: str
    shift_c_end: str

    @field_validator(
        "general_shift_start",
        "general_shift_end",
        "shift_a_start",
        "shift_a_end",
        "shift_b_start",
        "shift_b_end",
        "shift_c_start",
        "shift_c_end",
    )
    @classmethod
    def _hhmm(cls, v: str) -> str:
        v = v.strip()
        if not _HHMM_RE.match(v):
            raise ValueError("Time must be HH:MM (24-hour)")
        return v

    @field_validator("weekend_type")
    @classmethod
    def _weekend(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in WEEKEND_TYPES:
            raise ValueError(f"weekend_type must be one of {', '.join(WEEKEND_TYPES)}")
        return v

    @model_validator(mode="after")
    def _one_shift_enabled(self) -> "ShiftConfigUpdate":
        if not (
            self.general_shift_enabled
            or self.shift_a_enabled
            or self.shift_b_enabled
            or self.shift_c_enabled
        ):
            raise ValueError("Enable at least one shift")
        return self


# ── Holidays ────────────────────────────────────────────────────────
class HolidayCreate(BaseModel):
    client_id: str
    date: dt.date
    name: str
    year: int = Field(ge=2000, le=2100)

    @field_validator("client_id", "name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be empty")
        return v


class HolidayRead(BaseModel):
    id: int
    client_id: str
    date: str
    name: str
    year: int

    model_config = {"from_attributes": True}
