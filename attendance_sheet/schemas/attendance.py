"""Pydantic schemas for Employee / AttendanceRecord / Sheet views."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

UNSET = ""
PLACEHOLDER = "--Select--"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    HALF_DAY = "Half-day"
    HOLIDAY = "Holiday"
    ON_LEAVE = "On Leave"


STATUS_VALUES = [s.value for s in AttendanceStatus]
STATUS_OPTIONS = [PLACEHOLDER, *STATUS_VALUES]


def coerce_day_map(raw: Any) -> dict[str, str]:
    """Adapt either wire shape of a day map into ``{"<day>": "<status>"}``.

    Accepts a plain string-keyed dict, any mapping-like object exposing
    ``items()``, or the ordered ``[[day, status], ...]`` entry list an
    ordered key-map serialises to. Missing statuses become the unset value.
    """
    if raw is None:
        return {}
    if isinstance(raw, Mapping) or callable(getattr(raw, "items", None)):
        entries = raw.items()
    elif isinstance(raw, (list, tuple)):
        entries = []
        for entry in raw:
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise ValueError("Day entries must be [day, status] pairs")
            entries.append((entry[0], entry[1]))
    else:
        raise ValueError(f"Unsupported day map type: {type(raw).__name__}")

    days: dict[str, str] = {}
    for day, status in entries:
        days[str(day).strip()] = UNSET if status is None else str(status)
    return days


def normalise_status(v: str | None) -> str:
    """Map UI input onto a stored status; the placeholder means unset."""
    v = (v or "").strip()
    if v == PLACEHOLDER:
        return UNSET
    if v and v not in STATUS_VALUES:
        raise ValueError(f"Status must be one of: {STATUS_VALUES} or empty")
    return v


# ── Remote entities ────────────────────────────────────────────────
class AttendanceRecord(BaseModel):
    year: int
    month: int
    days: dict[str, str] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}

    @field_validator("days", mode="before")
    @classmethod
    def _days(cls, v: Any) -> dict[str, str]:
        return coerce_day_map(v)


class Employee(BaseModel):
    emp_id: str = Field(alias="empId")
    name: str = ""
    role: str = ""
    attendance: list[AttendanceRecord] = Field(default_factory=list)
    # Opaque server identifier, stable across renames when present
    id: str | None = Field(default=None, alias="_id")

    model_config = {"populate_by_name": True, "extra": "ignore", "frozen": True}

    @field_validator("emp_id", "id", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("attendance", mode="before")
    @classmethod
    def _attendance(cls, v: Any) -> Any:
        return [] if v is None else v


# ── Sheet requests ─────────────────────────────────────────────────
class EmployeeCreate(BaseModel):
    emp_id: str = Field(alias="empId")
    name: str
    role: str

    model_config = {"populate_by_name": True}


class EmployeeUpdate(BaseModel):
    emp_id: str = Field(alias="empId")
    name: str
    role: str

    model_config = {"populate_by_name": True}


class DayStatusUpdate(BaseModel):
    day: int
    status: str = UNSET

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: str | None) -> str:
        return normalise_status(v)


class PeriodSelect(BaseModel):
    year: int
    month: int = Field(ge=1, le=12)


# ── Sheet responses ────────────────────────────────────────────────
class NoticeRead(BaseModel):
    type: str  # success | error
    text: str


class SheetRow(BaseModel):
    emp_id: str
    name: str
    role: str
    total_present: int
    days: list[str]


class SheetResponse(BaseModel):
    year: int
    month: int
    month_name: str
    days_in_month: int
    working_days: int
    years: list[int]
    status_options: list[str]
    total_employees: int
    rows: list[SheetRow]
    notice: NoticeRead | None = None


class EmployeeRead(BaseModel):
    emp_id: str
    name: str
    role: str
    total_present: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


class HealthResponse(BaseModel):
    status: str
    employees: int
