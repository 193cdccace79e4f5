"""
Sheet view endpoints — grid for the selected period, period selection,
transient notices and a liveness probe.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from attendance_sheet.api.v1.deps import get_sheet
from attendance_sheet.schemas.attendance import (
    HealthResponse,
    NoticeRead,
    PeriodSelect,
    SheetResponse,
)
from attendance_sheet.services.sheet import AttendanceSheet

router = APIRouter(tags=["sheet"])
logger = logging.getLogger(__name__)


@router.get("/sheet", response_model=SheetResponse)
async def read_sheet(
    q: str = Query(default="", description="Search by employee ID or name"),
    sheet: AttendanceSheet = Depends(get_sheet),
) -> SheetResponse:
    """Grid rows (search-filtered) plus roster-wide working days."""
    return sheet.grid(q)


@router.put("/sheet/period", response_model=SheetResponse)
async def select_period(
    body: PeriodSelect,
    sheet: AttendanceSheet = Depends(get_sheet),
) -> SheetResponse:
    sheet.select_period(body.year, body.month)
    logger.info("Period selected: %d-%02d", body.year, body.month)
    return sheet.grid()


@router.post("/sheet/save", response_model=NoticeRead)
async def save_sheet(sheet: AttendanceSheet = Depends(get_sheet)) -> NoticeRead:
    notice = sheet.save()
    return NoticeRead(type=notice.type, text=notice.text)


@router.get("/sheet/notice", response_model=NoticeRead | None)
async def read_notice(sheet: AttendanceSheet = Depends(get_sheet)) -> NoticeRead | None:
    return sheet.notice()


@router.get("/health", response_model=HealthResponse)
async def health(sheet: AttendanceSheet = Depends(get_sheet)) -> HealthResponse:
    return HealthResponse(status="ok", employees=len(sheet.roster))
