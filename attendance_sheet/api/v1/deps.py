"""
FastAPI dependencies — the per-app attendance sheet store.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from attendance_sheet.services.sheet import AttendanceSheet


async def get_sheet(request: Request) -> AttendanceSheet:
    """Return the store created in the app lifespan."""
    sheet = getattr(request.app.state, "sheet", None)
    if sheet is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Attendance sheet not initialised",
        )
    return sheet
