"""
Employee CRUD + per-day status endpoints.

Each call goes through the roster, which talks to the employee backend.
A backend failure answers 502 with the same text shown in the notice.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from attendance_sheet.api.v1.deps import get_sheet
from attendance_sheet.schemas.attendance import (
    DayStatusUpdate,
    DeleteResponse,
    Employee,
    EmployeeCreate,
    EmployeeRead,
    EmployeeUpdate,
)
from attendance_sheet.services.sheet import AttendanceSheet

router = APIRouter(prefix="/employees", tags=["employees"])
logger = logging.getLogger(__name__)


def _backend_failed(sheet: AttendanceSheet) -> HTTPException:
    notice = sheet.notifier.current
    return HTTPException(
        status_code=502,
        detail=notice.text if notice else "Employee backend unavailable",
    )


def _read(sheet: AttendanceSheet, emp: Employee) -> EmployeeRead:
    return EmployeeRead(
        emp_id=emp.emp_id,
        name=emp.name,
        role=emp.role,
        total_present=sheet.total_present(emp),
    )


@router.post("/reload", response_model=list[EmployeeRead])
async def reload_employees(sheet: AttendanceSheet = Depends(get_sheet)) -> list[EmployeeRead]:
    """Re-fetch the full roster from the backend."""
    if not await sheet.roster.load():
        raise _backend_failed(sheet)
    return [_read(sheet, e) for e in sheet.roster.employees]


@router.post("", response_model=EmployeeRead, status_code=201)
async def add_employee(
    body: EmployeeCreate,
    sheet: AttendanceSheet = Depends(get_sheet),
) -> EmployeeRead:
    created = await sheet.roster.add(body.emp_id, body.name, body.role)
    if created is None:
        raise _backend_failed(sheet)
    return _read(sheet, created)


@router.put("/{emp_id}", response_model=EmployeeRead)
async def update_employee(
    emp_id: str,
    body: EmployeeUpdate,
    sheet: AttendanceSheet = Depends(get_sheet),
) -> EmployeeRead:
    """Edit ID, name or role; the ID itself may change."""
    updated = await sheet.roster.rename(emp_id, body.emp_id, body.name, body.role)
    if updated is None:
        raise _backend_failed(sheet)
    return _read(sheet, updated)


@router.delete("/{emp_id}", response_model=DeleteResponse)
async def delete_employee(
    emp_id: str,
    confirm: bool = Query(default=False, description="Operator confirmed the removal"),
    sheet: AttendanceSheet = Depends(get_sheet),
) -> DeleteResponse:
    if not confirm:
        logger.info("Removal of employee %s not confirmed", emp_id)
        return DeleteResponse(success=False, message="Removal not confirmed")
    if not await sheet.roster.remove(emp_id, lambda _prompt: confirm):
        raise _backend_failed(sheet)
    return DeleteResponse(success=True, message=f"Employee {emp_id} removed")


@router.put("/{emp_id}/attendance", response_model=EmployeeRead)
async def set_day_status(
    emp_id: str,
    body: DayStatusUpdate,
    sheet: AttendanceSheet = Depends(get_sheet),
) -> EmployeeRead:
    """Write one day's status for the selected month/year."""
    updated = await sheet.change_status(emp_id, body.day, body.status)
    if updated is None:
        raise _backend_failed(sheet)
    return _read(sheet, updated)
