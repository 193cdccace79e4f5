"""
Attendance record lookup — read one employee's statuses for a month.

Day maps arrive already normalised by ``coerce_day_map`` so nothing here
cares which wire shape the backend sent. Every miss resolves to UNSET.
"""

from __future__ import annotations

from attendance_sheet.core.calendar_math import days_in_month
from attendance_sheet.schemas.attendance import UNSET, AttendanceRecord, Employee


def get_record(employee: Employee | None, year: int, month: int) -> AttendanceRecord | None:
    """Return the record for exactly (year, month), or None."""
    if employee is None:
        return None
    return next(
        (r for r in employee.attendance if r.year == year and r.month == month),
        None,
    )


def get_status(employee: Employee | None, year: int, month: int, day: int) -> str:
    if day < 1 or day > days_in_month(year, month):
        return UNSET
    record = get_record(employee, year, month)
    if record is None:
        return UNSET
    return record.days.get(str(day)) or UNSET


def month_statuses(employee: Employee | None, year: int, month: int) -> list[str]:
    """Statuses for days 1..N of the month, UNSET where nothing is recorded."""
    record = get_record(employee, year, month)
    count = days_in_month(year, month)
    if record is None:
        return [UNSET] * count
    return [record.days.get(str(day)) or UNSET for day in range(1, count + 1)]
