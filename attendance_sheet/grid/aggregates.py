"""Per-employee and roster-wide attendance figures."""

from __future__ import annotations

from collections.abc import Iterable

from attendance_sheet.core.calendar_math import days_in_month
from attendance_sheet.grid.accessor import get_record
from attendance_sheet.schemas.attendance import AttendanceStatus, Employee


def total_present(employee: Employee, year: int, month: int) -> int:
    """Count entries whose status is exactly ``Present``."""
    record = get_record(employee, year, month)
    if record is None:
        return 0
    return sum(1 for s in record.days.values() if s == AttendanceStatus.PRESENT.value)


def holiday_days(roster: Iterable[Employee], year: int, month: int) -> set[str]:
    """Day keys marked Holiday by any employee in the roster."""
    holidays: set[str] = set()
    for employee in roster:
        record = get_record(employee, year, month)
        if record is None:
            continue
        holidays.update(
            d for d, s in record.days.items() if s == AttendanceStatus.HOLIDAY.value
        )
    return holidays


def working_days(roster: Iterable[Employee], year: int, month: int) -> int:
    """Days in the month minus roster-wide holidays, never negative."""
    return max(0, days_in_month(year, month) - len(holiday_days(roster, year, month)))
