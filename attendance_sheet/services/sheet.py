"""
Attendance sheet view-model — the session store behind the HTTP surface.

Owns the selected month/year, wraps the roster, and derives everything the
grid shows on demand from the current roster + period.
"""

from __future__ import annotations

from datetime import date

from attendance_sheet.core.calendar_math import days_in_month, month_name, selectable_years
from attendance_sheet.core.exceptions import ValidationFailure
from attendance_sheet.grid import exporter
from attendance_sheet.grid.accessor import month_statuses
from attendance_sheet.grid.aggregates import total_present, working_days
from attendance_sheet.schemas.attendance import (
    STATUS_OPTIONS,
    Employee,
    NoticeRead,
    SheetResponse,
    SheetRow,
)
from attendance_sheet.services.notifier import Notice, Notifier
from attendance_sheet.services.roster import EmployeeRoster

SAVED_TEXT = "All changes are saved (auto-saved on each change)."


class AttendanceSheet:
    def __init__(
        self,
        roster: EmployeeRoster,
        notifier: Notifier,
        today: date | None = None,
        year_span: int = 7,
        saved_ttl: float = 2.0,
        column_width: int = 15,
    ) -> None:
        today = today or date.today()
        self.roster = roster
        self.notifier = notifier
        self.year = today.year
        self.month = today.month
        self.years = selectable_years(today, year_span)
        self._saved_ttl = saved_ttl
        self._column_width = column_width

    # ── Period ──────────────────────────────────────────────────────
    def select_period(self, year: int, month: int) -> None:
        if not 1 <= month <= 12:
            raise ValidationFailure(f"Month must be 1-12, got {month}")
        if year not in self.years:
            raise ValidationFailure(
                f"Year must be between {self.years[0]} and {self.years[-1]}, got {year}"
            )
        self.year = year
        self.month = month

    @property
    def days_in_month(self) -> int:
        return days_in_month(self.year, self.month)

    def working_days(self) -> int:
        return working_days(self.roster.employees, self.year, self.month)

    def total_present(self, employee: Employee) -> int:
        return total_present(employee, self.year, self.month)

    # ── Grid ────────────────────────────────────────────────────────
    def notice(self) -> NoticeRead | None:
        current: Notice | None = self.notifier.current
        if current is None:
            return None
        return NoticeRead(type=current.type, text=current.text)

    def grid(self, query: str | None = None) -> SheetResponse:
        rows = [
            SheetRow(
                emp_id=emp.emp_id,
                name=emp.name,
                role=emp.role,
                total_present=self.total_present(emp),
                days=month_statuses(emp, self.year, self.month),
            )
            for emp in self.roster.filter(query)
        ]
        return SheetResponse(
            year=self.year,
            month=self.month,
            month_name=month_name(self.month),
            days_in_month=self.days_in_month,
            working_days=self.working_days(),
            years=self.years,
            status_options=STATUS_OPTIONS,
            total_employees=len(self.roster),
            rows=rows,
            notice=self.notice(),
        )

    # ── Actions ─────────────────────────────────────────────────────
    async def change_status(self, emp_id: str, day: int, status: str) -> Employee | None:
        return await self.roster.update_day_status(emp_id, self.year, self.month, day, status)

    def save(self) -> Notice:
        """Writes go out per change; this only acknowledges that."""
        return self.notifier.success(SAVED_TEXT, ttl=self._saved_ttl)

    # ── Exports ─────────────────────────────────────────────────────
    def export_csv(self) -> tuple[str, bytes]:
        return (
            exporter.export_filename(self.year, self.month, "csv"),
            exporter.to_csv(self.roster.employees, self.year, self.month),
        )

    def export_spreadsheet(self) -> tuple[str, bytes]:
        return (
            exporter.export_filename(self.year, self.month, "xlsx"),
            exporter.to_spreadsheet(
                self.roster.employees, self.year, self.month, self._column_width
            ),
        )
