"""
In-memory employee roster kept in sync with the employee backend.

- Every mutation goes to the backend first; local state only changes once
  the backend returns the canonical employee.
- Entries are always replaced whole, never edited in place.
- Network failures are logged and surfaced as a transient error notice;
  local state is left exactly as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from attendance_sheet.core.calendar_math import days_in_month
from attendance_sheet.core.exceptions import NetworkFailure, ValidationFailure
from attendance_sheet.schemas.attendance import Employee, normalise_status
from attendance_sheet.services.api_client import EmployeeApiClient
from attendance_sheet.services.notifier import Notifier

logger = logging.getLogger(__name__)

REMOVE_PROMPT = "Are you sure you want to remove this employee?"


def _required(**fields: str) -> dict[str, str]:
    """Trim every field; reject the operation if any is empty."""
    trimmed = {k: (v or "").strip() for k, v in fields.items()}
    missing = [k for k, v in trimmed.items() if not v]
    if missing:
        raise ValidationFailure(f"Required field(s) empty: {', '.join(missing)}")
    return trimmed


class EmployeeRoster:
    def __init__(self, client: EmployeeApiClient, notifier: Notifier) -> None:
        self._client = client
        self._notifier = notifier
        self._employees: list[Employee] = []

    @property
    def employees(self) -> list[Employee]:
        return list(self._employees)

    def __len__(self) -> int:
        return len(self._employees)

    def find(self, emp_id: str) -> Employee | None:
        return next((e for e in self._employees if e.emp_id == emp_id), None)

    def _position(self, target: Employee | None) -> int | None:
        """Locate an entry captured before a request went out.

        Object identity first, then the backend's opaque id, so a rename that
        raced with another write still lands on the right employee.
        """
        if target is None:
            return None
        for i, emp in enumerate(self._employees):
            if emp is target:
                return i
        if target.id is not None:
            for i, emp in enumerate(self._employees):
                if emp.id == target.id:
                    return i
        return None

    def _replace(self, position: int, employee: Employee) -> None:
        employees = list(self._employees)
        employees[position] = employee
        self._employees = employees

    def _failed(self, text: str, exc: NetworkFailure) -> None:
        logger.error("❌ %s: %s", text, exc)
        self._notifier.error(text)

    # ── Read ────────────────────────────────────────────────────────
    async def load(self) -> bool:
        """Replace the roster with the backend's list; keep it on failure."""
        try:
            employees = await self._client.list_employees()
        except NetworkFailure as exc:
            self._failed("Failed to fetch employees", exc)
            return False
        self._employees = employees
        logger.info("Loaded %d employees", len(employees))
        return True

    def filter(self, query: str | None) -> list[Employee]:
        """Employees whose id or name contains *query*, case-insensitive."""
        needle = (query or "").lower()
        if not needle:
            return self.employees
        return [
            e for e in self._employees
            if needle in e.emp_id.lower() or needle in e.name.lower()
        ]

    # ── Write ───────────────────────────────────────────────────────
    async def add(self, emp_id: str, name: str, role: str) -> Employee | None:
        fields = _required(emp_id=emp_id, name=name, role=role)
        try:
            created = await self._client.create_employee(**fields)
        except NetworkFailure as exc:
            self._failed("Failed to add employee", exc)
            return None
        self._employees = [*self._employees, created]
        self._notifier.success("Employee added")
        logger.info("Employee %s added", created.emp_id)
        return created

    async def update_day_status(
        self, emp_id: str, year: int, month: int, day: int, status: str
    ) -> Employee | None:
        if not 1 <= month <= 12:
            raise ValidationFailure(f"Month must be 1-12, got {month}")
        if not 1 <= day <= days_in_month(year, month):
            raise ValidationFailure(f"Day {day} is outside {year}-{month:02d}")
        try:
            status = normalise_status(status)
        except ValueError as exc:
            raise ValidationFailure(str(exc)) from exc

        key = str(emp_id).strip()
        target = next((e for e in self._employees if e.emp_id.strip() == key), None)
        try:
            updated = await self._client.set_day_status(emp_id, year, month, day, status)
        except NetworkFailure as exc:
            self._failed("Failed to update attendance", exc)
            return None

        position = self._position(target)
        if position is None:
            position = next(
                (i for i, e in enumerate(self._employees) if e.emp_id.strip() == key),
                None,
            )
        if position is not None:
            self._replace(position, updated)
        return updated

    async def rename(
        self, old_emp_id: str, new_emp_id: str, name: str, role: str
    ) -> Employee | None:
        fields = _required(emp_id=new_emp_id, name=name, role=role)
        target = self.find(old_emp_id)
        try:
            updated = await self._client.update_employee(old_emp_id, **fields)
        except NetworkFailure as exc:
            self._failed("Failed to update employee", exc)
            return None

        position = self._position(target)
        if position is None:
            position = next(
                (i for i, e in enumerate(self._employees) if e.emp_id == old_emp_id),
                None,
            )
        if position is not None:
            self._replace(position, updated)
        self._notifier.success("Employee updated")
        logger.info("Employee %s updated (now %s)", old_emp_id, updated.emp_id)
        return updated

    async def remove(self, emp_id: str, confirm: Callable[[str], bool]) -> bool:
        """Delete after *confirm* approves; declining makes no backend call."""
        if not confirm(REMOVE_PROMPT):
            return False
        try:
            await self._client.delete_employee(emp_id)
        except NetworkFailure as exc:
            self._failed("Failed to delete employee", exc)
            return False
        self._employees = [e for e in self._employees if e.emp_id != emp_id]
        self._notifier.success("Employee removed")
        logger.info("Employee %s removed", emp_id)
        return True
