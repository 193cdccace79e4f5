"""
Async client for the remote employee backend (JSON over HTTP).

Every failure, transport error or non-2xx answer alike, is raised as
``NetworkFailure``. Nothing is retried here.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from attendance_sheet.core.exceptions import NetworkFailure
from attendance_sheet.schemas.attendance import Employee

logger = logging.getLogger(__name__)

EMPLOYEES_PATH = "/api/employees"


def _employee_path(emp_id: str) -> str:
    return f"{EMPLOYEES_PATH}/{quote(str(emp_id), safe='')}"


class EmployeeApiClient:
    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        try:
            resp = await self._http.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise NetworkFailure(f"{method} {path} failed: {exc}") from exc
        if resp.is_error:
            raise NetworkFailure(
                f"{method} {path} returned {resp.status_code}",
                status_code=resp.status_code,
            )
        logger.debug("%s %s -> %s", method, path, resp.status_code)
        return resp

    @staticmethod
    def _employee(resp: httpx.Response) -> Employee:
        try:
            return Employee.model_validate(resp.json())
        except ValueError as exc:
            raise NetworkFailure(f"Malformed employee payload: {exc}") from exc

    async def list_employees(self) -> list[Employee]:
        resp = await self._request("GET", EMPLOYEES_PATH)
        try:
            return [Employee.model_validate(item) for item in resp.json()]
        except (TypeError, ValueError) as exc:
            raise NetworkFailure(f"Malformed employee list: {exc}") from exc

    async def create_employee(self, emp_id: str, name: str, role: str) -> Employee:
        resp = await self._request(
            "POST", EMPLOYEES_PATH, json={"empId": emp_id, "name": name, "role": role}
        )
        return self._employee(resp)

    async def update_employee(
        self, original_emp_id: str, emp_id: str, name: str, role: str
    ) -> Employee:
        resp = await self._request(
            "PUT",
            _employee_path(original_emp_id),
            json={"empId": emp_id, "name": name, "role": role},
        )
        return self._employee(resp)

    async def delete_employee(self, emp_id: str) -> None:
        await self._request("DELETE", _employee_path(emp_id))

    async def set_day_status(
        self, emp_id: str, year: int, month: int, day: int, status: str
    ) -> Employee:
        resp = await self._request(
            "PUT",
            f"{_employee_path(emp_id)}/attendance",
            json={"year": year, "month": month, "day": day, "status": status},
        )
        return self._employee(resp)
