"""
Shared test fixtures for the attendance sheet test suite.

The employee backend is simulated in memory and served to the real
``EmployeeApiClient`` through ``httpx.MockTransport``.
"""

import json
import os
import sys
from datetime import date
from typing import AsyncGenerator
from urllib.parse import unquote

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["API_BASE_URL"] = "http://backend.test"
os.environ["CORS_ORIGINS"] = '["*"]'

import httpx
from httpx import ASGITransport, AsyncClient

from attendance_sheet.api.v1.deps import get_sheet
from attendance_sheet.main import app
from attendance_sheet.schemas.attendance import Employee
from attendance_sheet.services.api_client import EmployeeApiClient
from attendance_sheet.services.notifier import Notifier
from attendance_sheet.services.roster import EmployeeRoster
from attendance_sheet.services.sheet import AttendanceSheet

TODAY = date(2024, 2, 10)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeBackend:
    """In-memory stand-in for the remote /api/employees service."""

    def __init__(self, employees=None):
        self.employees: list[dict] = [dict(e) for e in (employees or [])]
        self.requests: list[httpx.Request] = []
        self.fail = False
        self._next_id = 1

    def _find(self, emp_id: str) -> dict | None:
        return next((e for e in self.employees if str(e["empId"]).strip() == emp_id.strip()), None)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(500, json={"message": "boom"})

        parts = [unquote(p) for p in request.url.raw_path.decode().split("?")[0].split("/") if p]
        body = json.loads(request.content) if request.content else None

        # parts: ["api", "employees", <empId>?, "attendance"?]
        if parts[:2] != ["api", "employees"]:
            return httpx.Response(404)

        if len(parts) == 2 and request.method == "GET":
            return httpx.Response(200, json=self.employees)

        if len(parts) == 2 and request.method == "POST":
            created = {
                "_id": f"oid-{self._next_id}",
                "empId": body["empId"],
                "name": body["name"],
                "role": body["role"],
                "attendance": [],
            }
            self._next_id += 1
            self.employees.append(created)
            return httpx.Response(201, json=created)

        emp = self._find(parts[2])
        if emp is None:
            return httpx.Response(404, json={"message": "Employee not found"})

        if len(parts) == 3 and request.method == "PUT":
            updated = {**emp, **body}
            self.employees[self.employees.index(emp)] = updated
            return httpx.Response(200, json=updated)

        if len(parts) == 3 and request.method == "DELETE":
            self.employees.remove(emp)
            return httpx.Response(200, json={"message": "Employee deleted"})

        if len(parts) == 4 and parts[3] == "attendance" and request.method == "PUT":
            records = [dict(r, days=dict(r["days"])) for r in emp.get("attendance", [])]
            record = next(
                (r for r in records if r["year"] == body["year"] and r["month"] == body["month"]),
                None,
            )
            if record is None:
                record = {"year": body["year"], "month": body["month"], "days": {}}
                records.append(record)
            record["days"][str(body["day"])] = body["status"]
            updated = {**emp, "attendance": records}
            self.employees[self.employees.index(emp)] = updated
            return httpx.Response(200, json=updated)

        return httpx.Response(405)


FEB_2024_ROSTER = [
    {
        "_id": "oid-e1",
        "empId": "E1",
        "name": "Ann",
        "role": "Eng",
        "attendance": [{"year": 2024, "month": 2, "days": {"1": "Present", "2": "Holiday"}}],
    },
    {
        "_id": "oid-e2",
        "empId": "E2",
        "name": "Bob",
        "role": "Dev",
        "attendance": [
            {"year": 2024, "month": 2, "days": [["2", "Holiday"], ["3", "Present"], ["4", "Present"]]},
            {"year": 2024, "month": 1, "days": {"5": "Holiday"}},
        ],
    },
    {"_id": "oid-e3", "empId": "E3", "name": "Cleo", "role": "Ops", "attendance": []},
]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend(FEB_2024_ROSTER)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def http(backend: FakeBackend) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.MockTransport(backend.handler)
    async with httpx.AsyncClient(transport=transport, base_url="http://backend.test") as client:
        yield client


@pytest.fixture
def notifier(clock: FakeClock) -> Notifier:
    return Notifier(ttl=3.0, clock=clock)


@pytest.fixture
def api_client(http: httpx.AsyncClient) -> EmployeeApiClient:
    return EmployeeApiClient(http)


@pytest.fixture
async def roster(api_client: EmployeeApiClient, notifier: Notifier) -> EmployeeRoster:
    """A roster already loaded from the fake backend."""
    r = EmployeeRoster(api_client, notifier)
    assert await r.load()
    return r


@pytest.fixture
def sheet(roster: EmployeeRoster, notifier: Notifier) -> AttendanceSheet:
    return AttendanceSheet(roster, notifier, today=TODAY)


@pytest.fixture
async def async_client(sheet: AttendanceSheet) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app, store overridden."""

    async def _override_get_sheet() -> AttendanceSheet:
        return sheet

    app.dependency_overrides[get_sheet] = _override_get_sheet
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def employees_from(rows: list[dict]) -> list[Employee]:
    return [Employee.model_validate(r) for r in rows]
