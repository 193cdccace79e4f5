"""Tests for the employee backend client and transient notices."""

import httpx
import pytest

from attendance_sheet.core.exceptions import NetworkFailure
from attendance_sheet.services.api_client import EmployeeApiClient
from attendance_sheet.services.notifier import Notifier


@pytest.mark.asyncio
async def test_list_employees_parses_both_day_map_shapes(api_client):
    employees = await api_client.list_employees()
    assert [e.emp_id for e in employees] == ["E1", "E2", "E3"]
    assert employees[0].attendance[0].days == {"1": "Present", "2": "Holiday"}
    assert employees[1].attendance[0].days == {"2": "Holiday", "3": "Present", "4": "Present"}
    assert employees[0].id == "oid-e1"


@pytest.mark.asyncio
async def test_path_segments_are_url_encoded(api_client, backend):
    backend.employees.append({"empId": "A/7 x", "name": "Slash", "role": "Ops"})
    emp = await api_client.set_day_status("A/7 x", 2024, 2, 1, "Present")
    assert emp.emp_id == "A/7 x"
    assert backend.requests[-1].url.raw_path == b"/api/employees/A%2F7%20x/attendance"


@pytest.mark.asyncio
async def test_non_success_status_raises_network_failure(api_client, backend):
    backend.fail = True
    with pytest.raises(NetworkFailure) as info:
        await api_client.list_employees()
    assert info.value.status_code == 500


@pytest.mark.asyncio
async def test_unknown_employee_raises_network_failure(api_client):
    with pytest.raises(NetworkFailure) as info:
        await api_client.delete_employee("NOPE")
    assert info.value.status_code == 404


@pytest.mark.asyncio
async def test_transport_error_raises_network_failure():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(refuse), base_url="http://x") as http:
        with pytest.raises(NetworkFailure):
            await EmployeeApiClient(http).create_employee("E1", "Ann", "Eng")


@pytest.mark.asyncio
async def test_malformed_payload_raises_network_failure():
    def garbage(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": True})

    async with httpx.AsyncClient(transport=httpx.MockTransport(garbage), base_url="http://x") as http:
        with pytest.raises(NetworkFailure):
            await EmployeeApiClient(http).update_employee("E1", "E1", "Ann", "Eng")


def test_notice_expires_after_ttl(clock):
    notifier = Notifier(ttl=3.0, clock=clock)
    notifier.success("Employee added")
    clock.advance(2.5)
    assert notifier.current.text == "Employee added"
    clock.advance(0.5)
    assert notifier.current is None


def test_newer_notice_replaces_current(clock):
    notifier = Notifier(ttl=3.0, clock=clock)
    notifier.success("Employee added")
    clock.advance(2.0)
    notifier.error("Failed to delete employee", ttl=2.0)
    clock.advance(1.5)
    assert notifier.current.type == "error"
    clock.advance(0.5)
    assert notifier.current is None
