"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from attendance_sheet.api.v1.endpoints import employees, exports, sheet

api_router = APIRouter()

# Grid view, period selection, notices, health
api_router.include_router(sheet.router)

# Employee CRUD + day status
api_router.include_router(employees.router)

# CSV / XLSX downloads
api_router.include_router(exports.router)
