"""
Attendance Sheet — application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `api/`, `grid/`, `services/`, and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from attendance_sheet.api.v1.api import api_router
from attendance_sheet.core.config import settings
from attendance_sheet.core.exceptions import register_exception_handlers
from attendance_sheet.services.api_client import EmployeeApiClient
from attendance_sheet.services.notifier import Notifier
from attendance_sheet.services.roster import EmployeeRoster
from attendance_sheet.services.sheet import AttendanceSheet

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def build_sheet(http: httpx.AsyncClient) -> AttendanceSheet:
    """Wire client → roster → sheet store around one HTTP client."""
    notifier = Notifier(ttl=settings.NOTICE_SECONDS)
    roster = EmployeeRoster(EmployeeApiClient(http), notifier)
    return AttendanceSheet(
        roster,
        notifier,
        year_span=settings.YEAR_SPAN,
        saved_ttl=settings.SAVED_NOTICE_SECONDS,
        column_width=settings.EXPORT_COLUMN_WIDTH,
    )


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    async with httpx.AsyncClient(
        base_url=settings.API_BASE_URL,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    ) as http:
        application.state.sheet = build_sheet(http)
        await application.state.sheet.roster.load()

        logger.info("🚀 %s v%s started (backend %s)", settings.PROJECT_NAME, settings.VERSION, settings.API_BASE_URL)
        yield
        application.state.sheet = None
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Monthly employee attendance sheet",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    # Mount API v1
    application.include_router(api_router, prefix=settings.API_V1_PREFIX)

    return application


app = create_app()
