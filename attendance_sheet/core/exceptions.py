"""
Error taxonomy + global exception handlers (prevents stack-trace leakage).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SheetError(Exception):
    """Base class for attendance sheet failures."""


class NetworkFailure(SheetError):
    """The employee backend could not be reached or answered non-2xx."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationFailure(SheetError):
    """Input rejected before any network call was made."""


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "success": False},
    )


async def _validation_failure_handler(_request: Request, exc: ValidationFailure) -> JSONResponse:
    logger.info("Rejected input: %s", exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "success": False},
    )


async def _network_failure_handler(_request: Request, exc: NetworkFailure) -> JSONResponse:
    logger.error("Employee backend error: %s", exc)
    return JSONResponse(
        status_code=502,
        content={"detail": "Employee backend unavailable", "success": False},
    )


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "success": False},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationFailure, _validation_failure_handler)  # type: ignore[arg-type]
    app.add_exception_handler(NetworkFailure, _network_failure_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
