"""
Export endpoints — CSV and XLSX downloads of the selected month.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from attendance_sheet.api.v1.deps import get_sheet
from attendance_sheet.grid.exporter import CSV_MEDIA_TYPE, XLSX_MEDIA_TYPE
from attendance_sheet.services.sheet import AttendanceSheet

router = APIRouter(prefix="/exports", tags=["exports"])
logger = logging.getLogger(__name__)


def _attachment(filename: str, content: bytes, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/csv")
async def export_csv(sheet: AttendanceSheet = Depends(get_sheet)) -> Response:
    """Whole roster, not the search-filtered rows."""
    filename, content = sheet.export_csv()
    logger.info("Exported %s (%d bytes)", filename, len(content))
    return _attachment(filename, content, CSV_MEDIA_TYPE)


@router.get("/xlsx")
async def export_xlsx(sheet: AttendanceSheet = Depends(get_sheet)) -> Response:
    filename, content = sheet.export_spreadsheet()
    logger.info("Exported %s (%d bytes)", filename, len(content))
    return _attachment(filename, content, XLSX_MEDIA_TYPE)
