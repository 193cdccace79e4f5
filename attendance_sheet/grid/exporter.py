"""
Grid exports — CSV and styled XLSX for one month of the full roster.

Both formats take the whole roster in roster order, never a search-filtered
view. CSV cells are written through ``csv.writer`` so names or roles that
contain commas or quotes stay in their own column.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from attendance_sheet.core.calendar_math import days_in_month
from attendance_sheet.grid.accessor import month_statuses
from attendance_sheet.grid.aggregates import total_present, working_days
from attendance_sheet.schemas.attendance import Employee

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SHEET_TITLE = "Attendance"
HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFD9E1F2")
HEADER_FONT = Font(bold=True, color="FF000000")
HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center")
_THIN = Side(style="thin")
HEADER_BORDER = Border(top=_THIN, bottom=_THIN, left=_THIN, right=_THIN)


def export_filename(year: int, month: int, extension: str) -> str:
    return f"attendance_{month}_{year}.{extension}"


def _day_headers(year: int, month: int) -> list[str]:
    return [f"Day {day}" for day in range(1, days_in_month(year, month) + 1)]


def csv_header(year: int, month: int) -> list[str]:
    return [
        "Employee ID",
        "Employee Name",
        "Role",
        "Total Present",
        "Working Days",
        *_day_headers(year, month),
    ]


def spreadsheet_header(year: int, month: int) -> list[str]:
    return ["Employee ID", "Employee Name", "Role", "Total Present", *_day_headers(year, month)]


def to_csv(roster: Sequence[Employee], year: int, month: int) -> bytes:
    """Serialise the month grid as UTF-8 CSV bytes."""
    working = working_days(roster, year, month)

    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(csv_header(year, month))
    for emp in roster:
        writer.writerow(
            [
                emp.emp_id,
                emp.name,
                emp.role,
                total_present(emp, year, month),
                working,
                *month_statuses(emp, year, month),
            ]
        )
    # Rows are newline-separated; no terminator after the last one
    return output.getvalue()[:-1].encode("utf-8")


def _write_row(ws, row: int, values: list) -> None:
    """Write one data row; text always lands as a plain string cell."""
    for col, value in enumerate(values, start=1):
        cell = ws.cell(row=row, column=col)
        if isinstance(value, str):
            cell.value = ILLEGAL_CHARACTERS_RE.sub("", value)
            # a leading "=" would otherwise be stored as a formula
            cell.data_type = "s"
        else:
            cell.value = value


def to_spreadsheet(
    roster: Sequence[Employee], year: int, month: int, column_width: int = 15
) -> bytes:
    """Serialise the month grid as an XLSX workbook with a styled header row."""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    header = spreadsheet_header(year, month)
    ws.append(header)
    for cell in ws[1]:
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = HEADER_ALIGNMENT
        cell.border = HEADER_BORDER

    for row, emp in enumerate(roster, start=2):
        _write_row(
            ws,
            row,
            [
                emp.emp_id,
                emp.name,
                emp.role,
                total_present(emp, year, month),
                *month_statuses(emp, year, month),
            ],
        )

    for i in range(1, len(header) + 1):
        ws.column_dimensions[get_column_letter(i)].width = column_width

    buff = io.BytesIO()
    wb.save(buff)
    return buff.getvalue()
