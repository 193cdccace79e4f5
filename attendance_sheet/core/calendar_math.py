"""Calendar helpers for the month grid."""

from __future__ import annotations

import calendar
from datetime import date

MONTH_NAMES = [calendar.month_name[m] for m in range(1, 13)]


def days_in_month(year: int, month: int) -> int:
    """Number of days in *month* (1-12) of *year*."""
    _, count = calendar.monthrange(year, month)
    return count


def selectable_years(today: date | None = None, span: int = 7) -> list[int]:
    """The current year followed by the next ``span - 1`` years."""
    current = (today or date.today()).year
    return [current + i for i in range(span)]


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]
