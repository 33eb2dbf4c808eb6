from __future__ import annotations

from calendar import monthrange
from datetime import date
from typing import List

from core.services.week_calendar.engine import DateLike, to_utc_date, week_start_of
from core.services.week_calendar.models import MonthSpan

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def month_key_of(value: DateLike) -> str:
    d = to_utc_date(value)
    return f"{d.year}-{d.month:02d}"


def parse_month_key(month_key: str) -> tuple[int, int]:
    year, month = month_key.split("-")
    return int(year), int(month)


def month_label(month_key: str) -> str:
    """Display label for a month key, e.g. 2025-02 -> Feb 2025."""
    year, month = parse_month_key(month_key)
    return f"{MONTH_NAMES[month - 1]} {year}"


def last_week_start_of_month(year: int, month: int) -> date:
    return week_start_of(date(year, month, monthrange(year, month)[1]))


def months_in_range(start: DateLike, end: DateLike) -> List[MonthSpan]:
    """Calendar months from ``start`` through ``end`` inclusive."""
    first = to_utc_date(start)
    last = to_utc_date(end)
    year, month = first.year, first.month
    spans: List[MonthSpan] = []
    while (year, month) <= (last.year, last.month):
        spans.append(
            MonthSpan(
                month_key=f"{year}-{month:02d}",
                label=f"{month:02d}/{year}",
                start=date(year, month, 1),
                end=date(year, month, monthrange(year, month)[1]),
            )
        )
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return spans


__all__ = [
    "MONTH_NAMES",
    "month_key_of",
    "parse_month_key",
    "month_label",
    "last_week_start_of_month",
    "months_in_range",
]
