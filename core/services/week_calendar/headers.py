"""Column-header parsing for weekly hour grids."""
from __future__ import annotations

import re
from datetime import date
from typing import Optional

from core.services.week_calendar.engine import ONE_DAY, week_start_of

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# "26 Jan 2025": the scheduling tool labels each week by its Sunday.
_SCHEDULER_PATTERN = re.compile(
    r"^(\d{1,2})\s+(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\s+(\d{4})$",
    re.IGNORECASE,
)
_ISO_PATTERN = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")
_US_PATTERN = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")


def _safe_date(year: str, month: int | str, day: str) -> Optional[date]:
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def parse_header_date(header: str) -> Optional[date]:
    """Date named by a header, as written (no week normalization)."""
    text = (header or "").strip()

    match = _SCHEDULER_PATTERN.match(text)
    if match:
        day, mon, year = match.groups()
        return _safe_date(year, _MONTHS[mon.lower()], day)

    match = _ISO_PATTERN.match(text)
    if match:
        year, month, day = match.groups()
        return _safe_date(year, month, day)

    match = _US_PATTERN.match(text)
    if match:
        month, day, year = match.groups()
        return _safe_date(year, month, day)

    return None


def parse_week_header(header: str) -> Optional[date]:
    """Week start (Monday) for a date header; None for labels like "Person"."""
    parsed = parse_header_date(header)
    if parsed is None:
        return None
    return week_start_of(parsed)


def parse_float_week_header(header: str) -> Optional[date]:
    """
    Week start for a scheduling-tool export header.

    The tool's weeks run Sunday-Saturday and the header is that Sunday, so the
    Monday we key on is the header date plus one day.
    """
    sunday = parse_header_date(header)
    if sunday is None:
        return None
    return week_start_of(sunday + ONE_DAY)


__all__ = ["parse_header_date", "parse_week_header", "parse_float_week_header"]
