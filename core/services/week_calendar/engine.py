"""
Monday-anchored week grid and the as-of boundary.

Every week-bucketed figure is keyed by the Monday that starts its week
(``WeekStart``). The as-of boundary is the Sunday 23:59:59.999 UTC before the
week containing "now": weeks starting on or before it are completed, the week
right after it is the current week, everything later is future.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, List, Optional, Union

from core.domain.enums import WeekPhase
from core.services.week_calendar.clock import utc_now
from core.services.week_calendar.models import WeekPartition

DateLike = Union[date, datetime]

ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(days=7)
AS_OF_TIME = time(23, 59, 59, 999000, tzinfo=timezone.utc)


def to_utc_date(value: DateLike) -> date:
    """Calendar date of ``value`` in UTC. Naive datetimes are taken as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def normalize_as_of(as_of: DateLike) -> datetime:
    """
    Aware UTC instant for an as-of value.

    A bare date stands for the end of that day (23:59:59.999 UTC).
    """
    if isinstance(as_of, datetime):
        if as_of.tzinfo is None:
            return as_of.replace(tzinfo=timezone.utc)
        return as_of.astimezone(timezone.utc)
    return datetime.combine(as_of, AS_OF_TIME)


def week_start_of(value: DateLike) -> date:
    d = to_utc_date(value)
    return d - timedelta(days=d.weekday())


def as_of_date(now: DateLike) -> datetime:
    """End of the previous week (Sunday 23:59:59.999 UTC) relative to ``now``."""
    monday = week_start_of(now)
    return datetime.combine(monday - ONE_DAY, AS_OF_TIME)


def resolve_as_of(as_of: Optional[DateLike] = None) -> datetime:
    """Normalize an explicit as-of, or derive one from the wall clock."""
    if as_of is None:
        return as_of_date(utc_now())
    return normalize_as_of(as_of)


def current_week_start(as_of: DateLike) -> date:
    """
    The week immediately after the as-of boundary.

    For an end-of-week as-of this is ``week_start_of(as_of + 1 day)``. A
    mid-week as-of completes its own week, so the next Monday is current.
    """
    return week_start_of(_cutoff(as_of)) + ONE_WEEK


def _cutoff(as_of: DateLike) -> date:
    # A week (starting at midnight) is <= as_of iff its Monday is <= as_of's date.
    return normalize_as_of(as_of).date()


def effective_end(project_end: Optional[DateLike], *, today: DateLike) -> date:
    if project_end is not None:
        return to_utc_date(project_end)
    return to_utc_date(today)


def iter_weeks(start: DateLike, end: DateLike) -> Iterator[date]:
    current = week_start_of(start)
    last = week_start_of(end)
    while current <= last:
        yield current
        current += ONE_WEEK


def all_weeks(
    project_start: DateLike,
    project_end: Optional[DateLike] = None,
    *,
    today: Optional[DateLike] = None,
) -> List[date]:
    """Every week of the span. Open-ended projects run through ``today``'s week."""
    if today is None:
        today = utc_now()
    return list(iter_weeks(project_start, effective_end(project_end, today=today)))


def _weeks_for_boundary(
    project_start: DateLike,
    project_end: Optional[DateLike],
    as_of: DateLike,
    today: Optional[DateLike],
) -> List[date]:
    if today is None:
        today = current_week_start(as_of)
    return all_weeks(project_start, project_end, today=today)


def completed_weeks(
    project_start: DateLike,
    project_end: Optional[DateLike],
    as_of: DateLike,
    *,
    today: Optional[DateLike] = None,
) -> List[date]:
    cutoff = _cutoff(as_of)
    return [w for w in _weeks_for_boundary(project_start, project_end, as_of, today) if w <= cutoff]


def future_weeks(
    project_start: DateLike,
    project_end: Optional[DateLike],
    as_of: DateLike,
    *,
    today: Optional[DateLike] = None,
) -> List[date]:
    """Weeks after the as-of boundary; the current week is included when in range."""
    cutoff = _cutoff(as_of)
    return [w for w in _weeks_for_boundary(project_start, project_end, as_of, today) if w > cutoff]


def partition_weeks(
    project_start: DateLike,
    project_end: Optional[DateLike],
    as_of: DateLike,
    *,
    today: Optional[DateLike] = None,
) -> WeekPartition:
    cutoff = _cutoff(as_of)
    current = current_week_start(as_of)
    weeks = _weeks_for_boundary(project_start, project_end, as_of, today)
    return WeekPartition(
        completed=tuple(w for w in weeks if w <= cutoff),
        current=current,
        future=tuple(w for w in weeks if w > current),
        current_in_range=current in weeks,
    )


def is_completed_week(week_start: DateLike, as_of: DateLike) -> bool:
    return week_start_of(week_start) <= _cutoff(as_of)


def is_future_week(week_start: DateLike, as_of: DateLike) -> bool:
    return week_start_of(week_start) > _cutoff(as_of)


def is_current_week(week_start: DateLike, now: DateLike) -> bool:
    """True for the week containing ``now``; independent of any as-of boundary."""
    return week_start_of(week_start) == week_start_of(now)


def classify_week(week_start: DateLike, as_of: DateLike) -> WeekPhase:
    ws = week_start_of(week_start)
    if ws <= _cutoff(as_of):
        return WeekPhase.COMPLETED
    if ws == current_week_start(as_of):
        return WeekPhase.CURRENT
    return WeekPhase.FUTURE


def previous_weeks(as_of: DateLike, count: int) -> List[date]:
    """The ``count`` weeks before the current week, most recent first."""
    current = current_week_start(as_of)
    return [current - ONE_WEEK * i for i in range(1, count + 1)]


def format_week_key(value: DateLike) -> str:
    return to_utc_date(value).isoformat()


def format_week_short(value: DateLike) -> str:
    d = to_utc_date(value)
    return f"{d.month}/{d.day:02d}"


__all__ = [
    "DateLike",
    "AS_OF_TIME",
    "to_utc_date",
    "normalize_as_of",
    "week_start_of",
    "as_of_date",
    "resolve_as_of",
    "current_week_start",
    "effective_end",
    "iter_weeks",
    "all_weeks",
    "completed_weeks",
    "future_weeks",
    "partition_weeks",
    "is_completed_week",
    "is_future_week",
    "is_current_week",
    "classify_week",
    "previous_weeks",
    "format_week_key",
    "format_week_short",
]
