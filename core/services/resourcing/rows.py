"""Expands assignments x weeks into the weekly rows the rollups consume."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from core.domain.enums import ActualsVariance
from core.domain.resourcing import Assignment, WeeklyHoursEntry
from core.services.budget.cells import (
    has_missing_actuals,
    has_planning_mismatch,
    week_actuals_variance,
    weekly_utilization,
)
from core.services.budget.models import WeeklyHoursRow
from core.services.budget.policy import ActualsVarianceThresholds
from core.services.resourcing.rates import RateKey
from core.services.week_calendar.engine import DateLike, format_week_key, week_start_of

HoursIndex = Dict[Tuple[str, date], Optional[float]]


@dataclass(frozen=True)
class WeekTotals:
    week_start: date
    planned_hours: float
    actual_hours: float
    scheduled_hours: float
    has_schedule_mismatch: bool
    utilization: Optional[float] = None
    actuals_variance: ActualsVariance = ActualsVariance.NONE
    missing_actuals: bool = False
    planning_mismatch: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "week_start": format_week_key(self.week_start),
            "planned_hours": self.planned_hours,
            "actual_hours": self.actual_hours,
            "scheduled_hours": self.scheduled_hours,
            "has_schedule_mismatch": self.has_schedule_mismatch,
            "utilization": self.utilization,
            "actuals_variance": self.actuals_variance.value,
            "missing_actuals": self.missing_actuals,
            "planning_mismatch": self.planning_mismatch,
        }


def index_hours(entries: Iterable[WeeklyHoursEntry]) -> HoursIndex:
    """Hours keyed by (person_id, week start)."""
    return {(e.person_id, week_start_of(e.week_start_date)): e.hours for e in entries}


def build_weekly_rows(
    assignments: Sequence[Assignment],
    planned: Iterable[WeeklyHoursEntry],
    actuals: Iterable[WeeklyHoursEntry],
    weeks: Sequence[date],
    rates: Dict[RateKey, float],
) -> List[WeeklyHoursRow]:
    """One row per assignment per week. Missing plan is 0; missing actual stays None."""
    planned_index = index_hours(planned)
    actual_index = index_hours(actuals)

    rows: List[WeeklyHoursRow] = []
    for assignment in assignments:
        rate = rates.get((assignment.person_id, assignment.role_id), 0.0)
        for week in weeks:
            key = (assignment.person_id, week)
            planned_hours = planned_index.get(key)
            actual_hours = actual_index.get(key)
            rows.append(
                WeeklyHoursRow(
                    week_start_date=week,
                    planned_hours=float(planned_hours or 0.0),
                    actual_hours=None if actual_hours is None else float(actual_hours),
                    rate=rate,
                )
            )
    return rows


def build_week_totals(
    assignments: Sequence[Assignment],
    planned: Iterable[WeeklyHoursEntry],
    actuals: Iterable[WeeklyHoursEntry],
    scheduled: Iterable[WeeklyHoursEntry],
    weeks: Sequence[date],
    *,
    as_of: Optional[DateLike] = None,
    thresholds: ActualsVarianceThresholds = ActualsVarianceThresholds(),
) -> List[WeekTotals]:
    """
    Footer totals for the resourcing grids.

    With an ``as_of`` each week also carries the grid cell flags, with actuals
    variance judged against ``thresholds``. Future weeks have no variance.
    """
    planned_index = index_hours(planned)
    actual_index = index_hours(actuals)
    scheduled_index = index_hours(scheduled)
    person_ids = list(dict.fromkeys(a.person_id for a in assignments))

    totals: List[WeekTotals] = []
    for week in weeks:
        planned_total = 0.0
        actual_total = 0.0
        scheduled_total = 0.0
        reported = False
        mismatch = False
        missing = False
        planning_mismatch = False
        for person_id in person_ids:
            p = float(planned_index.get((person_id, week)) or 0.0)
            s = float(scheduled_index.get((person_id, week)) or 0.0)
            a = actual_index.get((person_id, week))
            planned_total += p
            scheduled_total += s
            if a is not None:
                reported = True
                actual_total += float(a)
            # Compare to the cent, as the grid displays them.
            if round(p * 100) != round(s * 100):
                mismatch = True
            if as_of is not None:
                missing = missing or has_missing_actuals(week, p, a, as_of)
                planning_mismatch = planning_mismatch or has_planning_mismatch(week, p, s, as_of)

        utilization: Optional[float] = None
        variance = ActualsVariance.NONE
        if as_of is not None:
            utilization = weekly_utilization(planned_total, actual_total if reported else None)
            variance = week_actuals_variance(week, planned_total, actual_total, as_of, thresholds)

        totals.append(
            WeekTotals(
                week_start=week,
                planned_hours=planned_total,
                actual_hours=actual_total,
                scheduled_hours=scheduled_total,
                has_schedule_mismatch=mismatch,
                utilization=utilization,
                actuals_variance=variance,
                missing_actuals=missing,
                planning_mismatch=planning_mismatch,
            )
        )
    return totals


__all__ = ["WeekTotals", "index_hours", "build_weekly_rows", "build_week_totals"]
