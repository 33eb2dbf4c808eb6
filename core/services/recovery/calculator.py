"""
Revenue recovery: actual dollars as a share of forecast (planned) dollars.

Unlike the budget rollups, unreported actuals count as zero here; a week
with no forecast dollars has no recovery percent rather than 0% or infinity.
"""
from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from core.services.budget.models import WeeklyHoursRow
from core.services.recovery.models import MonthlyRecoveryPoint, RecoveryPoint, RevenueRecoverySummary
from core.services.week_calendar.engine import (
    DateLike,
    all_weeks,
    current_week_start,
    format_week_key,
    is_completed_week,
    partition_weeks,
    previous_weeks,
    resolve_as_of,
    week_start_of,
)
from core.services.week_calendar.months import (
    last_week_start_of_month,
    month_key_of,
    month_label,
    parse_month_key,
)

DEFAULT_LOOKBACK_WEEKS = 4
TO_DATE_KEY = "to-date"

WeekDollars = Dict[date, Tuple[float, float]]


def previous_window_key(lookback_weeks: int) -> str:
    return f"previous-{lookback_weeks}-weeks"


def dollars_by_week(weekly_rows: Iterable[WeeklyHoursRow]) -> WeekDollars:
    """(forecast, actual) dollars per week start."""
    totals: WeekDollars = {}
    for row in weekly_rows:
        week = week_start_of(row.week_start_date)
        rate = float(row.rate)
        forecast, actual = totals.get(week, (0.0, 0.0))
        totals[week] = (
            forecast + float(row.planned_hours) * rate,
            actual + float(row.actual_hours or 0.0) * rate,
        )
    return totals


def week_recovery_point(week: date, totals: WeekDollars) -> RecoveryPoint:
    forecast, actual = totals.get(week, (0.0, 0.0))
    return RecoveryPoint.from_totals(format_week_key(week), forecast, actual)


def combine_points(points: Iterable[RecoveryPoint], period_key: str) -> RecoveryPoint:
    forecast = 0.0
    actual = 0.0
    for point in points:
        forecast += point.forecast_dollars
        actual += point.actual_dollars
    return RecoveryPoint.from_totals(period_key, forecast, actual)


def previous_weeks_recovery(
    weekly_rows: Iterable[WeeklyHoursRow],
    as_of: DateLike,
    *,
    lookback_weeks: int = DEFAULT_LOOKBACK_WEEKS,
) -> List[RecoveryPoint]:
    """One point per week before the current week, most recent first."""
    totals = dollars_by_week(weekly_rows)
    return [week_recovery_point(week, totals) for week in previous_weeks(as_of, lookback_weeks)]


def to_date_recovery(
    project_start: DateLike,
    project_end: Optional[DateLike],
    weekly_rows: Iterable[WeeklyHoursRow],
    as_of: DateLike,
    *,
    today: Optional[DateLike] = None,
) -> RecoveryPoint:
    totals = dollars_by_week(weekly_rows)
    partition = partition_weeks(project_start, project_end, as_of, today=today)
    return combine_points(
        (week_recovery_point(week, totals) for week in partition.completed),
        TO_DATE_KEY,
    )


def monthly_recovery(
    project_start: DateLike,
    project_end: Optional[DateLike],
    weekly_rows: Iterable[WeeklyHoursRow],
    as_of: DateLike,
    *,
    today: Optional[DateLike] = None,
) -> List[MonthlyRecoveryPoint]:
    """
    Calendar-month aggregates across the whole project span.

    Weeks are bucketed by the month of their Monday. Actual dollars only
    come from completed weeks. A month is complete once the week holding its
    last day has completed; only complete months feed the cumulative
    overall recovery.
    """
    totals = dollars_by_week(weekly_rows)
    if today is None:
        today = current_week_start(as_of)

    month_totals: Dict[str, Tuple[float, float]] = {}
    for week in all_weeks(project_start, project_end, today=today):
        forecast, actual = totals.get(week, (0.0, 0.0))
        if not is_completed_week(week, as_of):
            actual = 0.0
        key = month_key_of(week)
        month_forecast, month_actual = month_totals.get(key, (0.0, 0.0))
        month_totals[key] = (month_forecast + forecast, month_actual + actual)

    cumulative_forecast = 0.0
    cumulative_actual = 0.0
    points: List[MonthlyRecoveryPoint] = []
    for key in sorted(month_totals):
        forecast, actual = month_totals[key]
        year, month = parse_month_key(key)
        complete = is_completed_week(last_week_start_of_month(year, month), as_of)
        overall: Optional[float] = None
        if complete:
            cumulative_forecast += forecast
            cumulative_actual += actual
            overall = RecoveryPoint.from_totals(key, cumulative_forecast, cumulative_actual).recovery_percent
        base = RecoveryPoint.from_totals(key, forecast, actual)
        points.append(
            MonthlyRecoveryPoint(
                period_key=base.period_key,
                forecast_dollars=base.forecast_dollars,
                actual_dollars=base.actual_dollars,
                recovery_percent=base.recovery_percent,
                dollars_delta=base.dollars_delta,
                month_label=month_label(key),
                is_complete=complete,
                overall_recovery_percent=overall,
            )
        )
    return points


def compute_revenue_recovery(
    project_start: DateLike,
    project_end: Optional[DateLike],
    weekly_rows: Iterable[WeeklyHoursRow],
    as_of: Optional[DateLike] = None,
    *,
    today: Optional[DateLike] = None,
    lookback_weeks: int = DEFAULT_LOOKBACK_WEEKS,
) -> RevenueRecoverySummary:
    as_of = resolve_as_of(as_of)
    rows = list(weekly_rows)
    weeks = previous_weeks_recovery(rows, as_of, lookback_weeks=lookback_weeks)
    return RevenueRecoverySummary(
        as_of=as_of,
        weeks=tuple(weeks),
        previous_weeks=combine_points(weeks, previous_window_key(lookback_weeks)),
        to_date=to_date_recovery(project_start, project_end, rows, as_of, today=today),
        monthly=tuple(monthly_recovery(project_start, project_end, rows, as_of, today=today)),
    )


__all__ = [
    "DEFAULT_LOOKBACK_WEEKS",
    "TO_DATE_KEY",
    "previous_window_key",
    "dollars_by_week",
    "week_recovery_point",
    "combine_points",
    "previous_weeks_recovery",
    "to_date_recovery",
    "monthly_recovery",
    "compute_revenue_recovery",
]
