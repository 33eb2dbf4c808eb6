"""Per-cell helpers for the planning and actuals grids."""
from __future__ import annotations

from typing import Optional

from core.domain.enums import ActualsVariance
from core.services.budget.policy import ActualsVarianceThresholds
from core.services.common.ratios import is_effectively_equal
from core.services.week_calendar.engine import (
    DateLike,
    current_week_start,
    is_current_week,
    is_future_week,
)


def weekly_utilization(planned_hours: float, actual_hours: Optional[float]) -> Optional[float]:
    """actual / planned for one week; None when planned is 0 or nothing was reported."""
    if planned_hours == 0 or actual_hours is None:
        return None
    return actual_hours / planned_hours


def has_planning_mismatch(
    week_start: DateLike,
    planned_hours: float,
    scheduled_hours: float,
    as_of: DateLike,
) -> bool:
    """Plan disagrees with the external schedule. Completed weeks are never flagged."""
    if not is_future_week(week_start, as_of):
        return False
    return not is_effectively_equal(planned_hours, scheduled_hours)


def has_missing_actuals(
    week_start: DateLike,
    planned_hours: float,
    actual_hours: Optional[float],
    as_of: DateLike,
    now: Optional[DateLike] = None,
) -> bool:
    """Completed, non-current week with planned hours and no reported actual."""
    if now is None:
        now = current_week_start(as_of)
    if is_current_week(week_start, now):
        return False
    if is_future_week(week_start, as_of):
        return False
    return planned_hours > 0 and actual_hours is None


def actuals_variance(
    planned_hours: float,
    actual_hours: Optional[float],
    thresholds: ActualsVarianceThresholds = ActualsVarianceThresholds(),
) -> ActualsVariance:
    actual = actual_hours or 0.0
    if actual < planned_hours and planned_hours > 0:
        if (planned_hours - actual) / planned_hours > thresholds.low_percent / 100.0:
            return ActualsVariance.UNDER
    if actual > planned_hours:
        if (actual - planned_hours) / (planned_hours or 1.0) > thresholds.high_percent / 100.0:
            return ActualsVariance.OVER
    return ActualsVariance.NONE


def week_actuals_variance(
    week_start: DateLike,
    planned_total: float,
    actual_total: float,
    as_of: DateLike,
    thresholds: ActualsVarianceThresholds = ActualsVarianceThresholds(),
) -> ActualsVariance:
    """Variance of a week's totals row; future weeks have nothing to compare yet."""
    if is_future_week(week_start, as_of):
        return ActualsVariance.NONE
    return actuals_variance(planned_total, actual_total, thresholds)


__all__ = [
    "weekly_utilization",
    "has_planning_mismatch",
    "has_missing_actuals",
    "actuals_variance",
    "week_actuals_variance",
]
