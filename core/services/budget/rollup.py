"""
Budget burn and forecast rollups.

Uses plan and actuals only; externally scheduled hours never feed the budget.
To-date figures cover completed weeks (week start <= as-of) and never the
current week.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from core.services.budget.models import BudgetEnvelope, BudgetResult, WeeklyHoursRow
from core.services.common.ratios import percent_of
from core.services.week_calendar.engine import DateLike, partition_weeks, resolve_as_of, week_start_of


def compute_budget_rollups(
    project_start: DateLike,
    project_end: Optional[DateLike],
    weekly_rows: Iterable[WeeklyHoursRow],
    budget_lines: Iterable[Any],
    as_of: Optional[DateLike] = None,
    *,
    today: Optional[DateLike] = None,
) -> BudgetResult:
    as_of = resolve_as_of(as_of)
    partition = partition_weeks(project_start, project_end, as_of, today=today)
    completed: set[date] = set(partition.completed)
    future: set[date] = set(partition.future)
    current = partition.current

    rows = list(weekly_rows)

    planned_hours_to_date = 0.0
    actual_hours_to_date = 0.0
    actual_dollars_to_date = 0.0
    missing_actuals = False

    projected_current_hours = 0.0
    projected_current_dollars = 0.0
    projected_future_hours = 0.0
    projected_future_dollars = 0.0

    for row in rows:
        week = week_start_of(row.week_start_date)
        planned = float(row.planned_hours)
        rate = float(row.rate)

        if week in completed:
            planned_hours_to_date += planned
            if row.actual_hours is None:
                if planned > 0:
                    missing_actuals = True
            else:
                actual = float(row.actual_hours)
                actual_hours_to_date += actual
                actual_dollars_to_date += actual * rate
        elif week == current:
            projected_current_hours += planned
            projected_current_dollars += planned * rate
        elif week in future:
            projected_future_hours += planned
            projected_future_dollars += planned * rate

    forecast_hours = actual_hours_to_date + projected_current_hours + projected_future_hours
    forecast_dollars = actual_dollars_to_date + projected_current_dollars + projected_future_dollars

    envelope = (
        budget_lines
        if isinstance(budget_lines, BudgetEnvelope)
        else BudgetEnvelope.from_lines(budget_lines)
    )

    return BudgetResult(
        as_of=as_of,
        envelope=envelope,
        planned_hours_to_date=planned_hours_to_date,
        actual_hours_to_date=actual_hours_to_date,
        actual_dollars_to_date=actual_dollars_to_date,
        missing_actuals=missing_actuals,
        forecast_hours=forecast_hours,
        forecast_dollars=forecast_dollars,
        forecast_incomplete=missing_actuals,
        projected_current_week_hours=projected_current_hours,
        projected_current_week_dollars=projected_current_dollars,
        projected_future_weeks_hours=projected_future_hours,
        projected_future_weeks_dollars=projected_future_dollars,
        burn_percent_low_hours=percent_of(actual_hours_to_date, envelope.low_hours),
        burn_percent_high_hours=percent_of(actual_hours_to_date, envelope.high_hours),
        burn_percent_low_dollars=percent_of(actual_dollars_to_date, envelope.low_dollars),
        burn_percent_high_dollars=percent_of(actual_dollars_to_date, envelope.high_dollars),
        remaining_hours_low=envelope.low_hours - actual_hours_to_date,
        remaining_hours_high=envelope.high_hours - actual_hours_to_date,
        remaining_dollars_low=envelope.low_dollars - actual_dollars_to_date,
        remaining_dollars_high=envelope.high_dollars - actual_dollars_to_date,
        remaining_after_forecast_hours_low=envelope.low_hours - forecast_hours,
        remaining_after_forecast_hours_high=envelope.high_hours - forecast_hours,
        remaining_after_forecast_dollars_low=envelope.low_dollars - forecast_dollars,
        remaining_after_forecast_dollars_high=envelope.high_dollars - forecast_dollars,
    )


__all__ = ["compute_budget_rollups"]
