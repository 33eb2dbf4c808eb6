from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from core.services.budget import BudgetEnvelope, BudgetLineInput, WeeklyHoursRow, compute_budget_rollups

AS_OF = datetime(2025, 2, 16, 23, 59, 59, tzinfo=timezone.utc)


def _rows(weeks, planned, actuals, rate):
    return [WeeklyHoursRow(w, p, a, rate) for w, p, a in zip(weeks, planned, actuals)]


def test_scenario_completed_weeks_and_current_week():
    weeks = [date(2025, 2, 3), date(2025, 2, 10), date(2025, 2, 17)]
    rows = _rows(weeks, [40, 40, 40], [38, 42, None], 150.0)
    lines = [BudgetLineInput(160, 200, 24000, 30000)]

    result = compute_budget_rollups(date(2025, 2, 3), date(2025, 2, 23), rows, lines, AS_OF)

    assert result.planned_hours_to_date == 80
    assert result.actual_hours_to_date == 80
    assert result.actual_dollars_to_date == 12000
    assert result.projected_current_week_hours == 40
    assert result.projected_future_weeks_hours == 0
    assert result.forecast_hours == 120
    assert result.missing_actuals is False
    assert result.burn_percent_low_hours == pytest.approx(50.0)
    assert result.burn_percent_high_hours == pytest.approx(40.0)
    assert result.remaining_hours_low == 80
    assert result.remaining_after_forecast_hours_high == 80
    assert result.remaining_after_forecast_dollars_low == 24000 - 18000


def test_scenario_current_and_future_projection():
    weeks = [date(2025, 2, 3) + (date(2025, 2, 10) - date(2025, 2, 3)) * i for i in range(5)]
    rows = _rows(weeks, [40, 40, 30, 40, 40], [40, 40, None, None, None], 100.0)

    result = compute_budget_rollups(date(2025, 2, 3), date(2025, 3, 9), rows, [], AS_OF)

    assert result.actual_hours_to_date == 80
    assert result.projected_current_week_hours == 30
    assert result.projected_future_weeks_hours == 80
    assert result.forecast_hours == 190
    assert result.forecast_dollars == 19000


def test_scenario_missing_actual_marks_forecast_incomplete():
    rows = [WeeklyHoursRow(date(2025, 2, 10), 40, None, 100.0)]
    result = compute_budget_rollups(date(2025, 2, 10), date(2025, 2, 16), rows, [], AS_OF)
    assert result.missing_actuals is True
    assert result.forecast_incomplete is True


def test_unplanned_week_without_actual_is_not_missing():
    rows = [WeeklyHoursRow(date(2025, 2, 10), 0, None, 100.0)]
    result = compute_budget_rollups(date(2025, 2, 10), date(2025, 2, 16), rows, [], AS_OF)
    assert result.missing_actuals is False


def test_forecast_decomposition_holds_for_both_units():
    weeks = [date(2025, 1, 27), date(2025, 2, 3), date(2025, 2, 10), date(2025, 2, 17), date(2025, 2, 24)]
    rows = _rows(weeks, [12.5, 20, 33.3, 8, 17.25], [11, None, 35, 2, None], 137.5)
    rows += _rows(weeks, [4, 4, 4, 4, 4], [4, 4, None, None, None], 90.0)

    r = compute_budget_rollups(date(2025, 1, 27), None, rows, [BudgetLineInput(100, 150, 1, 2)], AS_OF)

    assert r.forecast_hours == r.actual_hours_to_date + r.projected_current_week_hours + r.projected_future_weeks_hours
    assert r.forecast_dollars == (
        r.actual_dollars_to_date + r.projected_current_week_dollars + r.projected_future_weeks_dollars
    )


def test_empty_envelope_gives_no_burn_percent():
    rows = [WeeklyHoursRow(date(2025, 2, 10), 40, 40, 100.0)]
    result = compute_budget_rollups(date(2025, 2, 10), None, rows, [], AS_OF)
    assert result.envelope.is_empty
    assert result.burn_percent_low_hours is None
    assert result.burn_percent_high_hours is None
    assert result.burn_percent_low_dollars is None
    assert result.burn_percent_high_dollars is None


def test_overrun_gives_negative_remaining():
    rows = [WeeklyHoursRow(date(2025, 2, 10), 40, 60, 100.0)]
    result = compute_budget_rollups(date(2025, 2, 10), None, rows, [BudgetLineInput(40, 50, 4000, 5000)], AS_OF)
    assert result.remaining_hours_low == -20
    assert result.remaining_dollars_high == -1000
    assert result.burn_percent_high_hours == pytest.approx(120.0)


def test_envelope_sums_lines_independently():
    envelope = BudgetEnvelope.from_lines(
        [BudgetLineInput(100, 120, 10000, 12000), BudgetLineInput(10, 30, 1000, 3000)]
    )
    assert (envelope.low_hours, envelope.high_hours) == (110, 150)
    assert (envelope.low_dollars, envelope.high_dollars) == (11000, 15000)
    assert envelope.line_count == 2


def test_rows_are_normalized_to_week_start():
    rows = [WeeklyHoursRow(date(2025, 2, 12), 40, 30, 100.0)]
    result = compute_budget_rollups(date(2025, 2, 10), None, rows, [], AS_OF)
    assert result.actual_hours_to_date == 30


def test_as_dict_serializes_as_of():
    result = compute_budget_rollups(date(2025, 2, 10), None, [], [], AS_OF)
    data = result.as_dict()
    assert data["as_of"] == AS_OF.isoformat()
    assert data["envelope"]["line_count"] == 0


def test_mid_week_as_of_projects_the_following_week_as_current():
    weeks = [date(2025, 2, 3), date(2025, 2, 10), date(2025, 2, 17), date(2025, 2, 24)]
    rows = _rows(weeks, [40, 40, 30, 20], [40, 40, None, None], 100.0)
    wednesday = datetime(2025, 2, 12, 12, tzinfo=timezone.utc)

    result = compute_budget_rollups(date(2025, 2, 3), date(2025, 3, 2), rows, [], wednesday)

    assert result.actual_hours_to_date == 80
    assert result.projected_current_week_hours == 30
    assert result.projected_future_weeks_hours == 20
    assert result.forecast_hours == 130
    assert result.missing_actuals is False
