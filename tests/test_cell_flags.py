from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from core.models import ActualsVariance, Project
from core.services.budget import (
    ActualsVarianceThresholds,
    actuals_variance,
    has_missing_actuals,
    has_planning_mismatch,
    week_actuals_variance,
    weekly_utilization,
)

AS_OF = datetime(2025, 2, 16, 23, 59, 59, 999000, tzinfo=timezone.utc)


def test_weekly_utilization():
    assert weekly_utilization(40, 38) == pytest.approx(0.95)
    assert weekly_utilization(0, 10) is None
    assert weekly_utilization(40, None) is None


def test_planning_mismatch_only_for_future_weeks():
    assert has_planning_mismatch(date(2025, 2, 24), 40, 32, AS_OF)
    assert has_planning_mismatch(date(2025, 2, 17), 40, 32, AS_OF)
    assert not has_planning_mismatch(date(2025, 2, 10), 40, 32, AS_OF)


def test_planning_mismatch_ignores_rounding_noise():
    assert not has_planning_mismatch(date(2025, 2, 24), 40.0, 40.0004, AS_OF)


def test_missing_actuals_for_completed_weeks_only():
    assert has_missing_actuals(date(2025, 2, 10), 40, None, AS_OF)
    assert not has_missing_actuals(date(2025, 2, 10), 40, 0.0, AS_OF)
    assert not has_missing_actuals(date(2025, 2, 10), 0, None, AS_OF)
    assert not has_missing_actuals(date(2025, 2, 17), 40, None, AS_OF)
    assert not has_missing_actuals(date(2025, 2, 24), 40, None, AS_OF)


def test_missing_actuals_skips_week_containing_now():
    # An explicit "now" inside an already completed week suppresses the flag for that week.
    now = datetime(2025, 2, 12, 9, tzinfo=timezone.utc)
    assert not has_missing_actuals(date(2025, 2, 10), 40, None, AS_OF, now=now)
    assert has_missing_actuals(date(2025, 2, 3), 40, None, AS_OF, now=now)


def test_actuals_variance_default_thresholds():
    assert actuals_variance(40, 35) is ActualsVariance.UNDER  # 12.5% under
    assert actuals_variance(40, 37) is ActualsVariance.NONE  # 7.5% under
    assert actuals_variance(40, 43) is ActualsVariance.OVER  # 7.5% over
    assert actuals_variance(40, 41) is ActualsVariance.NONE  # 2.5% over
    assert actuals_variance(0, 0) is ActualsVariance.NONE
    assert actuals_variance(0, 5) is ActualsVariance.OVER


def test_actuals_variance_project_overrides():
    project = Project.create("Overrides", date(2025, 1, 6), actuals_low_threshold_percent=20.0)
    thresholds = ActualsVarianceThresholds().for_project(project)
    assert thresholds.low_percent == 20.0
    assert thresholds.high_percent == 5.0
    assert actuals_variance(40, 35, thresholds) is ActualsVariance.NONE


def test_week_variance_is_none_for_future_weeks():
    assert week_actuals_variance(date(2025, 2, 24), 40, 0, AS_OF) is ActualsVariance.NONE
    assert week_actuals_variance(date(2025, 2, 10), 40, 0, AS_OF) is ActualsVariance.UNDER
