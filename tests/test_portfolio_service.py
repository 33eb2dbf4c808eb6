from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from core.exceptions import BusinessRuleError, NotFoundError
from core.models import ActualsVariance, Project, ProjectStatus
from core.services.risk import RiskThresholds
from core.services.week_calendar import fixed_clock
from infra.services import build_service_graph
from infra.settings import load_engine_settings

NOW = datetime(2025, 2, 19, 12, 0, tzinfo=timezone.utc)
AS_OF = datetime(2025, 2, 16, 23, 59, 59, 999000, tzinfo=timezone.utc)
W = [date(2025, 2, 3), date(2025, 2, 10), date(2025, 2, 17), date(2025, 2, 24)]


def _healthy(seed_project):
    return seed_project(
        "Healthy",
        planned={w: 40.0 for w in W},
        actuals={W[0]: 40.0, W[1]: 40.0},
        budget=[(150, 200, 22500, 30000)],
    )


def _lagging(seed_project):
    return seed_project(
        "Lagging",
        planned={w: 40.0 for w in W},
        actuals={W[0]: 20.0},
        budget=[(90, 100, 13500, 15000)],
        client_name="Globex",
        pm_name="Pat Manager",
    )


def test_resolve_as_of_uses_injected_clock(services):
    assert services.portfolio_service.resolve_as_of() == AS_OF
    assert services.portfolio_service.resolve_as_of(NOW) == AS_OF


def test_budget_summary_from_repositories(services, seed_project):
    project = _healthy(seed_project)

    budget = services.portfolio_service.get_budget_summary(project.id)

    assert budget.as_of == AS_OF
    assert budget.actual_hours_to_date == 80
    assert budget.actual_dollars_to_date == 12000
    assert budget.projected_current_week_hours == 40
    assert budget.projected_future_weeks_hours == 40
    assert budget.forecast_hours == 160
    assert budget.envelope.high_hours == 200


def test_explicit_as_of_moves_the_boundary(services, seed_project):
    project = _healthy(seed_project)
    budget = services.portfolio_service.get_budget_summary(project.id, as_of=date(2025, 2, 9))
    assert budget.actual_hours_to_date == 40
    assert budget.projected_current_week_hours == 40


def test_revenue_recovery_from_repositories(services, seed_project):
    project = _lagging(seed_project)
    recovery = services.portfolio_service.get_revenue_recovery(project.id)
    assert recovery.to_date.forecast_dollars == 12000
    assert recovery.to_date.actual_dollars == 3000
    assert recovery.to_date.recovery_percent == pytest.approx(25.0)


def test_unknown_project_raises_not_found(services):
    with pytest.raises(NotFoundError) as exc:
        services.portfolio_service.get_budget_summary("missing")
    assert exc.value.code == "PROJECT_NOT_FOUND"


def test_project_without_start_date_is_rejected(services):
    project = Project.create("Undated", None)
    services.project_repo.add(project)
    services.session.commit()

    with pytest.raises(BusinessRuleError) as exc:
        services.portfolio_service.get_revenue_recovery(project.id)
    assert exc.value.code == "PROJECT_START_MISSING"
    assert services.portfolio_service.list_at_risk_projects() == []


def test_at_risk_lists_active_projects_with_metadata(services, seed_project):
    _healthy(seed_project)
    lagging = _lagging(seed_project)
    seed_project(
        "Paused",
        planned={w: 40.0 for w in W},
        actuals={},
        budget=[(10, 10, 1, 1)],
        status=ProjectStatus.ON_HOLD,
    )

    risks = services.portfolio_service.list_at_risk_projects()

    assert [r.project_id for r in risks] == [lagging.id]
    risk = risks[0]
    assert risk.name == "Lagging"
    assert risk.slug == "lagging"
    assert risk.client_name == "Globex"
    assert risk.status == "ACTIVE"
    assert risk.key_roles.pms == ("Pat Manager",)
    assert risk.risks == [
        "Actuals missing",
        "Low buffer",
        "Previous 4 weeks recovery < 80%",
        "Overall recovery < 80%",
    ]


def test_thresholds_come_from_settings(session, seed_project, tmp_path):
    lagging = _lagging(seed_project)
    settings = load_engine_settings(
        tmp_path / "missing.json",
        env={"PW_LOW_BUFFER_PERCENT": "0", "PW_RECOVERY_THRESHOLD_PERCENT": "20"},
    )
    lenient = build_service_graph(session, settings=settings, clock=fixed_clock(NOW))

    risks = lenient.portfolio_service.list_at_risk_projects()

    assert lenient.portfolio_service.thresholds == RiskThresholds(low_buffer_percent=0.0, recovery_percent=20.0)
    assert [r.project_id for r in risks] == [lagging.id]
    assert risks[0].risks == ["Actuals missing"]


def test_snapshot_uses_one_as_of_for_every_project(services, seed_project):
    healthy = _healthy(seed_project)
    lagging = _lagging(seed_project)

    snapshot = services.portfolio_service.get_portfolio_snapshot()

    assert snapshot.as_of == AS_OF
    assert {s.project.id for s in snapshot.summaries} == {healthy.id, lagging.id}
    for summary in snapshot.summaries:
        assert summary.budget.as_of == AS_OF
        assert summary.recovery.as_of == AS_OF
    assert [r.project_id for r in snapshot.at_risk] == [lagging.id]
    assert snapshot.summary_for(healthy.id).budget.forecast_hours == 160
    assert snapshot.as_dict()["at_risk"][0]["name"] == "Lagging"


def test_snapshot_matches_individual_calls(services, seed_project):
    lagging = _lagging(seed_project)
    snapshot = services.portfolio_service.get_portfolio_snapshot(now=NOW)
    assert snapshot.summary_for(lagging.id).budget == services.portfolio_service.get_budget_summary(
        lagging.id, as_of=snapshot.as_of
    )
    assert snapshot.at_risk == services.portfolio_service.list_at_risk_projects(as_of=snapshot.as_of)


def test_week_totals_flag_actuals_variance(services, seed_project):
    lagging = _lagging(seed_project)

    weeks = services.portfolio_service.get_week_totals(lagging.id)

    assert [w.week_start for w in weeks] == W
    first, second, current, future = weeks
    assert first.utilization == pytest.approx(0.5)
    assert first.actuals_variance is ActualsVariance.UNDER
    # Nothing reported for a planned week counts as fully under plan.
    assert second.utilization is None
    assert second.actuals_variance is ActualsVariance.UNDER
    assert second.missing_actuals and not first.missing_actuals
    assert not current.missing_actuals
    assert current.actuals_variance is ActualsVariance.NONE
    assert future.actuals_variance is ActualsVariance.NONE


def test_variance_thresholds_come_from_settings(session, seed_project, tmp_path):
    lagging = _lagging(seed_project)
    settings = load_engine_settings(tmp_path / "missing.json", env={"PW_ACTUALS_LOW_THRESHOLD_PERCENT": "60"})
    lenient = build_service_graph(session, settings=settings, clock=fixed_clock(NOW))

    first, second, *_ = lenient.portfolio_service.get_week_totals(lagging.id)

    assert lenient.portfolio_service.variance.low_percent == 60.0
    assert first.actuals_variance is ActualsVariance.NONE
    assert second.actuals_variance is ActualsVariance.UNDER


def test_project_variance_override_beats_settings(services, seed_project):
    strict = seed_project(
        "Strict",
        planned={W[0]: 40.0},
        actuals={W[0]: 41.0},
        actuals_high_threshold_percent=1.0,
    )

    first = services.portfolio_service.get_week_totals(strict.id)[0]

    assert first.actuals_variance is ActualsVariance.OVER


def test_snapshot_carries_week_totals(services, seed_project):
    lagging = _lagging(seed_project)

    snapshot = services.portfolio_service.get_portfolio_snapshot()

    weeks = snapshot.summary_for(lagging.id).weeks
    assert weeks == services.portfolio_service.get_week_totals(lagging.id, as_of=snapshot.as_of)
    assert snapshot.as_dict()["projects"][0]["weeks"][0]["week_start"] == "2025-02-03"
