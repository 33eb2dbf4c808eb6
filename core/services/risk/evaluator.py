from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from core.services.budget.models import BudgetResult
from core.services.budget.rollup import compute_budget_rollups
from core.services.common.ratios import mean_of_present, percent_of
from core.services.recovery.calculator import compute_revenue_recovery
from core.services.recovery.models import RevenueRecoverySummary
from core.services.risk.models import ProjectRisk, ProjectRiskInput
from core.services.risk.policy import RiskThresholds
from core.services.week_calendar.engine import DateLike, resolve_as_of

logger = logging.getLogger(__name__)


def buffer_percent_hours(budget: BudgetResult) -> Optional[float]:
    """Share of the high hours envelope left after the forecast; negative when over."""
    high = budget.envelope.high_hours
    return percent_of(high - budget.forecast_hours, high)


def budget_risks(budget: BudgetResult, thresholds: RiskThresholds = RiskThresholds()) -> List[str]:
    # Projects without budget lines have nothing to burn against.
    if budget.envelope.is_empty:
        return []

    risks: List[str] = []
    if budget.missing_actuals:
        risks.append(thresholds.actuals_missing_tag)

    buffer = buffer_percent_hours(budget)
    if buffer is not None and buffer < thresholds.low_buffer_percent:
        risks.append(thresholds.low_buffer_tag)
    return risks


def recovery_risks(
    recovery: RevenueRecoverySummary,
    thresholds: RiskThresholds = RiskThresholds(),
) -> List[str]:
    risks: List[str] = []

    recent = mean_of_present(recovery.previous_week_percents)
    if recent is not None and recent < thresholds.recovery_percent:
        risks.append(thresholds.recent_recovery_tag)

    overall = recovery.to_date.recovery_percent
    if overall is not None and overall < thresholds.recovery_percent:
        risks.append(thresholds.overall_recovery_tag)
    return risks


def evaluate_project_risks(
    budget: BudgetResult,
    recovery: RevenueRecoverySummary,
    thresholds: RiskThresholds = RiskThresholds(),
) -> List[str]:
    """Budget tags then recovery tags, without duplicates."""
    tags = budget_risks(budget, thresholds) + recovery_risks(recovery, thresholds)
    return list(dict.fromkeys(tags))


def evaluate_portfolio(
    projects: Iterable[ProjectRiskInput],
    as_of: Optional[DateLike] = None,
    thresholds: RiskThresholds = RiskThresholds(),
) -> List[ProjectRisk]:
    """At-risk projects only; every project is judged against the same as-of."""
    as_of = resolve_as_of(as_of)
    results: List[ProjectRisk] = []
    for item in projects:
        budget = compute_budget_rollups(
            item.project_start,
            item.project_end,
            item.weekly_rows,
            item.budget_lines,
            as_of,
        )
        recovery = compute_revenue_recovery(
            item.project_start,
            item.project_end,
            item.weekly_rows,
            as_of,
            lookback_weeks=thresholds.lookback_weeks,
        )
        risks = evaluate_project_risks(budget, recovery, thresholds)
        logger.debug("Project %s risk tags as of %s: %s", item.project_id, as_of.isoformat(), risks)
        if risks:
            results.append(ProjectRisk(project_id=item.project_id, risks=risks))
    return results


__all__ = [
    "buffer_percent_hours",
    "budget_risks",
    "recovery_risks",
    "evaluate_project_risks",
    "evaluate_portfolio",
]
