from .cells import (
    actuals_variance,
    has_missing_actuals,
    has_planning_mismatch,
    week_actuals_variance,
    weekly_utilization,
)
from .models import BudgetEnvelope, BudgetLineInput, BudgetResult, WeeklyHoursRow
from .policy import ActualsVarianceThresholds
from .rollup import compute_budget_rollups

__all__ = [
    "compute_budget_rollups",
    "weekly_utilization",
    "has_planning_mismatch",
    "has_missing_actuals",
    "actuals_variance",
    "week_actuals_variance",
    "ActualsVarianceThresholds",
    "BudgetEnvelope",
    "BudgetLineInput",
    "BudgetResult",
    "WeeklyHoursRow",
]
