from .evaluator import (
    budget_risks,
    buffer_percent_hours,
    evaluate_portfolio,
    evaluate_project_risks,
    recovery_risks,
)
from .models import KeyRoles, ProjectRisk, ProjectRiskInput
from .policy import RiskThresholds

__all__ = [
    "RiskThresholds",
    "ProjectRisk",
    "ProjectRiskInput",
    "KeyRoles",
    "buffer_percent_hours",
    "budget_risks",
    "recovery_risks",
    "evaluate_project_risks",
    "evaluate_portfolio",
]
