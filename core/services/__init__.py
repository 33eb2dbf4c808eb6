from .budget import ActualsVarianceThresholds, BudgetResult, compute_budget_rollups
from .portfolio import PortfolioService, PortfolioSnapshot
from .recovery import RevenueRecoverySummary, compute_revenue_recovery
from .risk import ProjectRisk, RiskThresholds, evaluate_portfolio, evaluate_project_risks

__all__ = [
    "compute_budget_rollups",
    "compute_revenue_recovery",
    "evaluate_project_risks",
    "evaluate_portfolio",
    "ActualsVarianceThresholds",
    "BudgetResult",
    "RevenueRecoverySummary",
    "ProjectRisk",
    "RiskThresholds",
    "PortfolioService",
    "PortfolioSnapshot",
]
