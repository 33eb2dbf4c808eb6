from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from core.domain import Project
from core.services.budget.models import BudgetResult
from core.services.recovery.models import RevenueRecoverySummary
from core.services.resourcing.rows import WeekTotals
from core.services.risk.models import ProjectRisk


@dataclass
class ProjectSummary:
    project: Project
    budget: BudgetResult
    recovery: RevenueRecoverySummary
    weeks: List[WeekTotals] = field(default_factory=list)


@dataclass
class PortfolioSnapshot:
    """Every figure in a snapshot shares the same as-of instant."""

    as_of: datetime
    summaries: List[ProjectSummary] = field(default_factory=list)
    at_risk: List[ProjectRisk] = field(default_factory=list)

    def summary_for(self, project_id: str) -> ProjectSummary | None:
        for summary in self.summaries:
            if summary.project.id == project_id:
                return summary
        return None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "as_of": self.as_of.isoformat(),
            "projects": [
                {
                    "project_id": s.project.id,
                    "name": s.project.name,
                    "budget": s.budget.as_dict(),
                    "recovery": s.recovery.as_dict(),
                    "weeks": [w.as_dict() for w in s.weeks],
                }
                for s in self.summaries
            ],
            "at_risk": [risk.as_dict() for risk in self.at_risk],
        }


__all__ = ["ProjectSummary", "PortfolioSnapshot"]
