from __future__ import annotations

from dataclasses import dataclass

from core.domain.enums import BudgetLineType
from core.domain.identifiers import generate_id


@dataclass
class BudgetLine:
    """One contractual budget line; low and high are tracked independently."""

    id: str
    project_id: str
    line_type: BudgetLineType
    label: str
    low_hours: float = 0.0
    high_hours: float = 0.0
    low_dollars: float = 0.0
    high_dollars: float = 0.0

    @staticmethod
    def create(
        project_id: str,
        label: str,
        low_hours: float,
        high_hours: float,
        low_dollars: float,
        high_dollars: float,
        line_type: BudgetLineType = BudgetLineType.SOW,
    ) -> "BudgetLine":
        return BudgetLine(
            id=generate_id(),
            project_id=project_id,
            line_type=line_type,
            label=label,
            low_hours=low_hours,
            high_hours=high_hours,
            low_dollars=low_dollars,
            high_dollars=high_dollars,
        )


__all__ = ["BudgetLine"]
