from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, List, Optional

from core.services.budget.models import WeeklyHoursRow


@dataclass(frozen=True)
class ProjectRiskInput:
    project_id: str
    project_start: date
    project_end: Optional[date]
    weekly_rows: tuple[WeeklyHoursRow, ...]
    budget_lines: tuple[Any, ...]


@dataclass(frozen=True)
class KeyRoles:
    pms: tuple[str, ...] = ()
    pgm: Optional[str] = None
    cad: Optional[str] = None


@dataclass
class ProjectRisk:
    project_id: str
    risks: List[str]
    name: str = ""
    slug: str = ""
    client_name: str = ""
    status: str = ""
    key_roles: KeyRoles = field(default_factory=KeyRoles)

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["key_roles"]["pms"] = list(self.key_roles.pms)
        return data


__all__ = ["ProjectRiskInput", "KeyRoles", "ProjectRisk"]
