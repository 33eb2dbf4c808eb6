from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import KeyRoleType, ProjectStatus
from core.domain.identifiers import generate_id


@dataclass
class Project:
    id: str
    name: str
    slug: str = ""
    client_name: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    use_single_rate: bool = False
    single_bill_rate: Optional[float] = None
    # Per-project overrides for the actuals variance highlight (percent).
    actuals_low_threshold_percent: Optional[float] = None
    actuals_high_threshold_percent: Optional[float] = None

    @staticmethod
    def create(name: str, start_date: date, **extra) -> "Project":
        slug = extra.pop("slug", None) or slugify(name)
        return Project(
            id=generate_id(),
            name=name,
            slug=slug,
            start_date=start_date,
            **extra,
        )


@dataclass
class ProjectKeyRole:
    id: str
    project_id: str
    person_id: str
    person_name: str
    role_type: KeyRoleType

    @staticmethod
    def create(
        project_id: str,
        person_id: str,
        person_name: str,
        role_type: KeyRoleType,
    ) -> "ProjectKeyRole":
        return ProjectKeyRole(
            id=generate_id(),
            project_id=project_id,
            person_id=person_id,
            person_name=person_name,
            role_type=role_type,
        )


def slugify(name: str) -> str:
    out: list[str] = []
    dash = False
    for ch in (name or "").strip().lower():
        if ch.isalnum():
            out.append(ch)
            dash = False
        elif not dash and out:
            out.append("-")
            dash = True
    return "".join(out).strip("-")


__all__ = ["Project", "ProjectKeyRole", "slugify"]
