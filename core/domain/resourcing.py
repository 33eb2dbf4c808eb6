from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class Person:
    id: str
    name: str
    email: Optional[str] = None
    is_active: bool = True

    @staticmethod
    def create(name: str, email: Optional[str] = None) -> "Person":
        return Person(id=generate_id(), name=name, email=email)


@dataclass
class Role:
    id: str
    name: str

    @staticmethod
    def create(name: str) -> "Role":
        return Role(id=generate_id(), name=name)


@dataclass
class Assignment:
    """A person staffed on a project in a given role."""

    id: str
    project_id: str
    person_id: str
    role_id: str
    bill_rate_override: Optional[float] = None

    @staticmethod
    def create(
        project_id: str,
        person_id: str,
        role_id: str,
        bill_rate_override: Optional[float] = None,
    ) -> "Assignment":
        return Assignment(
            id=generate_id(),
            project_id=project_id,
            person_id=person_id,
            role_id=role_id,
            bill_rate_override=bill_rate_override,
        )


@dataclass
class ProjectRoleRate:
    id: str
    project_id: str
    role_id: str
    bill_rate: float

    @staticmethod
    def create(project_id: str, role_id: str, bill_rate: float) -> "ProjectRoleRate":
        return ProjectRoleRate(
            id=generate_id(),
            project_id=project_id,
            role_id=role_id,
            bill_rate=bill_rate,
        )


@dataclass(frozen=True)
class WeeklyHoursEntry:
    """
    Hours for one person on one project in one week.

    Used for planned, reported (actual) and externally scheduled hours alike.
    A ``hours`` value of None only occurs for actuals and means "not reported".
    """

    project_id: str
    person_id: str
    week_start_date: date
    hours: Optional[float]


__all__ = ["Person", "Role", "Assignment", "ProjectRoleRate", "WeeklyHoursEntry"]
