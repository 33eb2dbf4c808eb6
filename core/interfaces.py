# core/interfaces.py
"""Repository contracts the persistence collaborator implements."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain import (
    Assignment,
    BudgetLine,
    Person,
    Project,
    ProjectKeyRole,
    ProjectRoleRate,
    ProjectStatus,
    Role,
    WeeklyHoursEntry,
)


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...

    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[Project]: ...

    @abstractmethod
    def list_all(self) -> List[Project]: ...

    @abstractmethod
    def list_by_status(self, status: ProjectStatus) -> List[Project]: ...


class PersonRepository(ABC):
    @abstractmethod
    def add(self, person: Person) -> None: ...

    @abstractmethod
    def get(self, person_id: str) -> Optional[Person]: ...


class RoleRepository(ABC):
    @abstractmethod
    def add(self, role: Role) -> None: ...

    @abstractmethod
    def get(self, role_id: str) -> Optional[Role]: ...


class AssignmentRepository(ABC):
    @abstractmethod
    def add(self, assignment: Assignment) -> None: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Assignment]: ...


class RoleRateRepository(ABC):
    @abstractmethod
    def add(self, rate: ProjectRoleRate) -> None: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[ProjectRoleRate]: ...


class WeeklyHoursRepository(ABC):
    """Planned, reported and externally scheduled hours per person-week."""

    @abstractmethod
    def set_planned(self, entry: WeeklyHoursEntry) -> None: ...

    @abstractmethod
    def set_actual(self, entry: WeeklyHoursEntry) -> None: ...

    @abstractmethod
    def set_scheduled(self, entry: WeeklyHoursEntry) -> None: ...

    @abstractmethod
    def list_planned(self, project_id: str) -> List[WeeklyHoursEntry]: ...

    @abstractmethod
    def list_actual(self, project_id: str) -> List[WeeklyHoursEntry]: ...

    @abstractmethod
    def list_scheduled(self, project_id: str) -> List[WeeklyHoursEntry]: ...


class BudgetLineRepository(ABC):
    @abstractmethod
    def add(self, line: BudgetLine) -> None: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[BudgetLine]: ...


class KeyRoleRepository(ABC):
    @abstractmethod
    def add(self, key_role: ProjectKeyRole) -> None: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[ProjectKeyRole]: ...


__all__ = [
    "ProjectRepository",
    "PersonRepository",
    "RoleRepository",
    "AssignmentRepository",
    "RoleRateRepository",
    "WeeklyHoursRepository",
    "BudgetLineRepository",
    "KeyRoleRepository",
]
