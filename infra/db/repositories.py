# infra/db/repositories.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import (
    AssignmentRepository,
    BudgetLineRepository,
    KeyRoleRepository,
    PersonRepository,
    ProjectRepository,
    RoleRateRepository,
    RoleRepository,
    WeeklyHoursRepository,
)
from core.models import (
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
from infra.db.mappers import (
    assignment_from_orm,
    assignment_to_orm,
    budget_line_from_orm,
    budget_line_to_orm,
    hours_from_orm,
    key_role_from_orm,
    key_role_to_orm,
    person_from_orm,
    person_to_orm,
    project_from_orm,
    project_to_orm,
    role_from_orm,
    role_rate_from_orm,
    role_rate_to_orm,
    role_to_orm,
)
from infra.db.models import (
    ActualHoursORM,
    AssignmentORM,
    BudgetLineORM,
    PersonORM,
    PlannedHoursORM,
    ProjectKeyRoleORM,
    ProjectORM,
    ProjectRoleRateORM,
    RoleORM,
    ScheduledHoursORM,
)


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def get(self, project_id: str) -> Optional[Project]:
        obj = self.session.get(ProjectORM, project_id)
        return project_from_orm(obj) if obj else None

    def get_by_slug(self, slug: str) -> Optional[Project]:
        stmt = select(ProjectORM).where(ProjectORM.slug == slug)
        obj = self.session.execute(stmt).scalars().first()
        return project_from_orm(obj) if obj else None

    def list_all(self) -> List[Project]:
        stmt = select(ProjectORM).order_by(ProjectORM.name)
        rows = self.session.execute(stmt).scalars().all()
        return [project_from_orm(row) for row in rows]

    def list_by_status(self, status: ProjectStatus) -> List[Project]:
        stmt = select(ProjectORM).where(ProjectORM.status == status).order_by(ProjectORM.name)
        rows = self.session.execute(stmt).scalars().all()
        return [project_from_orm(row) for row in rows]


class SqlAlchemyPersonRepository(PersonRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, person: Person) -> None:
        self.session.add(person_to_orm(person))

    def get(self, person_id: str) -> Optional[Person]:
        obj = self.session.get(PersonORM, person_id)
        return person_from_orm(obj) if obj else None


class SqlAlchemyRoleRepository(RoleRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, role: Role) -> None:
        self.session.add(role_to_orm(role))

    def get(self, role_id: str) -> Optional[Role]:
        obj = self.session.get(RoleORM, role_id)
        return role_from_orm(obj) if obj else None


class SqlAlchemyAssignmentRepository(AssignmentRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, assignment: Assignment) -> None:
        self.session.add(assignment_to_orm(assignment))

    def list_by_project(self, project_id: str) -> List[Assignment]:
        stmt = select(AssignmentORM).where(AssignmentORM.project_id == project_id)
        rows = self.session.execute(stmt).scalars().all()
        return [assignment_from_orm(r) for r in rows]


class SqlAlchemyRoleRateRepository(RoleRateRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, rate: ProjectRoleRate) -> None:
        self.session.add(role_rate_to_orm(rate))

    def list_by_project(self, project_id: str) -> List[ProjectRoleRate]:
        stmt = select(ProjectRoleRateORM).where(ProjectRoleRateORM.project_id == project_id)
        rows = self.session.execute(stmt).scalars().all()
        return [role_rate_from_orm(r) for r in rows]


class SqlAlchemyWeeklyHoursRepository(WeeklyHoursRepository):
    def __init__(self, session: Session):
        self.session = session

    def _set(self, orm_cls, entry: WeeklyHoursEntry) -> None:
        key = (entry.project_id, entry.person_id, entry.week_start_date)
        obj = self.session.get(orm_cls, key)
        if obj is None:
            self.session.add(
                orm_cls(
                    project_id=entry.project_id,
                    person_id=entry.person_id,
                    week_start_date=entry.week_start_date,
                    hours=entry.hours,
                )
            )
        else:
            obj.hours = entry.hours

    def _list(self, orm_cls, project_id: str) -> List[WeeklyHoursEntry]:
        stmt = (
            select(orm_cls)
            .where(orm_cls.project_id == project_id)
            .order_by(orm_cls.week_start_date, orm_cls.person_id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [hours_from_orm(r) for r in rows]

    def set_planned(self, entry: WeeklyHoursEntry) -> None:
        self._set(PlannedHoursORM, entry)

    def set_actual(self, entry: WeeklyHoursEntry) -> None:
        self._set(ActualHoursORM, entry)

    def set_scheduled(self, entry: WeeklyHoursEntry) -> None:
        self._set(ScheduledHoursORM, entry)

    def list_planned(self, project_id: str) -> List[WeeklyHoursEntry]:
        return self._list(PlannedHoursORM, project_id)

    def list_actual(self, project_id: str) -> List[WeeklyHoursEntry]:
        return self._list(ActualHoursORM, project_id)

    def list_scheduled(self, project_id: str) -> List[WeeklyHoursEntry]:
        return self._list(ScheduledHoursORM, project_id)


class SqlAlchemyBudgetLineRepository(BudgetLineRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, line: BudgetLine) -> None:
        self.session.add(budget_line_to_orm(line))

    def list_by_project(self, project_id: str) -> List[BudgetLine]:
        stmt = select(BudgetLineORM).where(BudgetLineORM.project_id == project_id)
        rows = self.session.execute(stmt).scalars().all()
        return [budget_line_from_orm(r) for r in rows]


class SqlAlchemyKeyRoleRepository(KeyRoleRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, key_role: ProjectKeyRole) -> None:
        self.session.add(key_role_to_orm(key_role))

    def list_by_project(self, project_id: str) -> List[ProjectKeyRole]:
        stmt = (
            select(ProjectKeyRoleORM, PersonORM.name)
            .join(PersonORM, PersonORM.id == ProjectKeyRoleORM.person_id)
            .where(ProjectKeyRoleORM.project_id == project_id)
            .order_by(PersonORM.name)
        )
        return [key_role_from_orm(kr, name) for kr, name in self.session.execute(stmt).all()]


__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyPersonRepository",
    "SqlAlchemyRoleRepository",
    "SqlAlchemyAssignmentRepository",
    "SqlAlchemyRoleRateRepository",
    "SqlAlchemyWeeklyHoursRepository",
    "SqlAlchemyBudgetLineRepository",
    "SqlAlchemyKeyRoleRepository",
]
