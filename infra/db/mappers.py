# infra/db/mappers.py
from __future__ import annotations

from core.models import (
    Assignment,
    BudgetLine,
    Person,
    Project,
    ProjectKeyRole,
    ProjectRoleRate,
    Role,
    WeeklyHoursEntry,
)
from infra.db.models import (
    AssignmentORM,
    BudgetLineORM,
    PersonORM,
    ProjectKeyRoleORM,
    ProjectORM,
    ProjectRoleRateORM,
    RoleORM,
)


def project_to_orm(p: Project) -> ProjectORM:
    return ProjectORM(
        id=p.id,
        name=p.name,
        slug=p.slug,
        client_name=p.client_name,
        start_date=p.start_date,
        end_date=p.end_date,
        status=p.status,
        use_single_rate=p.use_single_rate,
        single_bill_rate=p.single_bill_rate,
        actuals_low_threshold_percent=p.actuals_low_threshold_percent,
        actuals_high_threshold_percent=p.actuals_high_threshold_percent,
    )


def project_from_orm(o: ProjectORM) -> Project:
    return Project(
        id=o.id,
        name=o.name,
        slug=o.slug,
        client_name=o.client_name or "",
        start_date=o.start_date,
        end_date=o.end_date,
        status=o.status,
        use_single_rate=bool(o.use_single_rate),
        single_bill_rate=o.single_bill_rate,
        actuals_low_threshold_percent=o.actuals_low_threshold_percent,
        actuals_high_threshold_percent=o.actuals_high_threshold_percent,
    )


def person_to_orm(p: Person) -> PersonORM:
    return PersonORM(id=p.id, name=p.name, email=p.email, is_active=p.is_active)


def person_from_orm(o: PersonORM) -> Person:
    return Person(id=o.id, name=o.name, email=o.email, is_active=bool(o.is_active))


def role_to_orm(r: Role) -> RoleORM:
    return RoleORM(id=r.id, name=r.name)


def role_from_orm(o: RoleORM) -> Role:
    return Role(id=o.id, name=o.name)


def assignment_to_orm(a: Assignment) -> AssignmentORM:
    return AssignmentORM(
        id=a.id,
        project_id=a.project_id,
        person_id=a.person_id,
        role_id=a.role_id,
        bill_rate_override=a.bill_rate_override,
    )


def assignment_from_orm(o: AssignmentORM) -> Assignment:
    return Assignment(
        id=o.id,
        project_id=o.project_id,
        person_id=o.person_id,
        role_id=o.role_id,
        bill_rate_override=o.bill_rate_override,
    )


def role_rate_to_orm(r: ProjectRoleRate) -> ProjectRoleRateORM:
    return ProjectRoleRateORM(id=r.id, project_id=r.project_id, role_id=r.role_id, bill_rate=r.bill_rate)


def role_rate_from_orm(o: ProjectRoleRateORM) -> ProjectRoleRate:
    return ProjectRoleRate(id=o.id, project_id=o.project_id, role_id=o.role_id, bill_rate=o.bill_rate)


def hours_from_orm(o) -> WeeklyHoursEntry:
    return WeeklyHoursEntry(
        project_id=o.project_id,
        person_id=o.person_id,
        week_start_date=o.week_start_date,
        hours=o.hours,
    )


def budget_line_to_orm(b: BudgetLine) -> BudgetLineORM:
    return BudgetLineORM(
        id=b.id,
        project_id=b.project_id,
        line_type=b.line_type,
        label=b.label,
        low_hours=b.low_hours,
        high_hours=b.high_hours,
        low_dollars=b.low_dollars,
        high_dollars=b.high_dollars,
    )


def budget_line_from_orm(o: BudgetLineORM) -> BudgetLine:
    return BudgetLine(
        id=o.id,
        project_id=o.project_id,
        line_type=o.line_type,
        label=o.label,
        low_hours=o.low_hours or 0.0,
        high_hours=o.high_hours or 0.0,
        low_dollars=o.low_dollars or 0.0,
        high_dollars=o.high_dollars or 0.0,
    )


def key_role_to_orm(k: ProjectKeyRole) -> ProjectKeyRoleORM:
    return ProjectKeyRoleORM(
        id=k.id,
        project_id=k.project_id,
        person_id=k.person_id,
        role_type=k.role_type,
    )


def key_role_from_orm(o: ProjectKeyRoleORM, person_name: str) -> ProjectKeyRole:
    return ProjectKeyRole(
        id=o.id,
        project_id=o.project_id,
        person_id=o.person_id,
        person_name=person_name,
        role_type=o.role_type,
    )


__all__ = [
    "project_to_orm",
    "project_from_orm",
    "person_to_orm",
    "person_from_orm",
    "role_to_orm",
    "role_from_orm",
    "assignment_to_orm",
    "assignment_from_orm",
    "role_rate_to_orm",
    "role_rate_from_orm",
    "hours_from_orm",
    "budget_line_to_orm",
    "budget_line_from_orm",
    "key_role_to_orm",
    "key_role_from_orm",
]
