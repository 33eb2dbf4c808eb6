"""Compatibility facade: domain models importable from ``core.models``."""

from core.domain import (
    ActualsVariance,
    Assignment,
    BudgetLine,
    BudgetLineType,
    KeyRoleType,
    Person,
    Project,
    ProjectKeyRole,
    ProjectRoleRate,
    ProjectStatus,
    Role,
    WeeklyHoursEntry,
    WeekPhase,
    generate_id,
)

__all__ = [
    "generate_id",
    "ProjectStatus",
    "WeekPhase",
    "BudgetLineType",
    "KeyRoleType",
    "ActualsVariance",
    "Project",
    "ProjectKeyRole",
    "Person",
    "Role",
    "Assignment",
    "ProjectRoleRate",
    "WeeklyHoursEntry",
    "BudgetLine",
]
