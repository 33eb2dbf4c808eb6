from core.domain.budget import BudgetLine
from core.domain.enums import ActualsVariance, BudgetLineType, KeyRoleType, ProjectStatus, WeekPhase
from core.domain.identifiers import generate_id, short_id
from core.domain.project import Project, ProjectKeyRole, slugify
from core.domain.resourcing import Assignment, Person, ProjectRoleRate, Role, WeeklyHoursEntry

__all__ = [
    "generate_id",
    "short_id",
    "ProjectStatus",
    "WeekPhase",
    "BudgetLineType",
    "KeyRoleType",
    "ActualsVariance",
    "Project",
    "ProjectKeyRole",
    "slugify",
    "Person",
    "Role",
    "Assignment",
    "ProjectRoleRate",
    "WeeklyHoursEntry",
    "BudgetLine",
]
