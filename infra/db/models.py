# infra/db/models.py
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import BudgetLineType, KeyRoleType, ProjectStatus


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    client_name: Mapped[str] = mapped_column(String, default="")
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[ProjectStatus] = mapped_column(
        SAEnum(ProjectStatus), default=ProjectStatus.ACTIVE, nullable=False
    )
    use_single_rate: Mapped[bool] = mapped_column(Boolean, default=False)
    single_bill_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    actuals_low_threshold_percent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    actuals_high_threshold_percent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


class PersonORM(Base):
    __tablename__ = "people"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class RoleORM(Base):
    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)


class AssignmentORM(Base):
    __tablename__ = "project_assignments"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    person_id: Mapped[str] = mapped_column(String, ForeignKey("people.id", ondelete="CASCADE"), nullable=False)
    role_id: Mapped[str] = mapped_column(String, ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False)
    bill_rate_override: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

Index("idx_assignments_project", AssignmentORM.project_id)


class ProjectRoleRateORM(Base):
    __tablename__ = "project_role_rates"
    __table_args__ = (UniqueConstraint("project_id", "role_id", name="ux_role_rate_project_role"),)

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    role_id: Mapped[str] = mapped_column(String, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False)
    bill_rate: Mapped[float] = mapped_column(Float, default=0.0)


class PlannedHoursORM(Base):
    __tablename__ = "planned_hours"

    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True)
    person_id: Mapped[str] = mapped_column(String, ForeignKey("people.id", ondelete="CASCADE"), primary_key=True)
    week_start_date: Mapped[date] = mapped_column(Date, primary_key=True)
    hours: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)


class ActualHoursORM(Base):
    __tablename__ = "actual_hours"

    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True)
    person_id: Mapped[str] = mapped_column(String, ForeignKey("people.id", ondelete="CASCADE"), primary_key=True)
    week_start_date: Mapped[date] = mapped_column(Date, primary_key=True)
    # NULL means the person has not reported for the week.
    hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


class ScheduledHoursORM(Base):
    __tablename__ = "scheduled_hours"

    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True)
    person_id: Mapped[str] = mapped_column(String, ForeignKey("people.id", ondelete="CASCADE"), primary_key=True)
    week_start_date: Mapped[date] = mapped_column(Date, primary_key=True)
    hours: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)


class BudgetLineORM(Base):
    __tablename__ = "budget_lines"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    line_type: Mapped[BudgetLineType] = mapped_column(
        SAEnum(BudgetLineType), default=BudgetLineType.SOW, nullable=False
    )
    label: Mapped[str] = mapped_column(String, nullable=False)
    low_hours: Mapped[float] = mapped_column(Float, default=0.0)
    high_hours: Mapped[float] = mapped_column(Float, default=0.0)
    low_dollars: Mapped[float] = mapped_column(Float, default=0.0)
    high_dollars: Mapped[float] = mapped_column(Float, default=0.0)

Index("idx_budget_lines_project", BudgetLineORM.project_id)


class ProjectKeyRoleORM(Base):
    __tablename__ = "project_key_roles"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    person_id: Mapped[str] = mapped_column(String, ForeignKey("people.id", ondelete="CASCADE"), nullable=False)
    role_type: Mapped[KeyRoleType] = mapped_column(SAEnum(KeyRoleType), nullable=False)
