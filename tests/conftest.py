# tests/conftest.py
from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import infra.db.models  # noqa: F401
from core.models import (
    Assignment,
    BudgetLine,
    KeyRoleType,
    Person,
    Project,
    ProjectKeyRole,
    ProjectRoleRate,
    Role,
    WeeklyHoursEntry,
)
from core.services.week_calendar import fixed_clock
from infra.db.base import Base
from infra.services import build_service_graph

# Wednesday; the as-of boundary is Sunday 2025-02-16 and the current week starts 2025-02-17.
NOW = datetime(2025, 2, 19, 12, 0, tzinfo=timezone.utc)
AS_OF = datetime(2025, 2, 16, 23, 59, 59, 999000, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    # Keep logs, settings and support events out of the real user profile.
    monkeypatch.setenv("PW_DATA_DIR", str(tmp_path / "appdata"))


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    return build_service_graph(session, clock=fixed_clock(NOW))


@pytest.fixture
def seed_project(services):
    """
    Create a staffed project: one person at a role rate, weekly plan and
    actuals keyed by week start, and optional budget lines.
    """

    def _seed(
        name: str,
        *,
        start: date = date(2025, 2, 3),
        end: date | None = date(2025, 3, 2),
        planned: dict | None = None,
        actuals: dict | None = None,
        scheduled: dict | None = None,
        rate: float = 150.0,
        budget: list[tuple[float, float, float, float]] | None = None,
        client_name: str = "Acme",
        pm_name: str | None = None,
        **project_fields,
    ) -> Project:
        project = Project.create(name, start, end_date=end, client_name=client_name, **project_fields)
        person = Person.create(f"{name} Consultant")
        role = Role.create(f"{name} Engineer")
        services.project_repo.add(project)
        services.person_repo.add(person)
        services.role_repo.add(role)
        services.session.flush()

        services.assignment_repo.add(Assignment.create(project.id, person.id, role.id))
        services.role_rate_repo.add(ProjectRoleRate.create(project.id, role.id, rate))
        for week, hours in (planned or {}).items():
            services.hours_repo.set_planned(WeeklyHoursEntry(project.id, person.id, week, hours))
        for week, hours in (actuals or {}).items():
            services.hours_repo.set_actual(WeeklyHoursEntry(project.id, person.id, week, hours))
        for week, hours in (scheduled or {}).items():
            services.hours_repo.set_scheduled(WeeklyHoursEntry(project.id, person.id, week, hours))
        for low_h, high_h, low_d, high_d in budget or []:
            services.budget_repo.add(BudgetLine.create(project.id, "SOW", low_h, high_h, low_d, high_d))
        if pm_name:
            pm = Person.create(pm_name)
            services.person_repo.add(pm)
            services.session.flush()
            services.key_role_repo.add(ProjectKeyRole.create(project.id, pm.id, pm.name, KeyRoleType.PM))
        services.session.commit()
        return project

    return _seed
