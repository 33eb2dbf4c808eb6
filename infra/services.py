from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Dict

from sqlalchemy.orm import Session

from core.models import ProjectStatus
from core.reporting.api import generate_portfolio_excel_report, generate_recovery_png
from core.services.budget.policy import ActualsVarianceThresholds
from core.services.portfolio import PortfolioService
from core.services.risk.policy import RiskThresholds
from core.services.week_calendar.clock import Clock, utc_now
from infra.db.repositories import (
    SqlAlchemyAssignmentRepository,
    SqlAlchemyBudgetLineRepository,
    SqlAlchemyKeyRoleRepository,
    SqlAlchemyPersonRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyRoleRateRepository,
    SqlAlchemyRoleRepository,
    SqlAlchemyWeeklyHoursRepository,
)
from infra.operational_support import OperationalSupport, bind_trace_id, get_operational_support
from infra.settings import EngineSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    project_repo: SqlAlchemyProjectRepository
    person_repo: SqlAlchemyPersonRepository
    role_repo: SqlAlchemyRoleRepository
    assignment_repo: SqlAlchemyAssignmentRepository
    role_rate_repo: SqlAlchemyRoleRateRepository
    hours_repo: SqlAlchemyWeeklyHoursRepository
    budget_repo: SqlAlchemyBudgetLineRepository
    key_role_repo: SqlAlchemyKeyRoleRepository
    portfolio_service: PortfolioService


def build_service_graph(
    session: Session,
    *,
    settings: EngineSettings | None = None,
    clock: Clock = utc_now,
) -> ServiceGraph:
    project_repo = SqlAlchemyProjectRepository(session)
    person_repo = SqlAlchemyPersonRepository(session)
    role_repo = SqlAlchemyRoleRepository(session)
    assignment_repo = SqlAlchemyAssignmentRepository(session)
    role_rate_repo = SqlAlchemyRoleRateRepository(session)
    hours_repo = SqlAlchemyWeeklyHoursRepository(session)
    budget_repo = SqlAlchemyBudgetLineRepository(session)
    key_role_repo = SqlAlchemyKeyRoleRepository(session)

    thresholds = settings.risk if settings is not None else RiskThresholds()
    variance = settings.variance if settings is not None else ActualsVarianceThresholds()
    portfolio_service = PortfolioService(
        project_repo,
        assignment_repo,
        role_rate_repo,
        hours_repo,
        budget_repo,
        key_role_repo,
        thresholds=thresholds,
        variance=variance,
        clock=clock,
    )

    return ServiceGraph(
        session=session,
        project_repo=project_repo,
        person_repo=person_repo,
        role_repo=role_repo,
        assignment_repo=assignment_repo,
        role_rate_repo=role_rate_repo,
        hours_repo=hours_repo,
        budget_repo=budget_repo,
        key_role_repo=key_role_repo,
        portfolio_service=portfolio_service,
    )


@dataclass
class PortfolioExportResult:
    trace_id: str
    as_of: datetime
    excel_path: Path
    chart_paths: Dict[str, Path] = field(default_factory=dict)


def run_portfolio_export(
    graph: ServiceGraph,
    output_dir: str | Path,
    *,
    now: date | datetime | None = None,
    support: OperationalSupport | None = None,
    trace_id: str | None = None,
) -> PortfolioExportResult:
    """Portfolio workbook plus one recovery chart per active project, on one as-of."""
    support = support or get_operational_support()
    output_dir = Path(output_dir)
    service = graph.portfolio_service

    with bind_trace_id(trace_id) as resolved_trace:
        now = now if now is not None else service.now()
        as_of = service.resolve_as_of(now)
        logger.info("Portfolio export started (as of %s) into %s", as_of.isoformat(), output_dir)

        stamp = as_of.date().isoformat()
        excel_path = generate_portfolio_excel_report(
            service,
            output_dir / f"portfolio-{stamp}.xlsx",
            now=now,
        )
        result = PortfolioExportResult(trace_id=resolved_trace, as_of=as_of, excel_path=excel_path)

        for project in graph.project_repo.list_by_status(ProjectStatus.ACTIVE):
            if project.start_date is None:
                continue
            result.chart_paths[project.id] = generate_recovery_png(
                service,
                project.id,
                output_dir / f"recovery-{project.slug or project.id}-{stamp}.png",
                as_of=as_of,
            )

        support.emit_event(
            event_type="portfolio.export.completed",
            message=f"Portfolio export written to {output_dir}",
            trace_id=resolved_trace,
            data={
                "as_of": as_of,
                "workbook": str(excel_path),
                "charts": len(result.chart_paths),
            },
        )
        logger.info("Portfolio export finished: %d charts", len(result.chart_paths))
    return result


__all__ = [
    "ServiceGraph",
    "build_service_graph",
    "PortfolioExportResult",
    "run_portfolio_export",
]
