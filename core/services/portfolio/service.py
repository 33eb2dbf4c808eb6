# core/services/portfolio/service.py
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Optional, Tuple

from core.domain import KeyRoleType, Project, ProjectKeyRole, ProjectStatus, short_id
from core.exceptions import BusinessRuleError, NotFoundError
from core.interfaces import (
    AssignmentRepository,
    BudgetLineRepository,
    KeyRoleRepository,
    ProjectRepository,
    RoleRateRepository,
    WeeklyHoursRepository,
)
from core.services.budget.models import BudgetResult, WeeklyHoursRow
from core.services.budget.policy import ActualsVarianceThresholds
from core.services.budget.rollup import compute_budget_rollups
from core.services.portfolio.models import PortfolioSnapshot, ProjectSummary
from core.services.recovery.calculator import compute_revenue_recovery
from core.services.recovery.models import RevenueRecoverySummary
from core.services.resourcing.rates import build_rate_lookup
from core.services.resourcing.rows import WeekTotals, build_week_totals, build_weekly_rows
from core.services.risk.evaluator import evaluate_project_risks
from core.services.risk.models import KeyRoles, ProjectRisk
from core.services.risk.policy import RiskThresholds
from core.services.week_calendar.clock import Clock, utc_now
from core.services.week_calendar.engine import (
    DateLike,
    all_weeks,
    as_of_date,
    current_week_start,
    normalize_as_of,
)

logger = logging.getLogger(__name__)


class PortfolioService:
    """
    Read side of the resourcing dashboards: budget burn, revenue recovery
    and the at-risk list, each computed against a single as-of instant.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        assignment_repo: AssignmentRepository,
        role_rate_repo: RoleRateRepository,
        hours_repo: WeeklyHoursRepository,
        budget_repo: BudgetLineRepository,
        key_role_repo: KeyRoleRepository,
        *,
        thresholds: RiskThresholds = RiskThresholds(),
        variance: ActualsVarianceThresholds = ActualsVarianceThresholds(),
        clock: Clock = utc_now,
    ):
        self._project_repo: ProjectRepository = project_repo
        self._assignment_repo: AssignmentRepository = assignment_repo
        self._role_rate_repo: RoleRateRepository = role_rate_repo
        self._hours_repo: WeeklyHoursRepository = hours_repo
        self._budget_repo: BudgetLineRepository = budget_repo
        self._key_role_repo: KeyRoleRepository = key_role_repo
        self._thresholds = thresholds
        self._variance = variance
        self._clock = clock

    @property
    def thresholds(self) -> RiskThresholds:
        return self._thresholds

    @property
    def variance(self) -> ActualsVarianceThresholds:
        return self._variance

    # --------------------------------------------------------------
    # As-of
    # --------------------------------------------------------------

    def now(self) -> datetime:
        return self._clock()

    def resolve_as_of(self, now: Optional[DateLike] = None) -> datetime:
        """End of the week before ``now`` (or the injected clock)."""
        return as_of_date(now if now is not None else self._clock())

    def _as_of(self, as_of: Optional[DateLike]) -> datetime:
        return self.resolve_as_of() if as_of is None else normalize_as_of(as_of)

    # --------------------------------------------------------------
    # Per project
    # --------------------------------------------------------------

    def get_project(self, project_id: str) -> Project:
        return self._require_project(project_id)

    def get_budget_summary(self, project_id: str, *, as_of: Optional[DateLike] = None) -> BudgetResult:
        project = self._require_project(project_id)
        return self._budget_for(project, self._as_of(as_of))

    def get_revenue_recovery(
        self,
        project_id: str,
        *,
        as_of: Optional[DateLike] = None,
    ) -> RevenueRecoverySummary:
        project = self._require_project(project_id)
        return self._recovery_for(project, self._as_of(as_of))

    def get_weekly_rows(self, project_id: str, *, as_of: Optional[DateLike] = None) -> List[WeeklyHoursRow]:
        project = self._require_project(project_id)
        return self._weekly_rows(project, self._as_of(as_of))

    def get_week_totals(self, project_id: str, *, as_of: Optional[DateLike] = None) -> List[WeekTotals]:
        """Per-week totals with utilization and actuals variance (project overrides applied)."""
        project = self._require_project(project_id)
        return self._week_totals(project, self._as_of(as_of))

    # --------------------------------------------------------------
    # Portfolio
    # --------------------------------------------------------------

    def list_at_risk_projects(self, *, as_of: Optional[DateLike] = None) -> List[ProjectRisk]:
        resolved = self._as_of(as_of)
        results: List[ProjectRisk] = []
        for project in self._active_projects():
            _, _, risks = self._evaluate(project, resolved)
            if risks:
                results.append(self._project_risk(project, risks))
        logger.info(
            "At-risk evaluation as of %s: %d flagged",
            resolved.isoformat(),
            len(results),
        )
        return results

    def get_portfolio_snapshot(self, *, now: Optional[DateLike] = None) -> PortfolioSnapshot:
        as_of = self.resolve_as_of(now)
        logger.info("Building portfolio snapshot as of %s", as_of.isoformat())

        snapshot = PortfolioSnapshot(as_of=as_of)
        for project in self._active_projects():
            budget, recovery, risks = self._evaluate(project, as_of)
            snapshot.summaries.append(
                ProjectSummary(
                    project=project,
                    budget=budget,
                    recovery=recovery,
                    weeks=self._week_totals(project, as_of),
                )
            )
            if risks:
                snapshot.at_risk.append(self._project_risk(project, risks))

        logger.info(
            "Portfolio snapshot complete: %d projects, %d at risk",
            len(snapshot.summaries),
            len(snapshot.at_risk),
        )
        return snapshot

    # --------------------------------------------------------------
    # Internals
    # --------------------------------------------------------------

    def _require_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        if project.start_date is None:
            raise BusinessRuleError(
                f"Project '{project.name}' has no start date.",
                code="PROJECT_START_MISSING",
            )
        return project

    def _active_projects(self) -> List[Project]:
        projects: List[Project] = []
        for project in self._project_repo.list_by_status(ProjectStatus.ACTIVE):
            if project.start_date is None:
                logger.warning("Skipping project %s (%s) without a start date", project.slug, short_id(project.id))
                continue
            projects.append(project)
        return projects

    def _weeks(self, project: Project, as_of: datetime) -> List[date]:
        return all_weeks(project.start_date, project.end_date, today=current_week_start(as_of))

    def _weekly_rows(self, project: Project, as_of: datetime) -> List[WeeklyHoursRow]:
        assignments = self._assignment_repo.list_by_project(project.id)
        rates = build_rate_lookup(project, assignments, self._role_rate_repo.list_by_project(project.id))
        return build_weekly_rows(
            assignments,
            self._hours_repo.list_planned(project.id),
            self._hours_repo.list_actual(project.id),
            self._weeks(project, as_of),
            rates,
        )

    def _week_totals(self, project: Project, as_of: datetime) -> List[WeekTotals]:
        return build_week_totals(
            self._assignment_repo.list_by_project(project.id),
            self._hours_repo.list_planned(project.id),
            self._hours_repo.list_actual(project.id),
            self._hours_repo.list_scheduled(project.id),
            self._weeks(project, as_of),
            as_of=as_of,
            thresholds=self._variance.for_project(project),
        )

    def _budget_for(
        self,
        project: Project,
        as_of: datetime,
        rows: Optional[List[WeeklyHoursRow]] = None,
    ) -> BudgetResult:
        return compute_budget_rollups(
            project.start_date,
            project.end_date,
            rows if rows is not None else self._weekly_rows(project, as_of),
            self._budget_repo.list_by_project(project.id),
            as_of,
        )

    def _recovery_for(
        self,
        project: Project,
        as_of: datetime,
        rows: Optional[List[WeeklyHoursRow]] = None,
    ) -> RevenueRecoverySummary:
        return compute_revenue_recovery(
            project.start_date,
            project.end_date,
            rows if rows is not None else self._weekly_rows(project, as_of),
            as_of,
            lookback_weeks=self._thresholds.lookback_weeks,
        )

    def _evaluate(
        self,
        project: Project,
        as_of: datetime,
    ) -> Tuple[BudgetResult, RevenueRecoverySummary, List[str]]:
        rows = self._weekly_rows(project, as_of)
        budget = self._budget_for(project, as_of, rows)
        recovery = self._recovery_for(project, as_of, rows)
        risks = evaluate_project_risks(budget, recovery, self._thresholds)
        logger.debug("Project %s (%s) risk tags: %s", project.slug, short_id(project.id), risks)
        return budget, recovery, risks

    def _project_risk(self, project: Project, risks: List[str]) -> ProjectRisk:
        return ProjectRisk(
            project_id=project.id,
            risks=risks,
            name=project.name,
            slug=project.slug,
            client_name=project.client_name,
            status=project.status.value,
            key_roles=_key_roles(self._key_role_repo.list_by_project(project.id)),
        )


def _key_roles(assigned: List[ProjectKeyRole]) -> KeyRoles:
    pms = tuple(kr.person_name for kr in assigned if kr.role_type == KeyRoleType.PM)
    pgm = next((kr.person_name for kr in assigned if kr.role_type == KeyRoleType.PGM), None)
    cad = next((kr.person_name for kr in assigned if kr.role_type == KeyRoleType.CAD), None)
    return KeyRoles(pms=pms, pgm=pgm, cad=cad)


__all__ = ["PortfolioService"]
