"""Reporting API wrappers around renderer classes."""

from datetime import date, datetime
from pathlib import Path

from core.reporting.contexts import PortfolioReportContext, RecoveryChartContext
from core.reporting.renderers.excel import PortfolioExcelRenderer
from core.reporting.renderers.recovery import RecoveryChartRenderer
from core.services.portfolio import PortfolioService


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def generate_portfolio_excel_report(
    service: PortfolioService,
    output_path: str | Path,
    *,
    now: date | datetime | None = None,
) -> Path:
    snapshot = service.get_portfolio_snapshot(now=now)
    ctx = PortfolioReportContext(snapshot=snapshot)
    return PortfolioExcelRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_recovery_png(
    service: PortfolioService,
    project_id: str,
    output_path: str | Path,
    *,
    as_of: date | datetime | None = None,
) -> Path:
    project = service.get_project(project_id)
    recovery = service.get_revenue_recovery(project_id, as_of=as_of)
    ctx = RecoveryChartContext(
        project_name=project.name,
        as_of=recovery.as_of,
        monthly=list(recovery.monthly),
        to_date=recovery.to_date,
    )
    return RecoveryChartRenderer().render(ctx, _ensure_parent(Path(output_path)))
