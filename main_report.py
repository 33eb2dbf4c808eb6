# main_report.py
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import typer

from infra.db.base import create_session_factory
from infra.logging_config import setup_logging
from infra.path import default_export_dir
from infra.services import PortfolioExportResult, ServiceGraph, build_service_graph, run_portfolio_export
from infra.settings import load_engine_settings

app = typer.Typer(no_args_is_help=True, help="Resourcing rollups, recovery and at-risk reporting.")


def _parse_now(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {value!r}") from exc


def build_services(settings_path: Optional[Path] = None) -> ServiceGraph:
    settings = load_engine_settings(settings_path)
    session_factory = create_session_factory(settings.db_url)
    return build_service_graph(session_factory(), settings=settings)


@app.command()
def export(
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Where to write the workbook and charts."),
    now: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM-DD); defaults to today."),
    settings: Optional[Path] = typer.Option(None, help="Settings JSON file."),
):
    """Write the portfolio workbook and per-project recovery charts."""
    setup_logging()
    graph = build_services(settings)
    try:
        result: PortfolioExportResult = run_portfolio_export(
            graph, output_dir or default_export_dir(), now=_parse_now(now)
        )
    finally:
        graph.session.close()

    typer.echo(f"As of {result.as_of.date().isoformat()} (trace {result.trace_id})")
    typer.echo(f"  Workbook: {result.excel_path}")
    typer.echo(f"  Charts:   {len(result.chart_paths)}")


@app.command("at-risk")
def at_risk(
    now: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM-DD); defaults to today."),
    settings: Optional[Path] = typer.Option(None, help="Settings JSON file."),
):
    """List active projects with risk tags."""
    setup_logging()
    graph = build_services(settings)
    try:
        service = graph.portfolio_service
        as_of = service.resolve_as_of(_parse_now(now))
        risks = service.list_at_risk_projects(as_of=as_of)
    finally:
        graph.session.close()

    typer.echo(f"At-risk projects as of {as_of.date().isoformat()}")
    typer.echo("=" * 30)
    if not risks:
        typer.echo("  none")
    for risk in risks:
        typer.echo(f"  {risk.name} ({risk.client_name or '-'}): {'; '.join(risk.risks)}")


if __name__ == "__main__":
    app()
