from pathlib import Path
from typing import Any, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from core.domain.enums import ActualsVariance
from core.reporting.contexts import PortfolioReportContext
from core.services.week_calendar.engine import format_week_key

MISSING = "—"


def _pct(value: Optional[float]) -> Any:
    return MISSING if value is None else round(value, 1)


class PortfolioExcelRenderer:
    def __init__(self) -> None:
        self._header_font = Font(bold=True)
        self._title_font = Font(bold=True, size=14)
        self._center = Alignment(horizontal="center")
        self._border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        self._header_fill = PatternFill("solid", fgColor="DDDDDD")
        self._risk_fill = PatternFill("solid", fgColor="F8D7DA")

    def _header(self, ws, headers: Sequence[str]) -> None:
        for col_index, h in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col_index, value=h)
            cell.font = self._header_font
            cell.alignment = self._center
            cell.fill = self._header_fill
            cell.border = self._border

    def _row(self, ws, row_index: int, values: Sequence[Any]) -> None:
        for col_index, v in enumerate(values, start=1):
            ws.cell(row=row_index, column=col_index, value=v).border = self._border

    def render(self, ctx: PortfolioReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        snapshot = ctx.snapshot
        wb = Workbook()

        # ---------------- At Risk ----------------
        ws = wb.active
        ws.title = "At Risk"
        self._header(ws, ["Project", "Client", "Status", "PMs", "PGM", "CAD", "Risks"])
        for r, risk in enumerate(snapshot.at_risk, start=2):
            self._row(
                ws,
                r,
                [
                    risk.name,
                    risk.client_name,
                    risk.status,
                    ", ".join(risk.key_roles.pms),
                    risk.key_roles.pgm or "",
                    risk.key_roles.cad or "",
                    "; ".join(risk.risks),
                ],
            )
            ws.cell(row=r, column=7).fill = self._risk_fill
        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 22
        ws.column_dimensions["G"].width = 60

        # ---------------- Budget ----------------
        ws_b = wb.create_sheet("Budget")
        self._header(
            ws_b,
            [
                "Project",
                "Low hrs",
                "High hrs",
                "Actual hrs to date",
                "Forecast hrs",
                "Burn low %",
                "Burn high %",
                "Remaining after forecast (low $)",
                "Remaining after forecast (high $)",
                "Actuals missing",
                "Forecast incomplete",
            ],
        )
        for r, summary in enumerate(snapshot.summaries, start=2):
            b = summary.budget
            self._row(
                ws_b,
                r,
                [
                    summary.project.name,
                    b.envelope.low_hours,
                    b.envelope.high_hours,
                    b.actual_hours_to_date,
                    b.forecast_hours,
                    _pct(b.burn_percent_low_hours),
                    _pct(b.burn_percent_high_hours),
                    b.remaining_after_forecast_dollars_low,
                    b.remaining_after_forecast_dollars_high,
                    "Yes" if b.missing_actuals else "No",
                    "Yes" if b.forecast_incomplete else "No",
                ],
            )
        ws_b.column_dimensions["A"].width = 30
        for col in ("B", "C", "D", "E", "F", "G", "H", "I", "J", "K"):
            ws_b.column_dimensions[col].width = 16

        # ---------------- Recovery ----------------
        ws_r = wb.create_sheet("Recovery")
        self._header(
            ws_r,
            [
                "Project",
                "Forecast $ to date",
                "Actual $ to date",
                "Recovery % to date",
                "Previous weeks recovery %",
                "Delta $",
            ],
        )
        for r, summary in enumerate(snapshot.summaries, start=2):
            rec = summary.recovery
            self._row(
                ws_r,
                r,
                [
                    summary.project.name,
                    rec.to_date.forecast_dollars,
                    rec.to_date.actual_dollars,
                    _pct(rec.to_date.recovery_percent),
                    _pct(rec.previous_weeks.recovery_percent),
                    rec.to_date.dollars_delta,
                ],
            )
        ws_r.column_dimensions["A"].width = 30
        for col in ("B", "C", "D", "E", "F"):
            ws_r.column_dimensions[col].width = 20

        row = len(snapshot.summaries) + 3
        ws_r.cell(row=row, column=1, value=f"As of {snapshot.as_of.isoformat()}").font = self._title_font

        # ---------------- Weekly ----------------
        ws_w = wb.create_sheet("Weekly")
        self._header(
            ws_w,
            [
                "Project",
                "Week",
                "Planned hrs",
                "Actual hrs",
                "Scheduled hrs",
                "Utilization %",
                "Actuals variance",
                "Missing actuals",
                "Schedule mismatch",
            ],
        )
        r = 2
        for summary in snapshot.summaries:
            for week in summary.weeks:
                self._row(
                    ws_w,
                    r,
                    [
                        summary.project.name,
                        format_week_key(week.week_start),
                        week.planned_hours,
                        week.actual_hours,
                        week.scheduled_hours,
                        _pct(None if week.utilization is None else week.utilization * 100),
                        week.actuals_variance.value,
                        "Yes" if week.missing_actuals else "No",
                        "Yes" if week.planning_mismatch else "No",
                    ],
                )
                if week.actuals_variance is not ActualsVariance.NONE:
                    ws_w.cell(row=r, column=7).fill = self._risk_fill
                r += 1
        ws_w.column_dimensions["A"].width = 30
        for col in ("B", "C", "D", "E", "F", "G", "H", "I"):
            ws_w.column_dimensions[col].width = 16

        wb.save(output_path)
        return output_path
