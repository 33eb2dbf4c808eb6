from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Optional

from core.services.common.ratios import percent_of


@dataclass(frozen=True)
class RecoveryPoint:
    """Forecast vs actual dollars for one period (a week, window, month or to-date)."""

    period_key: str
    forecast_dollars: float
    actual_dollars: float
    recovery_percent: Optional[float]
    dollars_delta: float

    @classmethod
    def from_totals(cls, period_key: str, forecast_dollars: float, actual_dollars: float) -> "RecoveryPoint":
        return cls(
            period_key=period_key,
            forecast_dollars=forecast_dollars,
            actual_dollars=actual_dollars,
            recovery_percent=percent_of(actual_dollars, forecast_dollars),
            dollars_delta=actual_dollars - forecast_dollars,
        )


@dataclass(frozen=True)
class MonthlyRecoveryPoint(RecoveryPoint):
    month_label: str = ""
    is_complete: bool = False
    # Cumulative recovery over complete months; None until this month has completed.
    overall_recovery_percent: Optional[float] = None


@dataclass(frozen=True)
class RevenueRecoverySummary:
    as_of: datetime
    weeks: tuple[RecoveryPoint, ...]
    previous_weeks: RecoveryPoint
    to_date: RecoveryPoint
    monthly: tuple[MonthlyRecoveryPoint, ...]

    @property
    def previous_week_percents(self) -> list[Optional[float]]:
        return [point.recovery_percent for point in self.weeks]

    def as_dict(self) -> dict[str, Any]:
        return {
            "as_of": self.as_of.isoformat(),
            "weeks": [asdict(p) for p in self.weeks],
            "previous_weeks": asdict(self.previous_weeks),
            "to_date": asdict(self.to_date),
            "monthly": [asdict(p) for p in self.monthly],
        }


__all__ = ["RecoveryPoint", "MonthlyRecoveryPoint", "RevenueRecoverySummary"]
