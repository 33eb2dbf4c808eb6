from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class WeeklyHoursRow:
    """One person's one week on one project."""

    week_start_date: date
    planned_hours: float
    actual_hours: Optional[float]
    rate: float


@dataclass(frozen=True)
class BudgetLineInput:
    low_hours: float
    high_hours: float
    low_dollars: float
    high_dollars: float


@dataclass(frozen=True)
class BudgetEnvelope:
    """Contractual envelope summed across budget lines; low and high never blended."""

    low_hours: float = 0.0
    high_hours: float = 0.0
    low_dollars: float = 0.0
    high_dollars: float = 0.0
    line_count: int = 0

    @classmethod
    def from_lines(cls, lines: Iterable[Any]) -> "BudgetEnvelope":
        low_hours = high_hours = low_dollars = high_dollars = 0.0
        count = 0
        for line in lines:
            low_hours += float(line.low_hours)
            high_hours += float(line.high_hours)
            low_dollars += float(line.low_dollars)
            high_dollars += float(line.high_dollars)
            count += 1
        return cls(
            low_hours=low_hours,
            high_hours=high_hours,
            low_dollars=low_dollars,
            high_dollars=high_dollars,
            line_count=count,
        )

    @property
    def is_empty(self) -> bool:
        return self.line_count == 0


@dataclass(frozen=True)
class BudgetResult:
    as_of: datetime
    envelope: BudgetEnvelope

    planned_hours_to_date: float
    actual_hours_to_date: float
    actual_dollars_to_date: float
    missing_actuals: bool

    forecast_hours: float
    forecast_dollars: float
    forecast_incomplete: bool
    projected_current_week_hours: float
    projected_current_week_dollars: float
    projected_future_weeks_hours: float
    projected_future_weeks_dollars: float

    burn_percent_low_hours: Optional[float]
    burn_percent_high_hours: Optional[float]
    burn_percent_low_dollars: Optional[float]
    burn_percent_high_dollars: Optional[float]

    remaining_hours_low: float
    remaining_hours_high: float
    remaining_dollars_low: float
    remaining_dollars_high: float

    # Envelope minus forecast: what is left after spend to date plus planned allocations.
    remaining_after_forecast_hours_low: float
    remaining_after_forecast_hours_high: float
    remaining_after_forecast_dollars_low: float
    remaining_after_forecast_dollars_high: float

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["as_of"] = self.as_of.isoformat()
        return data


__all__ = ["WeeklyHoursRow", "BudgetLineInput", "BudgetEnvelope", "BudgetResult"]
