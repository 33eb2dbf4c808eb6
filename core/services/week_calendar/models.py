from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WeekPartition:
    """Weeks of a project span split around one as-of boundary."""

    completed: tuple[date, ...]
    current: date
    future: tuple[date, ...]
    current_in_range: bool

    @property
    def weeks(self) -> tuple[date, ...]:
        if self.current_in_range:
            return self.completed + (self.current,) + self.future
        return self.completed + self.future


@dataclass(frozen=True)
class MonthSpan:
    month_key: str
    label: str
    start: date
    end: date


__all__ = ["WeekPartition", "MonthSpan"]
