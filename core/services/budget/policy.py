from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_ACTUALS_LOW_THRESHOLD_PERCENT = 10.0
DEFAULT_ACTUALS_HIGH_THRESHOLD_PERCENT = 5.0


@dataclass(frozen=True)
class ActualsVarianceThresholds:
    """
    When reported actuals are highlighted against plan.

    low_percent: actuals more than this far under plan are flagged UNDER.
    high_percent: actuals more than this far over plan are flagged OVER.
    """

    low_percent: float = DEFAULT_ACTUALS_LOW_THRESHOLD_PERCENT
    high_percent: float = DEFAULT_ACTUALS_HIGH_THRESHOLD_PERCENT

    def for_project(self, project: Any) -> "ActualsVarianceThresholds":
        """Apply a project's own threshold overrides, when it has any."""
        low: Optional[float] = getattr(project, "actuals_low_threshold_percent", None)
        high: Optional[float] = getattr(project, "actuals_high_threshold_percent", None)
        return ActualsVarianceThresholds(
            low_percent=self.low_percent if low is None else float(low),
            high_percent=self.high_percent if high is None else float(high),
        )


__all__ = [
    "ActualsVarianceThresholds",
    "DEFAULT_ACTUALS_LOW_THRESHOLD_PERCENT",
    "DEFAULT_ACTUALS_HIGH_THRESHOLD_PERCENT",
]
