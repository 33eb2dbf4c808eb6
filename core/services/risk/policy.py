from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LOW_BUFFER_PERCENT = 5.0
DEFAULT_RECOVERY_THRESHOLD_PERCENT = 80.0
DEFAULT_RECOVERY_LOOKBACK_WEEKS = 4


@dataclass(frozen=True)
class RiskThresholds:
    """
    Policy for the at-risk evaluator.

    low_buffer_percent: forecast buffer against the high hours envelope below
        which a project is tagged "Low buffer".
    recovery_percent: recovery below this (recent weeks average, or overall
        to date) tags the project.
    lookback_weeks: how many weeks before the current week the recent
        recovery rule averages over.
    """

    low_buffer_percent: float = DEFAULT_LOW_BUFFER_PERCENT
    recovery_percent: float = DEFAULT_RECOVERY_THRESHOLD_PERCENT
    lookback_weeks: int = DEFAULT_RECOVERY_LOOKBACK_WEEKS

    @property
    def actuals_missing_tag(self) -> str:
        return "Actuals missing"

    @property
    def low_buffer_tag(self) -> str:
        return "Low buffer"

    @property
    def recent_recovery_tag(self) -> str:
        return f"Previous {self.lookback_weeks} weeks recovery < {self.recovery_percent:g}%"

    @property
    def overall_recovery_tag(self) -> str:
        return f"Overall recovery < {self.recovery_percent:g}%"


__all__ = [
    "RiskThresholds",
    "DEFAULT_LOW_BUFFER_PERCENT",
    "DEFAULT_RECOVERY_THRESHOLD_PERCENT",
    "DEFAULT_RECOVERY_LOOKBACK_WEEKS",
]
