from __future__ import annotations

from enum import Enum


class ProjectStatus(str, Enum):
    PLANNED = "PLANNED"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"


class WeekPhase(str, Enum):
    COMPLETED = "COMPLETED"
    CURRENT = "CURRENT"
    FUTURE = "FUTURE"


class BudgetLineType(str, Enum):
    SOW = "SOW"
    CHANGE_ORDER = "CO"
    OTHER = "OTHER"


class KeyRoleType(str, Enum):
    PM = "PM"
    PGM = "PGM"
    CAD = "CAD"


class ActualsVariance(str, Enum):
    NONE = "NONE"
    UNDER = "UNDER"
    OVER = "OVER"


__all__ = ["ProjectStatus", "WeekPhase", "BudgetLineType", "KeyRoleType", "ActualsVariance"]
