from .calculator import (
    compute_revenue_recovery,
    monthly_recovery,
    previous_weeks_recovery,
    to_date_recovery,
)
from .models import MonthlyRecoveryPoint, RecoveryPoint, RevenueRecoverySummary

__all__ = [
    "compute_revenue_recovery",
    "previous_weeks_recovery",
    "to_date_recovery",
    "monthly_recovery",
    "RecoveryPoint",
    "MonthlyRecoveryPoint",
    "RevenueRecoverySummary",
]
