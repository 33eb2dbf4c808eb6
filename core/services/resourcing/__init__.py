from .rates import build_rate_lookup, resolve_bill_rate
from .rows import WeekTotals, build_week_totals, build_weekly_rows, index_hours

__all__ = [
    "resolve_bill_rate",
    "build_rate_lookup",
    "WeekTotals",
    "index_hours",
    "build_weekly_rows",
    "build_week_totals",
]
