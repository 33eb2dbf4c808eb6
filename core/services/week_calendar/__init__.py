from .clock import Clock, fixed_clock, utc_now
from .engine import (
    all_weeks,
    as_of_date,
    classify_week,
    completed_weeks,
    current_week_start,
    format_week_key,
    format_week_short,
    future_weeks,
    is_completed_week,
    is_current_week,
    is_future_week,
    normalize_as_of,
    partition_weeks,
    previous_weeks,
    resolve_as_of,
    week_start_of,
)
from .headers import parse_float_week_header, parse_week_header
from .models import MonthSpan, WeekPartition
from .months import month_key_of, month_label, months_in_range

__all__ = [
    "Clock",
    "fixed_clock",
    "utc_now",
    "week_start_of",
    "as_of_date",
    "normalize_as_of",
    "resolve_as_of",
    "current_week_start",
    "all_weeks",
    "completed_weeks",
    "future_weeks",
    "partition_weeks",
    "previous_weeks",
    "is_completed_week",
    "is_future_week",
    "is_current_week",
    "classify_week",
    "format_week_key",
    "format_week_short",
    "parse_week_header",
    "parse_float_week_header",
    "WeekPartition",
    "MonthSpan",
    "month_key_of",
    "month_label",
    "months_in_range",
]
