from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from core.models import WeekPhase
from core.services.week_calendar import (
    all_weeks,
    as_of_date,
    classify_week,
    completed_weeks,
    current_week_start,
    format_week_key,
    format_week_short,
    future_weeks,
    is_current_week,
    month_label,
    months_in_range,
    normalize_as_of,
    partition_weeks,
    previous_weeks,
    week_start_of,
)

AS_OF = datetime(2025, 2, 16, 23, 59, 59, 999000, tzinfo=timezone.utc)


def test_week_start_of_is_monday_for_every_weekday():
    for offset in range(7):
        assert week_start_of(date(2025, 2, 17) + timedelta(days=offset)) == date(2025, 2, 17)
    assert week_start_of(date(2025, 2, 16)) == date(2025, 2, 10)


def test_week_start_of_uses_utc_calendar_date():
    # 01:00 on Monday in UTC+02:00 is still Sunday in UTC.
    local = datetime(2025, 2, 17, 1, 0, tzinfo=timezone(timedelta(hours=2)))
    assert week_start_of(local) == date(2025, 2, 10)


def test_as_of_date_is_previous_sunday_end_of_day():
    assert as_of_date(datetime(2025, 2, 19, 12, tzinfo=timezone.utc)) == AS_OF
    # Monday morning already belongs to the new week.
    assert as_of_date(datetime(2025, 2, 17, 0, 0, tzinfo=timezone.utc)) == AS_OF
    # Sunday night still belongs to the previous week.
    assert as_of_date(datetime(2025, 2, 16, 23, 59, 58, tzinfo=timezone.utc)) == AS_OF - timedelta(days=7)


def test_normalize_as_of_treats_bare_date_as_end_of_day():
    assert normalize_as_of(date(2025, 2, 16)) == AS_OF
    assert normalize_as_of(datetime(2025, 2, 16, 10)).tzinfo == timezone.utc


def test_current_week_follows_as_of():
    assert current_week_start(AS_OF) == date(2025, 2, 17)


def test_completed_weeks_never_contain_current_week():
    weeks = completed_weeks(date(2025, 1, 6), date(2025, 3, 31), AS_OF)
    assert weeks[-1] == date(2025, 2, 10)
    assert date(2025, 2, 17) not in weeks


def test_future_weeks_start_at_current_week_when_in_range():
    weeks = future_weeks(date(2025, 1, 6), date(2025, 3, 3), AS_OF)
    assert weeks[0] == date(2025, 2, 17)
    assert weeks[-1] == date(2025, 3, 3)


@pytest.mark.parametrize(
    "start, end",
    [
        (date(2025, 1, 6), date(2025, 3, 31)),
        (date(2025, 2, 5), None),
        (date(2025, 2, 17), date(2025, 4, 1)),
        (date(2025, 3, 3), date(2025, 3, 30)),
    ],
)
def test_partition_is_total_without_duplicates(start, end):
    partition = partition_weeks(start, end, AS_OF)
    expected = all_weeks(start, end, today=current_week_start(AS_OF))
    assert list(partition.weeks) == expected
    assert len(set(partition.weeks)) == len(partition.weeks)


def test_open_ended_project_runs_through_current_week():
    weeks = all_weeks(date(2025, 2, 3), None, today=current_week_start(AS_OF))
    assert weeks == [date(2025, 2, 3), date(2025, 2, 10), date(2025, 2, 17)]


def test_classify_week():
    assert classify_week(date(2025, 2, 10), AS_OF) is WeekPhase.COMPLETED
    assert classify_week(date(2025, 2, 17), AS_OF) is WeekPhase.CURRENT
    assert classify_week(date(2025, 2, 24), AS_OF) is WeekPhase.FUTURE


def test_is_current_week_uses_now_not_as_of():
    assert is_current_week(date(2025, 2, 17), datetime(2025, 2, 19, tzinfo=timezone.utc))
    assert not is_current_week(date(2025, 2, 10), datetime(2025, 2, 19, tzinfo=timezone.utc))


def test_previous_weeks_most_recent_first():
    assert previous_weeks(AS_OF, 4) == [
        date(2025, 2, 10),
        date(2025, 2, 3),
        date(2025, 1, 27),
        date(2025, 1, 20),
    ]


def test_week_formatting():
    assert format_week_key(date(2025, 2, 17)) == "2025-02-17"
    assert format_week_short(date(2025, 2, 17)) == "2/17"
    assert format_week_short(date(2025, 12, 1)) == "12/01"


def test_month_helpers():
    assert month_label("2025-02") == "Feb 2025"
    spans = months_in_range(date(2024, 11, 15), date(2025, 2, 3))
    assert [s.month_key for s in spans] == ["2024-11", "2024-12", "2025-01", "2025-02"]
    assert spans[0].label == "11/2024"
    assert spans[-1].end == date(2025, 2, 28)


def test_mid_week_as_of_makes_next_week_current():
    wednesday = datetime(2025, 2, 12, 12, tzinfo=timezone.utc)

    assert current_week_start(wednesday) == date(2025, 2, 17)
    assert classify_week(date(2025, 2, 10), wednesday) is WeekPhase.COMPLETED
    assert classify_week(date(2025, 2, 17), wednesday) is WeekPhase.CURRENT

    partition = partition_weeks(date(2025, 2, 3), date(2025, 3, 2), wednesday)
    assert partition.completed == (date(2025, 2, 3), date(2025, 2, 10))
    assert partition.current == date(2025, 2, 17)
    assert partition.current_in_range
    assert partition.future == (date(2025, 2, 24),)
