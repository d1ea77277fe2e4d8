from __future__ import annotations

from taskpulse.services.productive_day import (
    calculate_most_productive_day,
    weekday_completion_counts,
)
from tests.fixtures.tasks import done_on, pending_on


def test_most_productive_day_picks_highest_count() -> None:
    # 2025-09-02 and 2025-09-09 are Tuesdays, 2025-09-01 a Monday.
    tasks = [
        done_on("2025-09-01"),
        done_on("2025-09-02"),
        done_on("2025-09-09"),
        pending_on("2025-09-03"),
    ]

    result = calculate_most_productive_day(tasks)

    assert result.day == "Tuesday"
    assert result.count == 2
    assert result.percentage == 67


def test_tie_goes_to_earliest_weekday_in_sunday_first_order() -> None:
    # Saturday 2025-09-06, Sunday 2025-09-07, Monday 2025-09-08
    tasks = [done_on("2025-09-06"), done_on("2025-09-08"), done_on("2025-09-07")]

    assert calculate_most_productive_day(tasks).day == "Sunday"


def test_no_completions_returns_null_day() -> None:
    result = calculate_most_productive_day([pending_on("2025-09-01")])

    assert result.day is None
    assert result.count == 0
    assert result.percentage == 0


def test_weekday_counts_are_sunday_first() -> None:
    counts = weekday_completion_counts([done_on("2025-09-07"), done_on("2025-09-13")])

    assert counts == [1, 0, 0, 0, 0, 0, 1]
