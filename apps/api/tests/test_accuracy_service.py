from __future__ import annotations

import pytest

from taskpulse.services.accuracy import (
    calculate_accuracy_stats,
    calculate_estimation_accuracy,
)
from tests.fixtures.tasks import done_on, pending_on


def test_exact_estimate_is_fully_accurate() -> None:
    result = calculate_estimation_accuracy(30, 30)

    assert result.accuracy_percentage == 100
    assert result.estimation_type == "accurate"


def test_double_actual_is_fifty_percent_underestimate() -> None:
    result = calculate_estimation_accuracy(30, 60)

    assert result.accuracy_percentage == 50
    assert result.estimation_type == "underestimate"


def test_estimate_above_actual_outside_tolerance_is_overestimate() -> None:
    result = calculate_estimation_accuracy(90, 60)

    assert result.accuracy_percentage == 67
    assert result.estimation_type == "overestimate"


@pytest.mark.parametrize(
    ("estimated", "actual", "expected"),
    [
        (55, 50, "accurate"),  # diff 5 == round(50 * 0.1)
        (56, 50, "overestimate"),
        (44, 50, "underestimate"),
        (4, 5, "accurate"),  # tolerance floor of one minute
        (3, 5, "underestimate"),
    ],
)
def test_tolerance_band_boundaries(estimated: int, actual: int, expected: str) -> None:
    assert calculate_estimation_accuracy(estimated, actual).estimation_type == expected


def test_accuracy_is_floored_at_zero_and_rounded_half_up() -> None:
    # 100 - 1/8*100 = 87.5 -> 88
    assert calculate_estimation_accuracy(8, 7).accuracy_percentage == 88
    assert calculate_estimation_accuracy(1, 1000).accuracy_percentage == 0


def test_stats_only_analyze_completed_tasks_with_both_durations() -> None:
    tasks = [
        done_on("2025-09-01", estimated=30, actual=30),
        done_on("2025-09-02", estimated=30, actual=60),
        done_on("2025-09-03", estimated=None, actual=45),
        done_on("2025-09-04", estimated=20, actual=0),
        pending_on("2025-09-05", estimated=60),
    ]

    stats = calculate_accuracy_stats(tasks)

    assert stats.tasks_analyzed == 2
    assert stats.total_completed == 4
    assert stats.accuracy == 75
    assert stats.average_estimate == 30
    assert stats.average_actual == 45
    assert stats.accurate_count == 1
    assert stats.underestimate_count == 1
    assert stats.overestimate_count == 0
    assert (
        stats.accurate_count + stats.overestimate_count + stats.underestimate_count
        == stats.tasks_analyzed
    )
    assert stats.trend is None


def test_stats_without_estimates_are_null_not_an_error() -> None:
    stats = calculate_accuracy_stats([done_on("2025-09-01"), pending_on("2025-09-02")])

    assert stats.accuracy is None
    assert stats.average_estimate is None
    assert stats.average_actual is None
    assert stats.tasks_analyzed == 0
    assert stats.total_completed == 1
    assert stats.accurate_count == 0


def test_trend_up_when_accuracy_improves_by_five_points_or_more() -> None:
    current = [done_on("2025-09-01", estimated=30, actual=30)]
    previous = [done_on("2025-08-01", estimated=30, actual=60)]

    stats = calculate_accuracy_stats(current, previous)

    assert stats.trend is not None
    assert stats.trend.direction == "up"
    assert stats.trend.percentage == 50


def test_trend_is_stable_inside_five_point_band() -> None:
    current = [done_on("2025-09-01", estimated=100, actual=104)]  # 96
    previous = [done_on("2025-08-01", estimated=100, actual=100)]  # 100

    stats = calculate_accuracy_stats(current, previous)

    assert stats.trend is not None
    assert stats.trend.direction == "stable"
    assert stats.trend.percentage == 4


def test_trend_down_and_absent_without_previous_estimates() -> None:
    current = [done_on("2025-09-01", estimated=30, actual=60)]

    down = calculate_accuracy_stats(current, [done_on("2025-08-01", estimated=30, actual=30)])
    absent = calculate_accuracy_stats(current, [done_on("2025-08-01")])

    assert down.trend is not None
    assert down.trend.direction == "down"
    assert absent.trend is None
