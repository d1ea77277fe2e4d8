from __future__ import annotations

import math

from taskpulse.schemas.summaries import TrendDirection

# Period-over-period changes smaller than this many percentage points are "stable".
STABILITY_THRESHOLD = 5


def round_half_up(value: float) -> int:
    # 2.5 -> 3; Python round() would give 2.
    return int(math.floor(value + 0.5))


def percentage(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        return 0
    return round_half_up(numerator / denominator * 100)


def mean_or_none(values: list[int]) -> int | None:
    if not values:
        return None
    return round_half_up(sum(values) / len(values))


def trend_direction(current: float, previous: float) -> TrendDirection:
    change = current - previous
    if abs(change) < STABILITY_THRESHOLD:
        return "stable"
    if change > 0:
        return "up"
    return "down"
