from __future__ import annotations

import logging
from datetime import date as Date
from datetime import datetime, timezone
from typing import Literal

from taskpulse.schemas.summaries import (
    HistoricalMonth,
    HistoricalTrends,
    MonthlySummary,
    TrendIndicator,
)
from taskpulse.services.metrics import trend_direction
from taskpulse.services.months import month_key, month_keys_ending_at, shift_month
from taskpulse.services.repositories import SummaryStore

logger = logging.getLogger(__name__)

SeriesMetric = Literal["completion_rate", "estimation_accuracy"]


def utc_today() -> Date:
    # Stored timestamps are naive UTC.
    return datetime.now(timezone.utc).date()


def compare_completion_rates(
    current: MonthlySummary, previous: MonthlySummary
) -> TrendIndicator:
    change = current.completion_rate - previous.completion_rate
    return TrendIndicator(
        metric="completion_rate",
        current=current.completion_rate,
        previous=previous.completion_rate,
        change=change,
        direction=trend_direction(current.completion_rate, previous.completion_rate),
    )


def is_improving(values: list[int]) -> bool:
    """Later half mean beats earlier half mean; ``values`` are oldest first.

    With an odd count the middle value belongs to the earlier half.
    """
    if len(values) < 2:
        return False
    split = len(values) - len(values) // 2
    earlier = values[:split]
    later = values[split:]
    return sum(later) / len(later) > sum(earlier) / len(earlier)


class TrendAnalyzer:
    def __init__(self, summary_store: SummaryStore):
        self._summaries = summary_store

    def month_over_month(
        self, month: str, offset_months: int = 1
    ) -> TrendIndicator | None:
        current = self._summaries.find_by_month(month)
        if current is None:
            return None
        previous = self._summaries.find_by_month(shift_month(month, -offset_months))
        if previous is None:
            return None
        return compare_completion_rates(current, previous)

    def historical_trends(
        self, months_back: int = 6, today: Date | None = None
    ) -> HistoricalTrends:
        logger.info("Retrieving historical trends (months_back=%s)", months_back)
        anchor = month_key(today or utc_today())
        keys = month_keys_ending_at(anchor, months_back)
        summaries = {key: self._summaries.find_by_month(key) for key in keys}

        months: list[HistoricalMonth] = []
        for index, key in enumerate(keys):
            summary = summaries[key]
            trend = None
            if index > 0:
                previous = summaries[keys[index - 1]]
                if summary is not None and previous is not None:
                    trend = compare_completion_rates(summary, previous)
            months.append(HistoricalMonth(month=key, summary=summary, trend=trend))

        rates = [s.completion_rate for s in summaries.values() if s is not None]
        accuracies = [
            s.estimation_accuracy
            for s in summaries.values()
            if s is not None and s.estimation_accuracy is not None
        ]
        rate_improving = is_improving(rates)

        return HistoricalTrends(
            months=months,
            completion_rate_improving=rate_improving,
            estimation_accuracy_improving=is_improving(accuracies),
            average_trend="up" if rate_improving else "stable",
        )


def series_from_trends(
    trends: HistoricalTrends, metric: SeriesMetric
) -> list[int | None]:
    return [
        getattr(item.summary, metric) if item.summary is not None else None
        for item in trends.months
    ]
