from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, status
from fastapi.responses import PlainTextResponse

from taskpulse.core.config import settings
from taskpulse.core.deps import SummaryServiceDep, TrendAnalyzerDep
from taskpulse.schemas.summaries import (
    MONTH_PATTERN,
    HistoricalTrendsResponse,
    TrendIndicator,
)
from taskpulse.services.charts import (
    format_historical_trends,
    generate_accuracy_sparkline,
    generate_completion_rate_sparkline,
    generate_weekly_completion_chart,
)
from taskpulse.services.trends import series_from_trends

router = APIRouter()

MonthPath = Annotated[str, Path(pattern=MONTH_PATTERN, description="YYYY-MM")]


def _months_back(months: int | None) -> int:
    return months if months is not None else settings.history_months


@router.get("/trends/history", response_model=HistoricalTrendsResponse)
def get_history(
    analyzer: TrendAnalyzerDep,
    months: int | None = Query(default=None, ge=1, le=24),
) -> HistoricalTrendsResponse:
    trends = analyzer.historical_trends(_months_back(months))
    return HistoricalTrendsResponse(
        **trends.model_dump(),
        completion_rate_sparkline=generate_completion_rate_sparkline(
            series_from_trends(trends, "completion_rate")
        ),
        accuracy_sparkline=generate_accuracy_sparkline(
            series_from_trends(trends, "estimation_accuracy")
        ),
    )


@router.get("/trends/history/report", response_class=PlainTextResponse)
def get_history_report(
    analyzer: TrendAnalyzerDep,
    months: int | None = Query(default=None, ge=1, le=24),
) -> str:
    trends = analyzer.historical_trends(_months_back(months))
    return format_historical_trends(trends)


@router.get("/trends/{month}", response_model=TrendIndicator)
def get_month_trend(
    month: MonthPath,
    analyzer: TrendAnalyzerDep,
    offset: int = Query(default=1, ge=1, le=24),
) -> TrendIndicator:
    indicator = analyzer.month_over_month(month, offset)
    if indicator is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Both months need a saved summary to compare",
        )
    return indicator


@router.get("/charts/weekly/{month}", response_class=PlainTextResponse)
def get_weekly_chart(month: MonthPath, service: SummaryServiceDep) -> str:
    return generate_weekly_completion_chart(service.get_month_tasks(month), month)
