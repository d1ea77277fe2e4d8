from __future__ import annotations

import sqlite3
from typing import Annotated, Iterator

from fastapi import Depends

from taskpulse.core.config import settings
from taskpulse.services.database import connect, init_schema
from taskpulse.services.monthly_summary import MonthlySummaryService
from taskpulse.services.repositories import (
    SQLiteMonthlySummaryRepository,
    SQLiteTaskRepository,
)
from taskpulse.services.trends import TrendAnalyzer


def get_db() -> Iterator[sqlite3.Connection]:
    conn = connect(settings.database_path)
    try:
        init_schema(conn)
        yield conn
    finally:
        conn.close()


DbDep = Annotated[sqlite3.Connection, Depends(get_db)]


def get_task_repository(conn: DbDep) -> SQLiteTaskRepository:
    return SQLiteTaskRepository(conn)


def get_summary_repository(conn: DbDep) -> SQLiteMonthlySummaryRepository:
    return SQLiteMonthlySummaryRepository(conn)


TaskRepoDep = Annotated[SQLiteTaskRepository, Depends(get_task_repository)]
SummaryRepoDep = Annotated[
    SQLiteMonthlySummaryRepository, Depends(get_summary_repository)
]


def get_summary_service(conn: DbDep) -> MonthlySummaryService:
    return MonthlySummaryService(
        SQLiteTaskRepository(conn),
        SQLiteMonthlySummaryRepository(conn),
        tone=settings.celebration_tone,
    )


def get_trend_analyzer(conn: DbDep) -> TrendAnalyzer:
    return TrendAnalyzer(SQLiteMonthlySummaryRepository(conn))


SummaryServiceDep = Annotated[MonthlySummaryService, Depends(get_summary_service)]
TrendAnalyzerDep = Annotated[TrendAnalyzer, Depends(get_trend_analyzer)]
