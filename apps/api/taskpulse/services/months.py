from __future__ import annotations

from datetime import date as Date
from datetime import datetime, timedelta


def parse_month(month: str) -> tuple[int, int]:
    year_text, month_text = month.split("-", 1)
    return int(year_text), int(month_text)


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def shift_month(month: str, delta: int) -> str:
    year, num = parse_month(month)
    index = year * 12 + (num - 1) + delta
    return format_month(index // 12, index % 12 + 1)


def month_key(day: Date) -> str:
    return format_month(day.year, day.month)


def first_day(month: str) -> Date:
    year, num = parse_month(month)
    return Date(year, num, 1)


def last_day(month: str) -> Date:
    return first_day(shift_month(month, 1)) - timedelta(days=1)


def month_bounds(month: str) -> tuple[datetime, datetime]:
    """Return [start, end) instants covering the calendar month."""
    start = first_day(month)
    end = first_day(shift_month(month, 1))
    return (
        datetime(start.year, start.month, start.day),
        datetime(end.year, end.month, end.day),
    )


def month_keys_ending_at(month: str, count: int) -> list[str]:
    """Oldest first, ``month`` last."""
    if count <= 0:
        return []
    return [shift_month(month, -offset) for offset in range(count - 1, -1, -1)]
