"""Day strings (YYYY-MM-DD) and human-readable labels."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union

REPORT_PERIODS = ["day", "week", "month", "year"]


def format_day(value: Union[date, datetime]) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def today_str() -> str:
    return format_day(date.today())


def parse_day(text: str) -> Optional[date]:
    try:
        return date.fromisoformat((text or "").strip())
    except ValueError:
        return None


def human_readable_day(day: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    parsed = parse_day(day)
    if parsed is None:
        return day
    if parsed == today:
        return "Today"
    if parsed == today - timedelta(days=1):
        return "Yesterday"
    if parsed == today + timedelta(days=1):
        return "Tomorrow"
    return f"{parsed.strftime('%A, %B')} {parsed.day}, {parsed.year}"


def clipboard_day(day: str) -> str:
    """MM-DD-YYYY, the format used in copied task lists."""
    parsed = parse_day(day)
    if parsed is None:
        return day
    return parsed.strftime("%m-%d-%Y")


def date_range(period: str, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Start of the current day/week/month/year up to ``now``.

    Weeks start on Monday.
    """
    if period not in REPORT_PERIODS:
        raise ValueError(f"Unknown report period: {period!r}")
    end = now or datetime.now()
    start = end.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "week":
        start = start - timedelta(days=start.weekday())
    elif period == "month":
        start = start.replace(day=1)
    elif period == "year":
        start = start.replace(month=1, day=1)
    return start, end
