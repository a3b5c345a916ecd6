from datetime import date, datetime

import pytest

from taskdesk import dates

TODAY = date(2026, 10, 17)


@pytest.mark.parametrize(
    "day, label",
    [
        ("2026-10-17", "Today"),
        ("2026-10-16", "Yesterday"),
        ("2026-10-18", "Tomorrow"),
        ("2026-10-05", "Monday, October 5, 2026"),
        ("not a day", "not a day"),
    ],
)
def test_human_readable_day(day, label):
    assert dates.human_readable_day(day, today=TODAY) == label


def test_parse_and_format():
    assert dates.parse_day(" 2026-10-17 ") == TODAY
    assert dates.parse_day("") is None
    assert dates.format_day(datetime(2026, 10, 17, 9, 30)) == "2026-10-17"
    assert dates.clipboard_day("2026-01-02") == "01-02-2026"


@pytest.mark.parametrize(
    "period, start",
    [
        ("day", datetime(2026, 10, 17)),
        ("week", datetime(2026, 10, 12)),
        ("month", datetime(2026, 10, 1)),
        ("year", datetime(2026, 1, 1)),
    ],
)
def test_date_range(period, start):
    now = datetime(2026, 10, 17, 15, 45)
    assert dates.date_range(period, now) == (start, now)


def test_date_range_unknown_period():
    with pytest.raises(ValueError):
        dates.date_range("decade")
