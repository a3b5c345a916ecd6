from datetime import datetime

import plotly.graph_objects as go

from taskdesk.reports import completed_by_project, completed_chart

NOW = datetime(2026, 10, 17, 12, 0)

PROJECTS = [{"id": "p1", "name": "Work"}, {"id": "p2", "name": "Home"}, {"id": "p3", "name": "Idle"}]

TASKS = [
    {"project_id": "p1", "day": "2026-10-17", "is_completed": True},
    {"project_id": "p2", "day": "2026-10-16", "is_completed": True},
    {"project_id": "p2", "day": "2026-10-13", "is_completed": True},
    {"project_id": "p2", "day": "2026-10-17", "is_completed": False},
    {"project_id": "p1", "day": "2026-09-30", "is_completed": True},
]


def test_completed_by_project_week():
    df = completed_by_project(TASKS, PROJECTS, "week", now=NOW)
    assert df.to_dict("records") == [{"name": "Home", "tasks": 2}, {"name": "Work", "tasks": 1}]


def test_completed_by_project_day_and_year():
    assert completed_by_project(TASKS, PROJECTS, "day", now=NOW).to_dict("records") == [{"name": "Work", "tasks": 1}]
    year = completed_by_project(TASKS, PROJECTS, "year", now=NOW)
    assert dict(zip(year["name"], year["tasks"])) == {"Work": 2, "Home": 2}


def test_completed_by_project_empty():
    df = completed_by_project([], PROJECTS, "month", now=NOW)
    assert df.empty
    assert list(df.columns) == ["name", "tasks"]


def test_completed_chart():
    df = completed_by_project(TASKS, PROJECTS, "week", now=NOW)
    fig = completed_chart(df)
    assert isinstance(fig, go.Figure)
    assert list(fig.data[0].x) == ["Home", "Work"]
