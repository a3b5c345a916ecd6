"""Completed-task reports per project."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go

from taskdesk.dates import date_range, parse_day


def completed_by_project(
    tasks: Sequence[Dict[str, Any]],
    projects: Sequence[Dict[str, Any]],
    period: str,
    now: Optional[datetime] = None,
) -> pd.DataFrame:
    """Completed tasks in the current ``period`` counted per project.

    Projects without completed tasks are left out; the biggest count comes first.
    """
    start, end = date_range(period, now)
    counts: Dict[str, int] = {}
    for t in tasks:
        if not t.get("is_completed"):
            continue
        day = parse_day(t.get("day") or "")
        if day is None or not start.date() <= day <= end.date():
            continue
        counts[t.get("project_id")] = counts.get(t.get("project_id"), 0) + 1

    rows = [{"name": p["name"], "tasks": counts.get(p["id"], 0)} for p in projects]
    df = pd.DataFrame(rows, columns=["name", "tasks"])
    df = df[df["tasks"] > 0]
    return df.sort_values("tasks", ascending=False, kind="stable").reset_index(drop=True)


def completed_chart(df: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    fig.add_bar(x=df["name"], y=df["tasks"], name="Completed Tasks", marker_color="#0b63d6")
    fig.update_layout(
        template="plotly_white",
        margin=dict(l=6, r=6, t=30, b=10),
        height=380,
        yaxis=dict(tickformat="d", rangemode="tozero"),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        showlegend=True,
    )
    return fig
