from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

import pandas as pd


def group_by_day(tasks: Sequence[Dict[str, Any]]) -> List[Tuple[str, List[Dict[str, Any]]]]:
    """Tasks grouped by day, newest day first."""
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for t in tasks:
        groups.setdefault(t.get("day") or "", []).append(t)
    return sorted(groups.items(), key=lambda kv: kv[0], reverse=True)


def project_name(projects: Sequence[Dict[str, Any]], project_id: str) -> str:
    for p in projects:
        if p.get("id") == project_id:
            return p.get("name") or "Unknown Project"
    return "Unknown Project"


def nest_tasks(tasks: Sequence[Dict[str, Any]]) -> List[Tuple[Dict[str, Any], List[Dict[str, Any]]]]:
    """Pair each top-level task with its subtasks, keeping input order.

    A subtask whose parent is not in ``tasks`` is shown as top-level.
    """
    ids = {t.get("id") for t in tasks}
    children: Dict[str, List[Dict[str, Any]]] = {}
    top: List[Dict[str, Any]] = []
    for t in tasks:
        pid = t.get("parent_task_id")
        if pid and pid in ids:
            children.setdefault(pid, []).append(t)
        else:
            top.append(t)
    return [(t, children.get(t.get("id"), [])) for t in top]


def tasks_to_df(tasks: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    columns = ["id", "title", "project_id", "day", "priority", "is_completed", "parent_task_id"]
    if not tasks:
        return pd.DataFrame(columns=columns)
    df = pd.json_normalize(list(tasks))
    if "day" in df.columns:
        df["day"] = pd.to_datetime(df["day"], errors="coerce").dt.date
    return df
