"""Plain-text renderings of a day's tasks for pasting into chat or email."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from taskdesk.dates import clipboard_day, format_day

COPY_FORMATS = {
    "normal": "Without status",
    "with_status": "With status (DONE / WIP)",
    "csv": "Comma separated",
}

_PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def _by_priority(tasks: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(tasks, key=lambda t: _PRIORITY_ORDER.get(t.get("priority") or "medium", 1))


def _status(task: Dict[str, Any]) -> str:
    return "DONE" if task.get("is_completed") else "WIP"


def format_day_tasks(
    tasks: Sequence[Dict[str, Any]],
    day: str,
    fmt: str = "normal",
    *,
    include_date: bool = False,
    today: Optional[date] = None,
) -> str:
    if fmt not in COPY_FORMATS:
        raise ValueError(f"Unknown copy format: {fmt!r}")

    if fmt == "csv":
        return ", ".join(t.get("title", "") for t in tasks)

    is_today = day == format_day(today or date.today())
    show_date = include_date or not is_today
    stamp = clipboard_day(day)

    if fmt == "with_status":
        lines = [f"Updates [{stamp}]" if show_date else "Updates"]
    elif not show_date:
        lines = ["Today's tasks"]
    else:
        lines = [f"Today's tasks [{stamp}]" if is_today else f"Date [{stamp}]"]

    ids = {t.get("id") for t in tasks}
    parents = [t for t in tasks if not t.get("parent_task_id") or t.get("parent_task_id") not in ids]
    children: Dict[str, List[Dict[str, Any]]] = {}
    for t in tasks:
        pid = t.get("parent_task_id")
        if pid and pid in ids:
            children.setdefault(pid, []).append(t)

    for parent in _by_priority(parents):
        if fmt == "with_status":
            lines.append(f"     - {parent.get('title')} - {_status(parent)}")
        else:
            lines.append(f"    - {parent.get('title')}")
        for sub in _by_priority(children.get(parent.get("id"), [])):
            if fmt == "with_status":
                lines.append(f"         - {sub.get('title')} - {_status(sub)}")
            else:
                lines.append(f"        - {sub.get('title')}")

    return "\n".join(lines).strip()
