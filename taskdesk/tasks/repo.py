"""Task and project repository functions.

Every function opens a short-lived session. Pass ``database_url`` to target a
specific database, otherwise the configured one is used.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import FlushError

from taskdesk.batch.rows import DateScope, Priority, ProjectScope
from taskdesk.batch.submission import Command, ParentCommand, SubtaskCommand
from taskdesk.dates import parse_day, today_str

from .db import get_engine, get_session
from .models import Base, Project, Task

logger = logging.getLogger(__name__)

TASK_FIELDS = ("title", "day", "priority", "is_completed", "project_id")


def init_db(database_url: Optional[str] = None) -> None:
    """Create all tables if they don't exist. Safe to call multiple times."""
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("Project name cannot be empty")
    return name


def _clean_day(day: Optional[str]) -> str:
    if day is None:
        return today_str()
    if parse_day(day) is None:
        raise ValueError(f"Invalid day: {day!r}")
    return day.strip()


# ---------------- Projects ----------------


def list_projects(database_url: Optional[str] = None) -> List[Dict[str, Any]]:
    with get_session(database_url) as s:
        q = select(Project).order_by(Project.pinned.desc(), Project.name.asc())
        return [p.to_dict() for p in s.execute(q).scalars().all()]


def get_project(project_id: str, database_url: Optional[str] = None) -> Optional[Dict[str, Any]]:
    with get_session(database_url) as s:
        p = s.get(Project, project_id)
        return p.to_dict() if p else None


def create_project(name: str, database_url: Optional[str] = None) -> Dict[str, Any]:
    with get_session(database_url) as s:
        p = Project(name=_clean_name(name))
        s.add(p)
        s.commit()
        logger.info("Created project %s (%s)", p.id, p.name)
        return p.to_dict()


def rename_project(project_id: str, name: str, database_url: Optional[str] = None) -> Optional[Dict[str, Any]]:
    with get_session(database_url) as s:
        p = s.get(Project, project_id)
        if not p:
            return None
        p.name = _clean_name(name)
        s.commit()
        return p.to_dict()


def set_project_pinned(project_id: str, pinned: bool, database_url: Optional[str] = None) -> Optional[Dict[str, Any]]:
    with get_session(database_url) as s:
        p = s.get(Project, project_id)
        if not p:
            return None
        p.pinned = bool(pinned)
        s.commit()
        return p.to_dict()


def delete_project(project_id: str, database_url: Optional[str] = None) -> bool:
    """Delete a project and all of its tasks."""
    with get_session(database_url) as s:
        p = s.get(Project, project_id)
        if not p:
            return False
        s.execute(delete(Task).where(Task.project_id == project_id))
        s.delete(p)
        s.commit()
        logger.info("Deleted project %s", project_id)
        return True


# ---------------- Tasks ----------------


def list_tasks(
    project_id: Optional[str] = None,
    day: Optional[str] = None,
    database_url: Optional[str] = None,
) -> List[Dict[str, Any]]:
    with get_session(database_url) as s:
        q = select(Task).order_by(Task.day.desc(), Task.created_at.asc())
        if project_id:
            q = q.where(Task.project_id == project_id)
        if day:
            q = q.where(Task.day == day)
        return [t.to_dict() for t in s.execute(q).scalars().all()]


def get_task(task_id: str, database_url: Optional[str] = None) -> Optional[Dict[str, Any]]:
    with get_session(database_url) as s:
        t = s.get(Task, task_id)
        return t.to_dict() if t else None


def create_task(
    title: str,
    project_id: str,
    *,
    day: Optional[str] = None,
    priority: str = "medium",
    parent_task_id: Optional[str] = None,
    database_url: Optional[str] = None,
) -> Dict[str, Any]:
    title = (title or "").strip()
    if not title:
        raise ValueError("Task title cannot be empty")
    with get_session(database_url) as s:
        t = Task(
            project_id=project_id,
            title=title,
            day=_clean_day(day),
            priority=Priority.parse(priority).value,
            parent_task_id=parent_task_id,
        )
        s.add(t)
        s.commit()
        return t.to_dict()


def update_task(task_id: str, database_url: Optional[str] = None, **fields: Any) -> Optional[Dict[str, Any]]:
    unknown = set(fields) - set(TASK_FIELDS)
    if unknown:
        raise ValueError(f"Unknown task field(s): {', '.join(sorted(unknown))}")
    with get_session(database_url) as s:
        t = s.get(Task, task_id)
        if not t:
            return None
        if "title" in fields:
            title = (fields["title"] or "").strip()
            if not title:
                raise ValueError("Task title cannot be empty")
            t.title = title
        if "day" in fields:
            t.day = _clean_day(fields["day"])
        if "priority" in fields:
            t.priority = Priority.parse(fields["priority"], Priority(t.priority)).value
        if "is_completed" in fields:
            t.is_completed = bool(fields["is_completed"])
        if "project_id" in fields:
            t.project_id = fields["project_id"]
        s.commit()
        return t.to_dict()


def toggle_task(task_id: str, database_url: Optional[str] = None) -> Optional[Dict[str, Any]]:
    with get_session(database_url) as s:
        t = s.get(Task, task_id)
        if not t:
            return None
        t.is_completed = not t.is_completed
        s.commit()
        return t.to_dict()


def delete_task(task_id: str, database_url: Optional[str] = None) -> bool:
    """Delete a task together with its subtasks."""
    with get_session(database_url) as s:
        t = s.get(Task, task_id)
        if not t:
            return False
        s.execute(delete(Task).where(or_(Task.id == task_id, Task.parent_task_id == task_id)))
        s.commit()
        return True


# ---------------- Batch creation ----------------


def _task_from_command(
    cmd: Command,
    *,
    project_id: Optional[str],
    default_day: str,
    parent_task_id: Optional[str] = None,
) -> Task:
    if isinstance(cmd.scope, ProjectScope):
        task_project, task_day = cmd.scope.project_id, default_day
    elif isinstance(cmd.scope, DateScope):
        if not project_id:
            raise ValueError("project_id is required for date-scoped commands")
        task_project, task_day = project_id, _clean_day(cmd.scope.day)
    else:
        raise ValueError(f"Unsupported command scope: {cmd.scope!r}")
    return Task(
        project_id=task_project,
        title=cmd.title.strip(),
        day=task_day,
        priority=Priority.parse(cmd.priority).value,
        parent_task_id=parent_task_id,
    )


def apply_commands(
    commands: Sequence[Command],
    *,
    project_id: Optional[str] = None,
    default_day: Optional[str] = None,
    database_url: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Persist a batch editor submission in one transaction.

    Parent commands are created first; the id of the n-th parent is then
    substituted for every subtask whose ``parent_slot`` is n. Nothing is
    written if any command is invalid.

    Args:
        commands: Output of :func:`taskdesk.batch.resolve_submission`.
        project_id: Project of date-scoped (single-project) commands.
        default_day: Day of project-scoped commands, today when omitted.

    Returns:
        Created task dicts, parents first.
    """
    day = _clean_day(default_day)
    parents = [c for c in commands if isinstance(c, ParentCommand)]
    subtasks = [c for c in commands if isinstance(c, SubtaskCommand)]

    with get_session(database_url) as s:
        try:
            parent_rows = [_task_from_command(c, project_id=project_id, default_day=day) for c in parents]
            s.add_all(parent_rows)
            s.flush()
            slot_ids = [t.id for t in parent_rows]

            subtask_rows = []
            for c in subtasks:
                slot = c.parent_slot.index
                if not 0 <= slot < len(slot_ids):
                    raise ValueError(f"Parent slot {slot} out of range ({len(slot_ids)} parents)")
                subtask_rows.append(
                    _task_from_command(c, project_id=project_id, default_day=day, parent_task_id=slot_ids[slot])
                )
            s.add_all(subtask_rows)
            s.commit()
        except Exception:
            s.rollback()
            raise

        created = [t.to_dict() for t in parent_rows + subtask_rows]
    logger.info("Created %d task(s) (%d subtasks) from batch", len(created), len(subtasks))
    return created


# ---------------- Import / export ----------------


def export_data(database_url: Optional[str] = None) -> Dict[str, Any]:
    return {
        "version": 1,
        "exported_at": datetime.utcnow().isoformat() + "Z",
        "projects": list_projects(database_url),
        "tasks": list_tasks(database_url=database_url),
    }


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an exported ``created_at`` (ISO 8601, trailing ``Z``)."""
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1]
    return datetime.fromisoformat(text)


def _timestamps(item: Dict[str, Any]) -> Dict[str, Any]:
    created_at = _parse_timestamp(item.get("created_at"))
    return {"created_at": created_at} if created_at else {}


def import_data(payload: Dict[str, Any], database_url: Optional[str] = None) -> Dict[str, int]:
    """Replace all projects and tasks with the contents of an export.

    Any malformed entry (missing or duplicate id, blank name, bad day or
    timestamp) raises ``ValueError("Invalid file format")`` and leaves the
    existing data untouched.
    """
    if not isinstance(payload, dict):
        raise ValueError("Invalid file format")
    projects = payload.get("projects")
    tasks = payload.get("tasks")
    if not isinstance(projects, list) or not isinstance(tasks, list):
        raise ValueError("Invalid file format")

    with get_session(database_url) as s:
        try:
            s.execute(delete(Task))
            s.execute(delete(Project))
            for p in projects:
                s.add(
                    Project(
                        id=str(p["id"]),
                        name=_clean_name(p.get("name", "")),
                        pinned=bool(p.get("pinned", False)),
                        **_timestamps(p),
                    )
                )
            for t in tasks:
                s.add(
                    Task(
                        id=str(t["id"]),
                        project_id=str(t["project_id"]),
                        title=str(t.get("title", "")).strip() or "Untitled",
                        day=_clean_day(t.get("day")),
                        priority=Priority.parse(t.get("priority")).value,
                        is_completed=bool(t.get("is_completed", False)),
                        parent_task_id=t.get("parent_task_id"),
                        **_timestamps(t),
                    )
                )
            s.commit()
        except (KeyError, TypeError, AttributeError, ValueError, IntegrityError, FlushError) as exc:
            s.rollback()
            logger.warning("Rejected import: %s", exc)
            raise ValueError("Invalid file format") from exc
        except Exception:
            s.rollback()
            raise

    logger.info("Imported %d project(s) and %d task(s)", len(projects), len(tasks))
    return {"projects": len(projects), "tasks": len(tasks)}
