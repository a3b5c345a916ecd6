"""Task and project database models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Boolean, Column, DateTime, Index, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _generate_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.utcnow()


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=_generate_id)
    name = Column(String(256), nullable=False)
    pinned = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "pinned": bool(self.pinned),
            "created_at": self.created_at.isoformat() + "Z" if self.created_at else None,
        }


class Task(Base):
    """A persisted task.

    ``parent_task_id`` points at another task of the same project; subtasks
    are only ever one level deep.
    """

    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=_generate_id)
    project_id = Column(String(36), nullable=False, index=True)
    title = Column(String(512), nullable=False)
    day = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    priority = Column(String(16), default="medium", nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    parent_task_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (Index("ix_tasks_project_day", "project_id", "day"),)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "title": self.title,
            "day": self.day,
            "priority": self.priority,
            "is_completed": bool(self.is_completed),
            "parent_task_id": self.parent_task_id,
            "created_at": self.created_at.isoformat() + "Z" if self.created_at else None,
        }
