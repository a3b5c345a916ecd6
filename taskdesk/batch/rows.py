"""Ephemeral rows of the batch task editor.

Rows only live for one editor session. ``row_id`` is a local handle and
``parent_row_id`` is a lookup key into the same store, never an ownership
link; cascades are resolved by :mod:`taskdesk.batch.guard` before removal.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, List, Optional, Union

logger = logging.getLogger(__name__)


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: Union[str, "Priority", None], default: Optional["Priority"] = None) -> "Priority":
        if isinstance(value, Priority):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default if default is not None else cls.MEDIUM


PRIORITIES = [p.value for p in Priority]


@dataclass(frozen=True)
class ProjectScope:
    """Scope of a row in the cross-project editor."""

    project_id: str


@dataclass(frozen=True)
class DateScope:
    """Scope of a row in the single-project editor (``day`` is YYYY-MM-DD)."""

    day: str


Scope = Union[ProjectScope, DateScope]


@dataclass
class Row:
    row_id: int
    title: str = ""
    priority: Priority = Priority.MEDIUM
    scope: Optional[Scope] = None
    parent_row_id: Optional[int] = None

    @property
    def is_subtask(self) -> bool:
        return self.parent_row_id is not None

    @property
    def is_blank(self) -> bool:
        return not self.title.strip()


EDITABLE_FIELDS = ("title", "priority", "scope")


class RowStore:
    """Ordered, mutable list of rows with structural primitives only."""

    def __init__(self) -> None:
        self._rows: List[Row] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    @property
    def rows(self) -> List[Row]:
        """Snapshot of the rows in list order."""
        return list(self._rows)

    def next_id(self) -> int:
        return next(self._ids)

    def append(
        self,
        *,
        title: str = "",
        priority: Priority = Priority.MEDIUM,
        scope: Optional[Scope] = None,
        parent_row_id: Optional[int] = None,
    ) -> Row:
        row = Row(
            row_id=self.next_id(),
            title=title,
            priority=priority,
            scope=scope,
            parent_row_id=parent_row_id,
        )
        self._rows.append(row)
        return row

    def index_of(self, row_id: int) -> Optional[int]:
        for i, row in enumerate(self._rows):
            if row.row_id == row_id:
                return i
        return None

    def get(self, row_id: int) -> Optional[Row]:
        idx = self.index_of(row_id)
        return self._rows[idx] if idx is not None else None

    def at(self, index: int) -> Row:
        return self._rows[index]

    def insert_after(self, index: int, template: Row, *, parent_row_id: Optional[int] = None) -> int:
        """Insert a blank row right after ``index`` and return the new index.

        ``scope`` and ``priority`` are copied from ``template``; the new row
        always gets a fresh ``row_id``.
        """
        row = Row(
            row_id=self.next_id(),
            priority=template.priority,
            scope=template.scope,
            parent_row_id=parent_row_id,
        )
        new_index = min(index + 1, len(self._rows))
        self._rows.insert(new_index, row)
        logger.debug("Inserted row %s at %s (parent=%s)", row.row_id, new_index, parent_row_id)
        return new_index

    def remove(self, row_id: int) -> bool:
        idx = self.index_of(row_id)
        if idx is None:
            return False
        del self._rows[idx]
        logger.debug("Removed row %s", row_id)
        return True

    def update_field(self, row_id: int, field: str, value) -> bool:
        """Update ``title``, ``priority`` or ``scope`` in place.

        ``parent_row_id`` is deliberately not accepted here; reparenting goes
        through :meth:`set_parent`, which only the keyboard controller calls.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field not editable: {field!r}")
        idx = self.index_of(row_id)
        if idx is None:
            return False
        if field == "priority":
            value = Priority.parse(value, self._rows[idx].priority)
        elif field == "title":
            value = "" if value is None else str(value)
        self._rows[idx] = replace(self._rows[idx], **{field: value})
        return True

    def set_parent(self, row_id: int, parent_row_id: Optional[int], scope: Optional[Scope] = None) -> None:
        idx = self.index_of(row_id)
        if idx is None:
            return
        row = self._rows[idx]
        self._rows[idx] = replace(
            row,
            parent_row_id=parent_row_id,
            scope=scope if scope is not None else row.scope,
        )
