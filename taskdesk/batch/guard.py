"""Pre-mutation checks for the row list (pure, no side effects)."""
from __future__ import annotations

from typing import List, Optional, Sequence

from .rows import Row


def _find(rows: Sequence[Row], row_id: int) -> Optional[int]:
    for i, row in enumerate(rows):
        if row.row_id == row_id:
            return i
    return None


def parent_count(rows: Sequence[Row]) -> int:
    return sum(1 for r in rows if not r.is_subtask)


def subtasks_of(rows: Sequence[Row], row_id: int) -> List[Row]:
    return [r for r in rows if r.parent_row_id == row_id]


def can_delete(rows: Sequence[Row], row_id: int) -> bool:
    """True when removing ``row_id`` (with its cascade) keeps the list valid.

    Blocked when the list holds a single row, or when the target is the last
    remaining parent row.
    """
    if len(rows) <= 1:
        return False
    idx = _find(rows, row_id)
    if idx is None:
        return False
    if not rows[idx].is_subtask and parent_count(rows) <= 1:
        return False
    return True


def cascade_targets(rows: Sequence[Row], row_id: int) -> List[int]:
    """Row ids to remove together with ``row_id``, in list order."""
    idx = _find(rows, row_id)
    if idx is None:
        return []
    if rows[idx].is_subtask:
        return [row_id]
    return [r.row_id for r in rows if r.row_id == row_id or r.parent_row_id == row_id]


def indent_candidate(rows: Sequence[Row], row_id: int) -> Optional[Row]:
    """Nearest preceding row without a parent, or None."""
    idx = _find(rows, row_id)
    if idx is None:
        return None
    for i in range(idx - 1, -1, -1):
        if not rows[i].is_subtask:
            return rows[i]
    return None


def can_indent(rows: Sequence[Row], row_id: int) -> bool:
    idx = _find(rows, row_id)
    if idx is None or idx == 0:
        return False
    if rows[idx].is_subtask:
        return False
    # a row that owns subtasks would become a second nesting level
    if subtasks_of(rows, row_id):
        return False
    return indent_candidate(rows, row_id) is not None
