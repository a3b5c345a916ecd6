"""Batch task row editor.

Rows are typed rapidly in an in-memory list (one level of subtasks, driven by
Enter / Shift+Enter / Tab) and turned into creation commands on submit.
"""

from .rows import DateScope, Priority, PRIORITIES, ProjectScope, Row, RowStore, Scope
from .guard import can_delete, can_indent, cascade_targets, indent_candidate
from .keyboard import (
    ENTER,
    SHIFT_ENTER,
    TAB,
    Action,
    Key,
    KeyboardController,
    KeyEvent,
    KeyOutcome,
    RowContext,
    transition,
)
from .submission import Command, ParentCommand, ParentSlot, SubtaskCommand, resolve_submission
from .editor import BatchEditor

__all__ = [
    "DateScope",
    "Priority",
    "PRIORITIES",
    "ProjectScope",
    "Row",
    "RowStore",
    "Scope",
    "can_delete",
    "can_indent",
    "cascade_targets",
    "indent_candidate",
    "ENTER",
    "SHIFT_ENTER",
    "TAB",
    "Action",
    "Key",
    "KeyboardController",
    "KeyEvent",
    "KeyOutcome",
    "RowContext",
    "transition",
    "Command",
    "ParentCommand",
    "ParentSlot",
    "SubtaskCommand",
    "resolve_submission",
    "BatchEditor",
]
