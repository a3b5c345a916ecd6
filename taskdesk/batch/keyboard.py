"""Keyboard handling for the batch task editor.

The table of (key, row shape) -> action is :func:`transition`, a pure
function. :class:`KeyboardController` computes the row context, asks
``transition`` for an action and applies it to the :class:`RowStore`.

    Tab          subtask                  -> OUTDENT
    Tab          first row                -> NONE
    Tab          other top-level row      -> INDENT
    Enter        blank title              -> SUBMIT
    Enter        subtask                  -> INSERT_SUBTASK_AFTER
    Enter        parent with subtasks     -> INSERT_AFTER_LAST_SUBTASK
    Enter        parent without subtasks  -> INSERT_TOP_LEVEL
    Shift+Enter  any                      -> LINE_BREAK
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import guard
from .rows import RowStore

logger = logging.getLogger(__name__)


class Key(str, Enum):
    ENTER = "Enter"
    TAB = "Tab"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    shift: bool = False


ENTER = KeyEvent(Key.ENTER)
SHIFT_ENTER = KeyEvent(Key.ENTER, shift=True)
TAB = KeyEvent(Key.TAB)


@dataclass(frozen=True)
class RowContext:
    """What the transition table needs to know about the current row."""

    is_first: bool
    has_parent: bool
    title_blank: bool
    subtask_count: int = 0


class Action(str, Enum):
    NONE = "none"
    LINE_BREAK = "line_break"
    SUBMIT = "submit"
    INDENT = "indent"
    OUTDENT = "outdent"
    INSERT_SUBTASK_AFTER = "insert_subtask_after"
    INSERT_AFTER_LAST_SUBTASK = "insert_after_last_subtask"
    INSERT_TOP_LEVEL = "insert_top_level"


INSERT_ACTIONS = frozenset(
    {Action.INSERT_SUBTASK_AFTER, Action.INSERT_AFTER_LAST_SUBTASK, Action.INSERT_TOP_LEVEL}
)


def transition(event: KeyEvent, ctx: RowContext) -> Action:
    if event.key == Key.TAB:
        # Shift+Tab toggles the same way as Tab.
        if ctx.has_parent:
            return Action.OUTDENT
        if ctx.is_first:
            return Action.NONE
        return Action.INDENT

    if event.key == Key.ENTER:
        if event.shift:
            return Action.LINE_BREAK
        if ctx.title_blank:
            return Action.SUBMIT
        if ctx.has_parent:
            return Action.INSERT_SUBTASK_AFTER
        if ctx.subtask_count > 0:
            return Action.INSERT_AFTER_LAST_SUBTASK
        return Action.INSERT_TOP_LEVEL

    return Action.NONE


@dataclass(frozen=True)
class KeyOutcome:
    """Result of one key press.

    ``action`` is what was actually applied (``NONE`` when a guard blocked
    it) and ``focus_row_id`` is the row that should receive focus.
    """

    action: Action
    focus_row_id: Optional[int]

    @property
    def submit(self) -> bool:
        return self.action == Action.SUBMIT

    @property
    def inserted(self) -> bool:
        return self.action in INSERT_ACTIONS


class KeyboardController:
    """Applies key events to a :class:`RowStore`.

    This is the only component that changes ``parent_row_id``.
    """

    def __init__(self, store: RowStore) -> None:
        self.store = store

    def context(self, row_id: int) -> Optional[RowContext]:
        idx = self.store.index_of(row_id)
        if idx is None:
            return None
        row = self.store.at(idx)
        return RowContext(
            is_first=idx == 0,
            has_parent=row.is_subtask,
            title_blank=row.is_blank,
            subtask_count=len(guard.subtasks_of(self.store.rows, row_id)),
        )

    def handle(self, row_id: int, event: KeyEvent) -> KeyOutcome:
        ctx = self.context(row_id)
        if ctx is None:
            return KeyOutcome(Action.NONE, None)

        action = transition(event, ctx)
        handler = {
            Action.INDENT: self._indent,
            Action.OUTDENT: self._outdent,
            Action.INSERT_SUBTASK_AFTER: self._insert_subtask_after,
            Action.INSERT_AFTER_LAST_SUBTASK: self._insert_after_last_subtask,
            Action.INSERT_TOP_LEVEL: self._insert_top_level,
        }.get(action)
        if handler is None:
            return KeyOutcome(action, row_id)
        return handler(row_id)

    def _indent(self, row_id: int) -> KeyOutcome:
        rows = self.store.rows
        if not guard.can_indent(rows, row_id):
            logger.debug("Indent of row %s blocked", row_id)
            return KeyOutcome(Action.NONE, row_id)
        candidate = guard.indent_candidate(rows, row_id)
        self.store.set_parent(row_id, candidate.row_id, candidate.scope)
        logger.debug("Row %s indented under %s", row_id, candidate.row_id)
        return KeyOutcome(Action.INDENT, row_id)

    def _outdent(self, row_id: int) -> KeyOutcome:
        # scope stays what the row inherited from its former parent
        self.store.set_parent(row_id, None)
        logger.debug("Row %s outdented", row_id)
        return KeyOutcome(Action.OUTDENT, row_id)

    def _insert_subtask_after(self, row_id: int) -> KeyOutcome:
        idx = self.store.index_of(row_id)
        row = self.store.at(idx)
        new_idx = self.store.insert_after(idx, row, parent_row_id=row.parent_row_id)
        return KeyOutcome(Action.INSERT_SUBTASK_AFTER, self.store.at(new_idx).row_id)

    def _insert_after_last_subtask(self, row_id: int) -> KeyOutcome:
        rows = self.store.rows
        parent = self.store.get(row_id)
        last_idx = max(i for i, r in enumerate(rows) if r.parent_row_id == row_id)
        new_idx = self.store.insert_after(last_idx, parent, parent_row_id=row_id)
        return KeyOutcome(Action.INSERT_AFTER_LAST_SUBTASK, self.store.at(new_idx).row_id)

    def _insert_top_level(self, row_id: int) -> KeyOutcome:
        idx = self.store.index_of(row_id)
        new_idx = self.store.insert_after(idx, self.store.at(idx))
        return KeyOutcome(Action.INSERT_TOP_LEVEL, self.store.at(new_idx).row_id)
