"""One batch-add session: rows, focus, and the actions the UI can trigger."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from . import guard
from .keyboard import ENTER, Action, KeyboardController, KeyEvent, KeyOutcome
from .rows import DateScope, Priority, ProjectScope, Row, RowStore, Scope
from .submission import Command, resolve_submission

logger = logging.getLogger(__name__)


class BatchEditor:
    """Editor state for the "Quick Add" and per-project batch modals.

    Created fresh when the modal opens and thrown away on cancel or after
    :meth:`submit`.
    """

    def __init__(self, first_scope: Optional[Scope], *, priority: Union[str, Priority] = Priority.MEDIUM) -> None:
        self.store = RowStore()
        self.keyboard = KeyboardController(self.store)
        first = self.store.append(priority=Priority.parse(priority), scope=first_scope)
        self.focused_row_id: Optional[int] = first.row_id
        self.closed = False
        self.project_ids: List[str] = []
        self.project_id: Optional[str] = None

    @classmethod
    def for_projects(cls, projects: Sequence[Dict[str, Any]], *, priority: Union[str, Priority] = Priority.MEDIUM) -> "BatchEditor":
        """Cross-project editor; each row is scoped to a project id."""
        first = ProjectScope(projects[0]["id"]) if projects else None
        editor = cls(first, priority=priority)
        editor.project_ids = [p["id"] for p in projects]
        return editor

    @classmethod
    def for_project(cls, project_id: str, default_day: str, *, priority: Union[str, Priority] = Priority.MEDIUM) -> "BatchEditor":
        """Single-project editor; each row is scoped to a day."""
        editor = cls(DateScope(default_day), priority=priority)
        editor.project_id = project_id
        return editor

    @property
    def rows(self) -> List[Row]:
        return self.store.rows

    @property
    def has_scopes(self) -> bool:
        return any(r.scope is not None for r in self.store)

    def _mark_focus(self, outcome: KeyOutcome) -> KeyOutcome:
        if outcome.focus_row_id is not None:
            self.focused_row_id = outcome.focus_row_id
        return outcome

    def press(self, row_id: int, event: KeyEvent) -> KeyOutcome:
        self.focused_row_id = row_id
        return self._mark_focus(self.keyboard.handle(row_id, event))

    def can_add_another(self) -> bool:
        last = self.store.at(len(self.store) - 1)
        return not last.is_blank

    def add_another(self) -> KeyOutcome:
        """The "Add Another Task" button: Enter on the last row.

        Does nothing while the last row's title is blank.
        """
        if not self.can_add_another():
            return KeyOutcome(Action.NONE, self.focused_row_id)
        last = self.store.at(len(self.store) - 1)
        return self.press(last.row_id, ENTER)

    def can_delete(self, row_id: int) -> bool:
        return guard.can_delete(self.store.rows, row_id)

    def delete(self, row_id: int) -> List[int]:
        """Remove ``row_id`` and its subtasks; returns the removed ids."""
        rows = self.store.rows
        if not guard.can_delete(rows, row_id):
            logger.debug("Delete of row %s blocked", row_id)
            return []
        targets = guard.cascade_targets(rows, row_id)
        for target in targets:
            self.store.remove(target)
        if self.focused_row_id in targets:
            self.focused_row_id = self.store.at(0).row_id
        return targets

    def set_title(self, row_id: int, title: str) -> bool:
        return self.store.update_field(row_id, "title", title)

    def set_priority(self, row_id: int, priority: Union[str, Priority]) -> bool:
        return self.store.update_field(row_id, "priority", priority)

    def set_scope(self, row_id: int, scope: Optional[Scope]) -> bool:
        """Change a parent row's project/date; its subtasks follow it.

        Subtasks always carry their parent's scope, so setting one directly
        is refused.
        """
        row = self.store.get(row_id)
        if row is None or row.is_subtask:
            logger.debug("Scope change of row %s blocked", row_id)
            return False
        self.store.update_field(row_id, "scope", scope)
        for sub in guard.subtasks_of(self.store.rows, row_id):
            self.store.update_field(sub.row_id, "scope", scope)
        return True

    def submit(self) -> List[Command]:
        commands = resolve_submission(self.store.rows)
        self.closed = True
        logger.info("Batch editor submitted %d command(s)", len(commands))
        return commands
