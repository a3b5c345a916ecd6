"""Turn the editor's rows into creation commands for the task repository.

Parents are emitted first. Subtasks reference their parent through a
:class:`ParentSlot`, the parent's 0-based position among the emitted parent
commands. Row ids never leave the editor.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

from .rows import Priority, Row, Scope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParentSlot:
    index: int


@dataclass(frozen=True)
class ParentCommand:
    title: str
    priority: Priority
    scope: Scope


@dataclass(frozen=True)
class SubtaskCommand:
    title: str
    priority: Priority
    scope: Scope
    parent_slot: ParentSlot


Command = Union[ParentCommand, SubtaskCommand]


def valid_rows(rows: Sequence[Row]) -> List[Row]:
    return [r for r in rows if r.title.strip() and r.scope is not None]


def resolve_submission(rows: Sequence[Row]) -> List[Command]:
    """Build the ordered command list for ``rows``.

    Rows with a blank title or no scope are dropped. A subtask whose parent
    was dropped is dropped as well, never promoted to the top level. An
    empty list means there was nothing to add.
    """
    valid = valid_rows(rows)
    parents = [r for r in valid if not r.is_subtask]
    slots: Dict[int, int] = {r.row_id: i for i, r in enumerate(parents)}

    commands: List[Command] = [
        ParentCommand(title=r.title.strip(), priority=r.priority, scope=r.scope) for r in parents
    ]
    dropped = 0
    for r in valid:
        if not r.is_subtask:
            continue
        slot = slots.get(r.parent_row_id)
        if slot is None:
            dropped += 1
            continue
        commands.append(
            SubtaskCommand(
                title=r.title.strip(),
                priority=r.priority,
                scope=r.scope,
                parent_slot=ParentSlot(slot),
            )
        )

    logger.debug(
        "Resolved %d rows into %d commands (%d parents, %d orphaned subtasks dropped)",
        len(rows),
        len(commands),
        len(parents),
        dropped,
    )
    return commands
