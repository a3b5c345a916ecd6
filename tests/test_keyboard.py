import pytest

from taskdesk.batch import (
    ENTER,
    SHIFT_ENTER,
    TAB,
    Action,
    Key,
    KeyboardController,
    KeyEvent,
    Priority,
    ProjectScope,
    RowContext,
    RowStore,
    transition,
)


@pytest.mark.parametrize(
    "event, ctx, expected",
    [
        (TAB, RowContext(is_first=False, has_parent=True, title_blank=False), Action.OUTDENT),
        (TAB, RowContext(is_first=False, has_parent=False, title_blank=False), Action.INDENT),
        (TAB, RowContext(is_first=True, has_parent=False, title_blank=False), Action.NONE),
        (KeyEvent(Key.TAB, shift=True), RowContext(is_first=False, has_parent=True, title_blank=True), Action.OUTDENT),
        (ENTER, RowContext(is_first=False, has_parent=True, title_blank=False), Action.INSERT_SUBTASK_AFTER),
        (ENTER, RowContext(is_first=True, has_parent=False, title_blank=False, subtask_count=2), Action.INSERT_AFTER_LAST_SUBTASK),
        (ENTER, RowContext(is_first=True, has_parent=False, title_blank=False), Action.INSERT_TOP_LEVEL),
        (ENTER, RowContext(is_first=False, has_parent=True, title_blank=True), Action.SUBMIT),
        (ENTER, RowContext(is_first=True, has_parent=False, title_blank=True), Action.SUBMIT),
        (SHIFT_ENTER, RowContext(is_first=True, has_parent=False, title_blank=False), Action.LINE_BREAK),
        (SHIFT_ENTER, RowContext(is_first=False, has_parent=True, title_blank=True), Action.LINE_BREAK),
    ],
)
def test_transition_table(event, ctx, expected):
    assert transition(event, ctx) == expected


def _controller(*rows):
    store = RowStore()
    created = []
    for title, scope, parent_index in rows:
        parent = created[parent_index].row_id if parent_index is not None else None
        created.append(store.append(title=title, scope=ProjectScope(scope), parent_row_id=parent))
    return KeyboardController(store), store, created


def test_tab_indents_under_preceding_parent_and_copies_scope():
    kc, store, (a, b) = _controller(("A", "p1", None), ("B", "p2", None))
    outcome = kc.handle(b.row_id, TAB)
    assert outcome.action == Action.INDENT
    row = store.get(b.row_id)
    assert row.parent_row_id == a.row_id
    assert row.scope == a.scope


def test_tab_on_first_row_is_noop():
    kc, store, (a, _) = _controller(("A", "p1", None), ("B", "p2", None))
    before = store.rows
    assert kc.handle(a.row_id, TAB).action == Action.NONE
    assert store.rows == before


def test_tab_on_subtask_outdents_and_keeps_scope():
    kc, store, (_, s) = _controller(("A", "p1", None), ("S", "p1", 0))
    assert kc.handle(s.row_id, TAB).action == Action.OUTDENT
    row = store.get(s.row_id)
    assert row.parent_row_id is None
    assert row.scope == ProjectScope("p1")


def test_tab_on_parent_with_subtasks_is_blocked():
    kc, store, (_, b, _) = _controller(("A", "p1", None), ("B", "p2", None), ("B1", "p2", 1))
    assert kc.handle(b.row_id, TAB).action == Action.NONE
    assert store.get(b.row_id).parent_row_id is None


def test_enter_on_subtask_inserts_sibling_right_after():
    kc, store, (a, s, b) = _controller(("A", "p1", None), ("S", "p1", 0), ("B", "p2", None))
    outcome = kc.handle(s.row_id, ENTER)
    assert outcome.action == Action.INSERT_SUBTASK_AFTER
    new = store.at(2)
    assert outcome.focus_row_id == new.row_id
    assert new.parent_row_id == a.row_id
    assert new.scope == ProjectScope("p1")
    assert store.at(3).row_id == b.row_id


def test_enter_on_parent_with_subtasks_inserts_after_last_subtask():
    kc, store, (a, a1, a2) = _controller(("A", "p1", None), ("A1", "p1", 0), ("A2", "p1", 0))
    outcome = kc.handle(a.row_id, ENTER)
    assert outcome.action == Action.INSERT_AFTER_LAST_SUBTASK
    assert [r.row_id for r in store.rows[:3]] == [a.row_id, a1.row_id, a2.row_id]
    new = store.at(3)
    assert new.row_id == outcome.focus_row_id
    assert new.parent_row_id == a.row_id


def test_enter_on_plain_parent_inserts_top_level_row_with_inherited_priority():
    kc, store, (a, b) = _controller(("A", "p1", None), ("B", "p2", None))
    store.update_field(a.row_id, "priority", Priority.HIGH)
    outcome = kc.handle(a.row_id, ENTER)
    new = store.at(1)
    assert outcome.action == Action.INSERT_TOP_LEVEL
    assert new.parent_row_id is None
    assert new.priority == Priority.HIGH
    assert new.scope == ProjectScope("p1")
    assert store.at(2).row_id == b.row_id


def test_enter_on_blank_title_requests_submit_without_mutation():
    kc, store, (a,) = _controller(("   ", "p1", None))
    outcome = kc.handle(a.row_id, ENTER)
    assert outcome.submit
    assert len(store) == 1


def test_shift_enter_never_mutates():
    kc, store, (a, s) = _controller(("A", "p1", None), ("S", "p1", 0))
    before = store.rows
    assert kc.handle(s.row_id, SHIFT_ENTER).action == Action.LINE_BREAK
    assert kc.handle(a.row_id, SHIFT_ENTER).action == Action.LINE_BREAK
    assert store.rows == before


def test_unknown_row_is_ignored():
    kc, store, _ = _controller(("A", "p1", None))
    assert kc.handle(42, ENTER).action == Action.NONE
    assert len(store) == 1
