from taskdesk.batch import (
    DateScope,
    ParentCommand,
    ParentSlot,
    Priority,
    ProjectScope,
    RowStore,
    SubtaskCommand,
    resolve_submission,
)


def test_parents_first_then_subtasks_with_slots():
    store = RowStore()
    a = store.append(title="Plan sprint", scope=ProjectScope("p1"))
    store.append(title="Draft outline", scope=ProjectScope("p1"), parent_row_id=a.row_id)
    store.append(title="Review PR", priority=Priority.HIGH, scope=ProjectScope("p2"))

    commands = resolve_submission(store.rows)

    assert commands == [
        ParentCommand("Plan sprint", Priority.MEDIUM, ProjectScope("p1")),
        ParentCommand("Review PR", Priority.HIGH, ProjectScope("p2")),
        SubtaskCommand("Draft outline", Priority.MEDIUM, ProjectScope("p1"), ParentSlot(0)),
    ]


def test_slots_count_only_surviving_parents():
    store = RowStore()
    store.append(title="  ", scope=ProjectScope("p1"))
    b = store.append(title="B", scope=ProjectScope("p1"))
    store.append(title="B1", scope=ProjectScope("p1"), parent_row_id=b.row_id)

    commands = resolve_submission(store.rows)

    assert [c.title for c in commands] == ["B", "B1"]
    assert commands[1].parent_slot == ParentSlot(0)


def test_subtask_of_dropped_parent_is_dropped_not_promoted():
    store = RowStore()
    a = store.append(title="", scope=ProjectScope("p1"))
    store.append(title="orphan", scope=ProjectScope("p1"), parent_row_id=a.row_id)
    store.append(title="C", scope=ProjectScope("p1"))

    commands = resolve_submission(store.rows)

    assert commands == [ParentCommand("C", Priority.MEDIUM, ProjectScope("p1"))]


def test_rows_without_scope_are_dropped():
    store = RowStore()
    store.append(title="no project", scope=None)
    store.append(title="dated", scope=DateScope("2026-10-17"))

    commands = resolve_submission(store.rows)

    assert [c.title for c in commands] == ["dated"]


def test_all_blank_titles_yield_empty_list():
    store = RowStore()
    store.append(title="", scope=ProjectScope("p1"))
    store.append(title="   ", scope=ProjectScope("p1"))
    assert resolve_submission(store.rows) == []


def test_titles_are_trimmed():
    store = RowStore()
    store.append(title="  Ship it  ", scope=ProjectScope("p1"))
    assert resolve_submission(store.rows)[0].title == "Ship it"
