from taskdesk.batch import ProjectScope, RowStore, can_delete, can_indent, cascade_targets, indent_candidate


def _grouped():
    """A(parent) A1 A2 (subtasks of A), B(parent)."""
    store = RowStore()
    a = store.append(title="A", scope=ProjectScope("p1"))
    a1 = store.append(title="A1", scope=ProjectScope("p1"), parent_row_id=a.row_id)
    a2 = store.append(title="A2", scope=ProjectScope("p1"), parent_row_id=a.row_id)
    b = store.append(title="B", scope=ProjectScope("p2"))
    return store, a, a1, a2, b


def test_single_row_cannot_be_deleted():
    store = RowStore()
    only = store.append(title="x")
    assert can_delete(store.rows, only.row_id) is False


def test_only_parent_cannot_be_deleted_even_with_subtasks():
    store = RowStore()
    a = store.append(title="A")
    store.append(title="A1", parent_row_id=a.row_id)
    assert can_delete(store.rows, a.row_id) is False


def test_subtask_and_non_last_parent_can_be_deleted():
    store, a, a1, _, b = _grouped()
    assert can_delete(store.rows, a1.row_id) is True
    assert can_delete(store.rows, a.row_id) is True
    assert can_delete(store.rows, b.row_id) is True


def test_unknown_row_cannot_be_deleted():
    store, *_ = _grouped()
    assert can_delete(store.rows, 999) is False


def test_cascade_of_parent_includes_its_subtasks():
    store, a, a1, a2, _ = _grouped()
    assert cascade_targets(store.rows, a.row_id) == [a.row_id, a1.row_id, a2.row_id]


def test_cascade_of_subtask_is_itself():
    store, _, a1, _, _ = _grouped()
    assert cascade_targets(store.rows, a1.row_id) == [a1.row_id]


def test_indent_candidate_skips_subtasks():
    store, a, _, _, b = _grouped()
    c = store.append(title="C")
    assert indent_candidate(store.rows, c.row_id).row_id == b.row_id
    assert indent_candidate(store.rows, b.row_id).row_id == a.row_id


def test_first_row_and_parent_with_subtasks_cannot_indent():
    store, a, a1, _, b = _grouped()
    assert can_indent(store.rows, a.row_id) is False
    assert can_indent(store.rows, b.row_id) is True
    assert can_indent(store.rows, a1.row_id) is False

    c = store.append(title="C")
    store.append(title="C1", parent_row_id=c.row_id)
    assert can_indent(store.rows, c.row_id) is False
