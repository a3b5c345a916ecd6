"""Streamlit rendering of a :class:`BatchEditor` kept in ``st.session_state``.

Streamlit cannot intercept Tab or Enter inside a text box, so each row carries
small buttons that send the same key events: ↵ (Enter), ⇥ (Tab) and 🗑.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import streamlit as st

from taskdesk.batch import (
    ENTER,
    PRIORITIES,
    TAB,
    BatchEditor,
    Command,
    DateScope,
    ProjectScope,
)
from taskdesk.dates import format_day, parse_day

logger = logging.getLogger(__name__)


def get_editor(state_key: str) -> Optional[BatchEditor]:
    editor = st.session_state.get(state_key)
    if isinstance(editor, BatchEditor) and not editor.closed:
        return editor
    return None


def open_editor(state_key: str, editor: BatchEditor) -> BatchEditor:
    st.session_state[state_key] = editor
    return editor


def close_editor(state_key: str) -> None:
    st.session_state.pop(state_key, None)


def _scope_widget(editor: BatchEditor, row, key: str, projects: Sequence[Dict[str, Any]]):
    disabled = row.is_subtask
    if isinstance(row.scope, DateScope) or editor.project_id:
        current = parse_day(row.scope.day) if isinstance(row.scope, DateScope) else None
        picked = st.date_input("Date", value=current or date.today(), key=key, label_visibility="collapsed", disabled=disabled)
        return DateScope(format_day(picked)) if picked else None

    ids = [p["id"] for p in projects]
    names = {p["id"]: p["name"] for p in projects}
    current_id = row.scope.project_id if isinstance(row.scope, ProjectScope) else None
    index = ids.index(current_id) if current_id in ids else 0
    picked = st.selectbox(
        "Project",
        options=ids,
        index=index,
        format_func=lambda pid: names.get(pid, pid),
        key=key,
        label_visibility="collapsed",
        disabled=disabled,
    )
    return ProjectScope(picked) if picked else None


def render_batch_editor(state_key: str, projects: Sequence[Dict[str, Any]] = ()) -> Optional[List[Command]]:
    """Render the open editor stored under ``state_key``.

    Returns the submitted command list once the user submits (possibly
    empty), ``None`` while editing or after cancel.
    """
    editor = get_editor(state_key)
    if editor is None:
        return None

    if not editor.project_id and not projects:
        st.info("You need to create a project first before adding tasks.")
        if st.button("Close", key=f"{state_key}-close"):
            close_editor(state_key)
            st.rerun()
        return None

    st.markdown(
        "<div class='td-hint'>↵ adds a row below (blank title submits), ⇥ indents under the task above "
        "or outdents a subtask.</div>",
        unsafe_allow_html=True,
    )

    clicked = None
    for row in editor.rows:
        prefix = f"{state_key}-{row.row_id}"
        if row.is_subtask:
            c_pad, c_scope, c_title, c_prio, c_enter, c_tab, c_del = st.columns([0.35, 1.6, 3.2, 1.1, 0.4, 0.4, 0.4])
            c_pad.markdown("↳")
        else:
            c_scope, c_title, c_prio, c_enter, c_tab, c_del = st.columns([1.95, 3.2, 1.1, 0.4, 0.4, 0.4])

        with c_scope:
            scope = _scope_widget(editor, row, f"{prefix}-scope", projects)
        with c_title:
            title = st.text_input("Task title", value=row.title, key=f"{prefix}-title", placeholder="Task title...", label_visibility="collapsed")
        with c_prio:
            priority = st.selectbox(
                "Priority",
                options=PRIORITIES,
                index=PRIORITIES.index(row.priority.value),
                format_func=str.capitalize,
                key=f"{prefix}-priority",
                label_visibility="collapsed",
            )

        editor.set_title(row.row_id, title)
        editor.set_priority(row.row_id, priority)
        if not row.is_subtask and scope != row.scope:
            editor.set_scope(row.row_id, scope)

        with c_enter:
            if st.button("↵", key=f"{prefix}-enter", help="Enter"):
                clicked = ("enter", row.row_id)
        with c_tab:
            if st.button("⇥", key=f"{prefix}-tab", help="Indent / outdent"):
                clicked = ("tab", row.row_id)
        with c_del:
            allowed = editor.can_delete(row.row_id)
            if st.button(
                "🗑",
                key=f"{prefix}-delete",
                disabled=not allowed,
                help="Remove task" if allowed else "At least one task row is required",
            ):
                clicked = ("delete", row.row_id)

    add_clicked = st.button(
        "➕ Add Another Task",
        key=f"{state_key}-add",
        disabled=not editor.can_add_another(),
        use_container_width=True,
    )
    c_cancel, c_submit = st.columns(2)
    cancel_clicked = c_cancel.button("Cancel", key=f"{state_key}-cancel", use_container_width=True)
    submit_clicked = c_submit.button("Add All Tasks", key=f"{state_key}-submit", type="primary", use_container_width=True)

    if cancel_clicked:
        close_editor(state_key)
        st.rerun()

    if clicked is not None:
        kind, row_id = clicked
        if kind == "delete":
            editor.delete(row_id)
        else:
            outcome = editor.press(row_id, ENTER if kind == "enter" else TAB)
            submit_clicked = submit_clicked or outcome.submit
        if not submit_clicked:
            st.rerun()

    if add_clicked and not submit_clicked:
        editor.add_another()
        st.rerun()

    if submit_clicked:
        commands = editor.submit()
        close_editor(state_key)
        return commands
    return None


def submit_notice(created: int) -> str:
    if created == 0:
        return "Nothing to add"
    return f"{created} task(s) added successfully!"
