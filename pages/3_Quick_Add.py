import streamlit as st

from taskdesk import tasks
from taskdesk.batch import BatchEditor
from taskdesk.batch_ui import get_editor, open_editor, render_batch_editor, submit_notice
from taskdesk.config import get_config
from taskdesk.logging_setup import setup_from_config
from taskdesk.theme import set_theme

set_theme(page_title="TaskDesk - Quick Add", page_icon="⚡")
setup_from_config()
tasks.init_db()

STATE_KEY = "quick_add_editor"

st.title("Quick Add Tasks")

if "quick_add_notice" in st.session_state:
    st.toast(st.session_state.pop("quick_add_notice"), icon="✅")

projects = tasks.list_projects()

if get_editor(STATE_KEY) is None:
    if st.button("⚡ New batch", type="primary"):
        open_editor(STATE_KEY, BatchEditor.for_projects(projects, priority=get_config().default_priority))
        st.rerun()
else:
    commands = render_batch_editor(STATE_KEY, projects)
    if commands is not None:
        try:
            created = tasks.apply_commands(commands)
        except ValueError as exc:
            st.error(f"Could not add tasks: {exc}")
        else:
            st.session_state["quick_add_notice"] = submit_notice(len(created))
            st.rerun()
