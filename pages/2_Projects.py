import streamlit as st

from taskdesk import tasks
from taskdesk.batch import BatchEditor
from taskdesk.batch_ui import get_editor, open_editor, render_batch_editor, submit_notice
from taskdesk.config import get_config
from taskdesk.dates import human_readable_day, today_str
from taskdesk.logging_setup import setup_from_config
from taskdesk.theme import priority_badge, set_theme
from taskdesk.views import group_by_day, nest_tasks

set_theme(page_title="TaskDesk - Projects", page_icon="📁")
setup_from_config()
tasks.init_db()

st.title("Projects")

if "projects_notice" in st.session_state:
    st.toast(st.session_state.pop("projects_notice"), icon="✅")

with st.sidebar.expander("New project", expanded=False):
    new_name = st.text_input("Project name", key="new-project-name")
    if st.button("Create Project"):
        try:
            created = tasks.create_project(new_name)
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.session_state["selected_project"] = created["id"]
            st.rerun()

projects = tasks.list_projects()
if not projects:
    st.info("No projects yet. Create one from the sidebar.")
    st.stop()

ids = [p["id"] for p in projects]
names = {p["id"]: ("📌 " if p["pinned"] else "") + p["name"] for p in projects}
selected = st.session_state.get("selected_project")
project_id = st.selectbox(
    "Project",
    options=ids,
    index=ids.index(selected) if selected in ids else 0,
    format_func=names.get,
)
st.session_state["selected_project"] = project_id
project = next(p for p in projects if p["id"] == project_id)

with st.expander("Project settings", expanded=False):
    renamed = st.text_input("Name", value=project["name"], key=f"rename-{project_id}")
    c1, c2, c3 = st.columns(3)
    if c1.button("Save Changes"):
        try:
            tasks.rename_project(project_id, renamed)
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.rerun()
    if c2.button("Unpin" if project["pinned"] else "Pin"):
        tasks.set_project_pinned(project_id, not project["pinned"])
        st.rerun()
    confirm = c3.checkbox("Confirm delete", key=f"confirm-del-{project_id}")
    if c3.button("Delete project", disabled=not confirm):
        tasks.delete_project(project_id)
        st.session_state.pop("selected_project", None)
        st.session_state["projects_notice"] = "Project deleted successfully."
        st.rerun()

state_key = f"project_batch_{project_id}"
if get_editor(state_key) is None:
    if st.button("➕ Add tasks", type="primary"):
        open_editor(state_key, BatchEditor.for_project(project_id, today_str(), priority=get_config().default_priority))
        st.rerun()
else:
    commands = render_batch_editor(state_key)
    if commands is not None:
        try:
            created = tasks.apply_commands(commands, project_id=project_id)
        except ValueError as exc:
            st.error(f"Could not add tasks: {exc}")
        else:
            st.session_state["projects_notice"] = submit_notice(len(created))
            st.rerun()

project_tasks = tasks.list_tasks(project_id=project_id)
if not project_tasks:
    st.caption("No tasks in this project yet.")

for day, day_tasks in group_by_day(project_tasks):
    st.markdown(f"<div class='td-day-header'>{human_readable_day(day)}</div>", unsafe_allow_html=True)
    for parent, subtasks in nest_tasks(day_tasks):
        for t in [parent] + subtasks:
            c_check, c_title = st.columns([0.3, 6])
            with c_check:
                checked = st.checkbox("done", value=t["is_completed"], key=f"proj-done-{t['id']}", label_visibility="collapsed")
                if checked != t["is_completed"]:
                    tasks.toggle_task(t["id"])
                    st.rerun()
            indent = "↳ " if t is not parent else ""
            cls = "td-task-done" if t["is_completed"] else ""
            c_title.markdown(f"<span class='{cls}'>{indent}{t['title']}</span> {priority_badge(t['priority'])}", unsafe_allow_html=True)
