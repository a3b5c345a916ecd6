import streamlit as st

from taskdesk import tasks
from taskdesk.clipboard import COPY_FORMATS, format_day_tasks
from taskdesk.dates import human_readable_day, today_str
from taskdesk.logging_setup import setup_from_config
from taskdesk.theme import priority_badge, set_theme
from taskdesk.views import group_by_day, nest_tasks, project_name

set_theme(page_title="TaskDesk - Daily", page_icon="📅")
setup_from_config()
tasks.init_db()

st.title("Daily View")

projects = tasks.list_projects()
all_tasks = tasks.list_tasks()

fc1, fc2 = st.columns([1.2, 3])
with fc1:
    filter_on = st.toggle("Filter by date", value=False)
    filter_day = st.date_input("Date", disabled=not filter_on, label_visibility="collapsed")

groups = group_by_day(all_tasks)
if filter_on and filter_day:
    groups = [(d, ts) for d, ts in groups if d == filter_day.isoformat()]

if not groups:
    st.info("No tasks yet. Use Quick Add to create some.")


def _render_task(t, *, subtask=False):
    c_check, c_title, c_del = st.columns([0.3, 6, 0.4])
    with c_check:
        checked = st.checkbox("done", value=t["is_completed"], key=f"daily-done-{t['id']}", label_visibility="collapsed")
        if checked != t["is_completed"]:
            tasks.toggle_task(t["id"])
            st.rerun()
    with c_title:
        cls = "td-task-done" if t["is_completed"] else ""
        indent = "↳ " if subtask else ""
        st.markdown(
            f"<span class='{cls}'>{indent}{t['title']}</span> {priority_badge(t['priority'])} "
            f"<span class='td-project-tag'>{project_name(projects, t['project_id'])}</span>",
            unsafe_allow_html=True,
        )
    with c_del:
        if st.button("🗑", key=f"daily-del-{t['id']}"):
            tasks.delete_task(t["id"])
            st.rerun()


for day, day_tasks in groups:
    st.markdown(f"<div class='td-day-header'>{human_readable_day(day)}</div>", unsafe_allow_html=True)
    for parent, subtasks in nest_tasks(day_tasks):
        _render_task(parent)
        for sub in subtasks:
            _render_task(sub, subtask=True)

    with st.expander("Copy tasks", expanded=False):
        fmt = st.radio(
            "Format",
            options=list(COPY_FORMATS),
            format_func=COPY_FORMATS.get,
            horizontal=True,
            key=f"copy-fmt-{day}",
        )
        include_date = st.checkbox("Include date", value=day != today_str(), key=f"copy-date-{day}")
        st.code(format_day_tasks(day_tasks, day, fmt, include_date=include_date), language=None)
