import streamlit as st

from taskdesk import tasks
from taskdesk.config import get_config
from taskdesk.logging_setup import setup_from_config
from taskdesk.theme import set_theme

set_theme()
setup_from_config()
tasks.init_db()

cfg = get_config()
if cfg.seed_sample and not tasks.list_projects():
    tasks.create_project("Inbox")

projects = tasks.list_projects()
all_tasks = tasks.list_tasks()
open_count = sum(1 for t in all_tasks if not t["is_completed"])

st.markdown(
    """
    <div class="td-hero">
      <h1>TaskDesk</h1>
      <p>Projects, dated tasks and priorities. Rapid-fire tasks into the batch editor with
      Enter and Tab, then find them in the daily view.</p>
    </div>
    """,
    unsafe_allow_html=True,
)

c1, c2, c3 = st.columns(3)
c1.metric("Projects", len(projects))
c2.metric("Open tasks", open_count)
c3.metric("Completed", len(all_tasks) - open_count)

st.page_link("pages/3_Quick_Add.py", label="Quick add tasks", icon="⚡")
st.page_link("pages/1_Daily.py", label="Daily view", icon="📅")
st.page_link("pages/2_Projects.py", label="Projects", icon="📁")
