import streamlit as st

from taskdesk import tasks
from taskdesk.dates import REPORT_PERIODS
from taskdesk.logging_setup import setup_from_config
from taskdesk.reports import completed_by_project, completed_chart
from taskdesk.theme import set_theme
from taskdesk.views import tasks_to_df

set_theme(page_title="TaskDesk - Reports", page_icon="📊")
setup_from_config()
tasks.init_db()

st.title("Reports")

if "report_period" not in st.session_state:
    st.session_state.report_period = "week"

cols = st.columns(len(REPORT_PERIODS))
for col, period in zip(cols, REPORT_PERIODS):
    active = period == st.session_state.report_period
    if col.button(f"{'✓ ' if active else ''}This {period}", key=f"period-{period}", use_container_width=True):
        st.session_state.report_period = period
        st.rerun()

df = completed_by_project(tasks.list_tasks(), tasks.list_projects(), st.session_state.report_period)
if df.empty:
    st.info("No completed tasks in this period to display.")
else:
    st.plotly_chart(completed_chart(df), use_container_width=True)
    st.dataframe(df, hide_index=True, use_container_width=True)

with st.expander("All tasks", expanded=False):
    table = tasks_to_df(tasks.list_tasks())
    st.dataframe(table.drop(columns=["id", "parent_task_id", "created_at"], errors="ignore"), hide_index=True, use_container_width=True)
