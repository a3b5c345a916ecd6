import json
from datetime import date

import streamlit as st

from taskdesk import tasks
from taskdesk.logging_setup import setup_from_config
from taskdesk.theme import set_theme

set_theme(page_title="TaskDesk - Settings", page_icon="⚙️")
setup_from_config()
tasks.init_db()

st.title("Settings")
st.subheader("Data Management")
st.caption("Export your tasks and projects to a backup file, or import data from a previous backup.")

st.download_button(
    "⬇️ Export Data",
    data=json.dumps(tasks.export_data(), indent=2),
    file_name=f"task-manager-backup-{date.today().isoformat()}.json",
    mime="application/json",
)

uploaded = st.file_uploader("Import Data", type=["json"])
if uploaded is not None:
    st.warning("This will overwrite your current data.")
    if st.button("Import and overwrite", type="primary"):
        try:
            counts = tasks.import_data(json.loads(uploaded.getvalue().decode("utf-8")))
        except (ValueError, UnicodeDecodeError):
            st.error("Failed to import data. Please check the file format.")
        else:
            st.success(f"Data imported successfully! ({counts['projects']} projects, {counts['tasks']} tasks)")
