import os

import streamlit as st


def set_theme(
    page_title: str = "TaskDesk",
    page_icon: str = "✅",
    layout: str = "wide",
    initial_sidebar_state: str = "expanded",
):
    """Configure the Streamlit page & inject the TaskDesk CSS.

    Parameters allow per-page override of title/icon. Safe to call once at the
    top of each page; Streamlit rejects a second set_page_config, the CSS is
    still (re)injected.
    """
    try:
        st.set_page_config(
            page_title=page_title,
            page_icon=page_icon,
            layout=layout,
            initial_sidebar_state=initial_sidebar_state,
        )
    except st.errors.StreamlitAPIException:
        pass

    theme_file = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "assets", "custom_theme.css")

    try:
        with open(theme_file, "r", encoding="utf-8") as f:
            css = f.read()
            st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)
    except FileNotFoundError:
        st.error(f"Theme file not found at {theme_file}. Please check the file path.")


def priority_badge(priority: str) -> str:
    p = (priority or "medium").lower()
    return f'<span class="td-priority-badge td-priority-{p}">{p}</span>'
