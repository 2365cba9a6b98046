"""
Shared sidebar renderer for all authenticated pages.
Displays the application name, environment and logout button.
"""

import streamlit as st
from utils.auth_guard import handle_logout, get_config


def render_sidebar():
    """Render the common sidebar on every authenticated page."""
    config = get_config()
    with st.sidebar:
        st.markdown(f"## {config.app_name}")
        st.caption(f"Admin Panel - v{config.app_version}")
        if not config.is_production:
            st.caption(f"Environment: {config.app_env.title()}")

        st.markdown("---")

        if st.button("Logout", use_container_width=True, key="sidebar_logout"):
            handle_logout()
