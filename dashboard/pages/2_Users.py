"""
Users Page - Browse registered users with search, status and location filters.
"""

import streamlit as st
import pandas as pd

from utils.auth_guard import require_login, get_services
from utils.sidebar import render_sidebar
from utils.formatters import format_date, user_activity_label
from utils.filters import ALL, filter_users, user_locations
from utils.helpers import StringUtils
from utils.queries import get_query_client
from utils.exceptions import DashboardException

SELECTED_USER_KEY = "selected_user_id"

require_login()
render_sidebar()

services = get_services()
queries = get_query_client()

st.title("Users")
st.caption("Registered users of the loan application")
st.markdown("---")

try:
    with st.spinner("Loading users..."):
        result = queries.fetch(("admin-users",), services.admin.get_users).data
except DashboardException as e:
    st.error(f"Failed to load users: {e.message}")
    if st.button("Retry", key="retry_users"):
        queries.invalidate("admin-users")
        st.rerun()
    st.stop()

users = result.users if result else []

f1, f2, f3, f4 = st.columns([3, 1, 1, 1])
search = f1.text_input("Search", placeholder="Name, email or phone", key="users_search")
status = f2.selectbox("Status", [ALL, "active", "inactive"], format_func=str.title, key="users_status")
location = f3.selectbox("Pin Code", [ALL] + user_locations(users),
                        format_func=lambda v: "All" if v == ALL else v, key="users_location")
view_mode = f4.radio("View", ["Cards", "Table"], horizontal=True, key="users_view")

filtered = filter_users(users, search=search, status=status, location=location)
st.caption(f"Showing {len(filtered)} of {len(users)} users")


def _open_details(user_id):
    st.session_state[SELECTED_USER_KEY] = user_id
    st.switch_page("pages/3_User_Details.py")


if not filtered:
    st.info("No users match the current filters.")
elif view_mode == "Cards":
    cols = st.columns(2)
    for index, user in enumerate(filtered):
        with cols[index % 2].container(border=True):
            head, badge = st.columns([3, 1])
            head.markdown(f"### {StringUtils.initials(user.full_name)} · {user.full_name or 'Unknown User'}")
            head.caption(f"{user.email or 'No email'} | {user.phone_number or 'No phone'}")
            active = user_activity_label(user) == "active"
            badge.markdown(":green[Active]" if active else ":gray[Inactive]")

            d1, d2 = st.columns(2)
            d1.markdown(f"**Pin code:** {user.pin_code or 'Unknown'}")
            d1.markdown(f"**Role:** {user.role.value if user.role else 'unknown'}")
            d2.markdown(f"**Joined:** {format_date(user.created_at)}")
            d2.markdown(f"**Sign-in:** {user.auth_provider.value if user.auth_provider else 'unknown'}")

            if st.button("View Details", key=f"view_{user.id}_{index}", use_container_width=True):
                _open_details(user.id)
else:
    df = pd.DataFrame([
        {
            "Name": user.full_name or "Unknown User",
            "Email": user.email,
            "Phone": user.phone_number,
            "Pin Code": user.pin_code,
            "Status": user_activity_label(user).title(),
            "Joined": format_date(user.created_at),
            "ID": user.id,
        }
        for user in filtered
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)

    options = {f"{u.full_name or 'Unknown User'} ({u.id})": u.id for u in filtered if u.id}
    if options:
        choice = st.selectbox("Open user", list(options.keys()), key="users_open")
        if st.button("View Details", key="view_selected_user"):
            _open_details(options[choice])
