"""
Dashboard Page - Aggregate statistics and recent loan requests.
"""

import streamlit as st

from utils.auth_guard import require_login, get_services
from utils.sidebar import render_sidebar
from utils.formatters import format_currency, format_date, status_badge
from utils.queries import get_query_client
from utils.exceptions import DashboardException

require_login()
render_sidebar()

services = get_services()
queries = get_query_client()

st.title("Dashboard Overview")
st.markdown("---")

try:
    with st.spinner("Loading dashboard..."):
        stats = queries.fetch(("dashboard-stats",), services.admin.get_dashboard_stats).data
except DashboardException as e:
    st.error(f"Failed to load dashboard data: {e.message}")
    if st.button("Retry", key="retry_dashboard"):
        queries.invalidate("dashboard-stats")
        st.rerun()
    st.stop()

if stats is None:
    st.info("No dashboard data available yet.")
    st.stop()

# Stats grid
c1, c2, c3, c4 = st.columns(4)
c1.metric("Total Users", stats.total_users or 0)
c2.metric("Pending Requests", stats.pending_requests or 0)
c3.metric("Approved Loans", stats.completed_loans or 0)
c4.metric("Total Amount", format_currency(stats.total_amount or 0))

st.markdown("---")

col_recent, col_actions = st.columns(2)

with col_recent:
    st.subheader("Recent Loan Requests")
    st.caption("Latest loan applications from users")
    if not stats.recent_requests:
        st.info("No recent loan requests.")
    for request in stats.recent_requests:
        with st.container(border=True):
            left, right = st.columns([2, 1])
            left.markdown(f"**{request.user or 'Unknown user'}**")
            left.caption(format_date(request.date))
            right.markdown(f"**{format_currency(request.amount)}**")
            right.markdown(status_badge(request.status))

with col_actions:
    st.subheader("Quick Actions")
    st.caption("Common administrative tasks")
    st.page_link("pages/2_Users.py", label="Review Users", use_container_width=True)
    st.page_link("pages/4_Loan_Requests.py", label="Process Loan Applications", use_container_width=True)
    st.page_link("pages/6_Leads_Management.py", label="Manage Leads", use_container_width=True)
