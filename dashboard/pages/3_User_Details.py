"""
User Details Page - Profile, employment details and loan history of one user.
"""

import streamlit as st
import pandas as pd

from utils.auth_guard import require_login, get_services
from utils.sidebar import render_sidebar
from utils.formatters import employment_type_label, format_currency, format_date, status_badge
from utils.filters import loans_for_user
from utils.helpers import StringUtils
from utils.queries import get_query_client
from utils.exceptions import DashboardException

SELECTED_USER_KEY = "selected_user_id"

require_login()
render_sidebar()

services = get_services()
queries = get_query_client()

user_id = st.session_state.get(SELECTED_USER_KEY) or st.query_params.get("user_id")

if st.button("Back to Users"):
    st.switch_page("pages/2_Users.py")

if not user_id:
    st.info("Select a user on the Users page to see their details.")
    st.stop()

# Three independent queries; a failure in one does not hide the others
try:
    with st.spinner("Loading user..."):
        users = queries.fetch(("admin-users",), services.admin.get_users).data
    user = next((u for u in (users.users if users else []) if u.id == user_id), None)
except DashboardException as e:
    st.error(f"Failed to load user: {e.message}")
    if st.button("Retry", key="retry_user"):
        queries.invalidate("admin-users")
        st.rerun()
    st.stop()

if user is None:
    st.warning("User not found.")
    st.stop()

st.title(f"{StringUtils.initials(user.full_name)} · {user.full_name or 'Unknown User'}")
st.markdown(":green[Verified]" if user.is_verified else ":red[Not Verified]")
st.markdown("---")

tab_profile, tab_employment, tab_loans = st.tabs(["Profile", "Employment", "Loan Requests"])

with tab_profile:
    p1, p2 = st.columns(2)
    with p1:
        st.markdown(f"**Email:** {user.email or 'N/A'}")
        st.markdown(f"**Phone:** {user.phone_number or 'N/A'}")
        st.markdown(f"**Gender:** {(user.gender or 'N/A').title()}")
        st.markdown(f"**Date of Birth:** {format_date(user.date_of_birth)}")
    with p2:
        st.markdown(f"**PAN:** {user.pancard_number or 'N/A'}")
        st.markdown(f"**Pin Code:** {user.pin_code or 'N/A'}")
        st.markdown(f"**Marital Status:** {(user.marital_status or 'N/A').title()}")
        st.markdown(f"**Member Since:** {format_date(user.created_at)}")

with tab_employment:
    try:
        employment = queries.fetch(("employment-details", user_id), services.employment.get).data
    except DashboardException as e:
        employment = None
        st.error(f"Failed to load employment details: {e.message}")

    if employment is None or employment.user_id != user_id:
        st.info("No employment details available for this user.")
    else:
        with st.container(border=True):
            e1, e2 = st.columns(2)
            e1.markdown(f"**Employment Type:** {employment_type_label(employment.employment_type)}")
            e1.markdown(f"**Net Monthly Income:** {format_currency(employment.net_monthly_income)}")
            e1.markdown(f"**Payment Mode:** {employment.payment_mode or 'N/A'}")
            e2.markdown(f"**Company / Business:** {employment.company_or_business_name or 'N/A'}")
            e2.markdown(f"**Company Pin Code:** {employment.company_pin_code or 'N/A'}")
            if employment.salary_slip_document:
                e2.markdown(f"**Salary Slip:** [View document]({employment.salary_slip_document})")

with tab_loans:
    try:
        loans = queries.fetch(("admin-loans",), services.admin.get_loans).data or []
        user_loans = loans_for_user(loans, user_id)
    except DashboardException as e:
        user_loans = []
        st.error(f"Failed to load loan requests: {e.message}")

    if not user_loans:
        st.info("No loan requests for this user.")
    else:
        view_mode = st.radio("View", ["Cards", "Table"], horizontal=True, key="user_loans_view")
        if view_mode == "Cards":
            for loan in user_loans:
                with st.container(border=True):
                    l1, l2 = st.columns([2, 1])
                    l1.markdown(f"**{format_currency(loan.amount)}**")
                    l1.caption(f"Requested {format_date(loan.created_at)} · Updated {format_date(loan.updated_at)}")
                    l2.markdown(status_badge(loan.status))
        else:
            df = pd.DataFrame([
                {
                    "Loan ID": loan.id,
                    "Amount": format_currency(loan.amount),
                    "Status": (loan.status or "unknown").title(),
                    "Requested": format_date(loan.created_at),
                    "Updated": format_date(loan.updated_at),
                }
                for loan in user_loans
            ])
            st.dataframe(df, use_container_width=True, hide_index=True)
