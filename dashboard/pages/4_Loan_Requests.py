"""
Loan Requests Page - All loan applications with search, status and amount filters.
"""

import streamlit as st
import pandas as pd

from core.models.entities import LoanStatus
from utils.auth_guard import require_login, get_services
from utils.sidebar import render_sidebar
from utils.formatters import format_currency, format_date, status_badge
from utils.filters import ALL, AMOUNT_RANGES, filter_loans, status_counts
from utils.queries import get_query_client
from utils.exceptions import DashboardException

require_login()
render_sidebar()

services = get_services()
queries = get_query_client()

st.title("Loan Requests")
st.caption("Review and manage all loan applications")
st.markdown("---")

try:
    with st.spinner("Loading loan requests..."):
        loans = queries.fetch(("admin-loans",), services.admin.get_loans).data or []
except DashboardException as e:
    st.error(f"Failed to load loan requests: {e.message}")
    if st.button("Retry", key="retry_loans"):
        queries.invalidate("admin-loans")
        st.rerun()
    st.stop()


def _range_label(amount_range):
    if amount_range == ALL:
        return "All amounts"
    low, _, high = amount_range.partition("-")
    return f"{low}+" if not high else f"{low} to {high}"


counts = status_counts(loans)
m1, m2, m3, m4 = st.columns(4)
m1.metric("Pending", counts[LoanStatus.PENDING.value])
m2.metric("Under Review", counts[LoanStatus.REVIEWING.value])
m3.metric("Approved", counts[LoanStatus.APPROVED.value])
m4.metric("Rejected", counts[LoanStatus.REJECTED.value])

f1, f2, f3 = st.columns([3, 1, 1])
search = f1.text_input("Search", placeholder="Purpose, user or loan ID", key="loans_search")
status = f2.selectbox("Status", [ALL] + [s.value for s in LoanStatus], format_func=str.title, key="loans_status")
amount_range = f3.selectbox("Amount", AMOUNT_RANGES, format_func=_range_label, key="loans_amount")

filtered = filter_loans(loans, search=search, status=status, amount_range=amount_range)
st.caption(f"Showing {len(filtered)} of {len(loans)} requests")

if not filtered:
    st.info("No loan requests match the current filters.")
else:
    for loan in filtered:
        with st.container(border=True):
            c1, c2, c3 = st.columns([2, 1, 1])
            c1.markdown(f"**{loan.purpose or 'Loan request'}**")
            c1.caption(f"User {loan.user_id or 'N/A'} · Requested {format_date(loan.created_at)}")
            c2.markdown(f"**{format_currency(loan.amount)}**")
            c3.markdown(status_badge(loan.status))

    df = pd.DataFrame([
        {
            "Loan ID": loan.id,
            "User ID": loan.user_id,
            "Amount": loan.amount,
            "Status": loan.status,
            "Requested": loan.created_at,
        }
        for loan in filtered
    ])
    st.download_button("Export Data (CSV)", df.to_csv(index=False),
                       file_name="loan_requests.csv", mime="text/csv")
