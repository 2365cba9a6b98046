"""
Business Management Page - List, create, edit and look up business-loan applications.
"""

import streamlit as st
import pandas as pd

from utils.auth_guard import require_login, get_services
from utils.sidebar import render_sidebar
from utils.formatters import format_currency, format_date
from utils.filters import filter_businesses
from utils.queries import get_query_client
from utils.validators import (
    BUSINESS_FIELD_LIMITS, BUSINESS_REQUIRED_FIELDS, BUSINESS_TYPES, FormValidator,
)
from utils.exceptions import DashboardException

require_login()
render_sidebar()

services = get_services()
queries = get_query_client()

st.title("Business Management")
st.caption("Business loan applications")
st.markdown("---")


def business_form(form_key: str, initial=None):
    """Render the business form; return the entered values keyed by wire name, or None"""
    initial = initial or {}
    with st.form(form_key, clear_on_submit=initial == {}):
        b1, b2 = st.columns(2)
        current_type = initial.get("businessType")
        type_options = BUSINESS_TYPES if current_type in (None, *BUSINESS_TYPES) else BUSINESS_TYPES + [current_type]
        business_type = b1.selectbox(
            "Business Type", type_options,
            index=type_options.index(current_type) if current_type else 0,
            format_func=str.title,
        )
        turnover = b1.text_input("Annual Turnover (INR)", value=initial.get("turnover", ""))
        loan_amount = b2.text_input("Loan Amount (INR)", value=initial.get("loanAmount", ""))
        mobile_number = b2.text_input(
            "Mobile Number", value=initial.get("mobileNumber", ""),
            max_chars=BUSINESS_FIELD_LIMITS["mobileNumber"],
        )
        submitted = st.form_submit_button("Save", use_container_width=True)

    if not submitted:
        return None
    values = {
        "businessType": business_type,
        "turnover": turnover.strip(),
        "loanAmount": loan_amount.strip(),
        "mobileNumber": mobile_number.strip(),
    }
    errors = FormValidator.validate_form(values, BUSINESS_REQUIRED_FIELDS, BUSINESS_FIELD_LIMITS)
    if errors:
        for message in errors.values():
            st.error(message)
        return None
    return values


try:
    with st.spinner("Loading businesses..."):
        businesses = queries.fetch(("businesses",), services.business.get_all).data or []
except DashboardException as e:
    st.error(f"Failed to load businesses: {e.message}")
    if st.button("Retry", key="retry_businesses"):
        queries.invalidate("businesses")
        st.rerun()
    st.stop()

tab_list, tab_create, tab_edit, tab_lookup = st.tabs(["All Businesses", "Add Business", "Edit Business", "Lookup"])

# -----------------------------------------------------------------------
# TAB 1 - List
# -----------------------------------------------------------------------
with tab_list:
    search = st.text_input("Search", placeholder="Business type or mobile number", key="biz_search")
    filtered = filter_businesses(businesses, search)
    st.caption(f"Showing {len(filtered)} of {len(businesses)} businesses")
    if not filtered:
        st.info("No businesses found.")
    else:
        df = pd.DataFrame([
            {
                "Business Type": (b.business_type or "").title(),
                "Turnover": format_currency(b.turnover),
                "Loan Amount": format_currency(b.loan_amount),
                "Mobile": b.mobile_number,
                "Created": format_date(b.created_at),
                "ID": b.id,
            }
            for b in filtered
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)

# -----------------------------------------------------------------------
# TAB 2 - Create
# -----------------------------------------------------------------------
with tab_create:
    st.subheader("New Business")
    values = business_form("create_business_form")
    if values:
        try:
            queries.mutate(lambda: services.business.create(values), invalidate=("businesses", "business"))
            st.toast("Business created successfully")
            st.rerun()
        except DashboardException as e:
            st.error(e.message or "Failed to create business")

# -----------------------------------------------------------------------
# TAB 3 - Edit
# -----------------------------------------------------------------------
with tab_edit:
    editable = {f"{(b.business_type or '').title()} - {b.mobile_number} ({b.id})": b for b in businesses if b.id}
    if not editable:
        st.info("No businesses to edit.")
    else:
        label = st.selectbox("Business", list(editable.keys()), key="biz_edit_select")
        business = editable[label]
        values = business_form(f"edit_business_form_{business.id}", {
            "businessType": business.business_type,
            "turnover": business.turnover,
            "loanAmount": business.loan_amount,
            "mobileNumber": business.mobile_number,
        })
        if values:
            try:
                queries.mutate(lambda: services.business.update(business.id, values), invalidate=("businesses", "business"))
                st.toast("Business updated successfully")
                st.rerun()
            except DashboardException as e:
                st.error(e.message or "Failed to update business")

# -----------------------------------------------------------------------
# TAB 4 - Lookup by ID
# -----------------------------------------------------------------------
with tab_lookup:
    business_id = st.text_input("Business ID", key="biz_lookup_id")
    if st.button("Find", key="biz_lookup") and business_id.strip():
        try:
            found = queries.fetch(("business", business_id.strip()),
                                  lambda: services.business.get_by_id(business_id.strip())).data
            if found is None:
                st.info("No business with that ID.")
            else:
                st.json({
                    "businessType": found.business_type,
                    "turnover": found.turnover,
                    "loanAmount": found.loan_amount,
                    "mobileNumber": found.mobile_number,
                    "createdAt": found.created_at,
                    "updatedAt": found.updated_at,
                })
        except DashboardException as e:
            st.error(e.message)
