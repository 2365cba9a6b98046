"""
Leads Management Page - List, create and edit leads; look them up by mobile or application number.
"""

import streamlit as st
import pandas as pd

from core.models.entities import LoanStatus
from utils.auth_guard import require_login, get_services
from utils.sidebar import render_sidebar
from utils.formatters import format_currency, format_date, status_badge
from utils.filters import ALL, filter_leads
from utils.queries import get_query_client
from utils.validators import LEAD_FIELD_LIMITS, LEAD_REQUIRED_FIELDS, LOAN_TYPES, FormValidator
from utils.exceptions import DashboardException

LEAD_QUERIES = ("leads", "leads-by-mobile", "lead-by-application")

require_login()
render_sidebar()

services = get_services()
queries = get_query_client()

st.title("Leads Management")
st.caption("Loan leads captured from partners and campaigns")
st.markdown("---")


def lead_form(form_key: str, initial=None):
    """Render the lead form; return the entered values keyed by wire name, or None"""
    initial = initial or {}
    with st.form(form_key, clear_on_submit=initial == {}):
        l1, l2 = st.columns(2)
        name = l1.text_input("Full Name", value=initial.get("name", ""))
        mobile_number = l2.text_input("Mobile Number", value=initial.get("mobileNumber", ""),
                                      max_chars=LEAD_FIELD_LIMITS["mobileNumber"])
        city = l1.text_input("City", value=initial.get("city", ""))
        pincode = l2.text_input("Pincode", value=initial.get("pincode", ""),
                                max_chars=LEAD_FIELD_LIMITS["pincode"])
        current_type = initial.get("loanType")
        type_options = LOAN_TYPES if current_type in (None, *LOAN_TYPES) else LOAN_TYPES + [current_type]
        loan_type = l1.selectbox("Loan Type", type_options,
                                 index=type_options.index(current_type) if current_type else 0,
                                 format_func=lambda t: f"{t.title()} Loan")
        amount = l2.text_input("Amount (INR)", value=initial.get("amount", ""))
        tenure = l1.text_input("Tenure (months)", value=initial.get("tenure", ""))
        submitted = st.form_submit_button("Save", use_container_width=True)

    if not submitted:
        return None
    values = {
        "name": name.strip(),
        "mobileNumber": mobile_number.strip(),
        "city": city.strip(),
        "pincode": pincode.strip(),
        "loanType": loan_type,
        "amount": amount.strip(),
        "tenure": tenure.strip(),
    }
    errors = FormValidator.validate_form(values, LEAD_REQUIRED_FIELDS, LEAD_FIELD_LIMITS)
    if errors:
        for message in errors.values():
            st.error(message)
        return None
    return values


def render_leads(leads):
    if not leads:
        st.info("No leads found.")
        return
    for lead in leads:
        with st.container(border=True):
            c1, c2, c3 = st.columns([2, 1, 1])
            c1.markdown(f"**{lead.name}** · {lead.city} {lead.pincode}")
            c1.caption(f"{lead.mobile_number} · Application {lead.application_number or 'N/A'}")
            c2.markdown(f"**{format_currency(lead.amount)}**")
            c2.caption(f"{(lead.loan_type or '').title()} · {lead.tenure} months")
            c3.markdown(status_badge(lead.status))
            c3.caption(format_date(lead.created_at))


try:
    with st.spinner("Loading leads..."):
        leads = queries.fetch(("leads",), services.leads.get_all).data or []
except DashboardException as e:
    st.error(f"Failed to load leads: {e.message}")
    if st.button("Retry", key="retry_leads"):
        queries.invalidate("leads")
        st.rerun()
    st.stop()

tab_list, tab_create, tab_edit, tab_lookup = st.tabs(["All Leads", "Add Lead", "Edit Lead", "Lookup"])

# -----------------------------------------------------------------------
# TAB 1 - List
# -----------------------------------------------------------------------
with tab_list:
    f1, f2, f3 = st.columns([3, 1, 1])
    search = f1.text_input("Search", placeholder="Name, city, mobile or application number", key="lead_search")
    status = f2.selectbox("Status", [ALL] + [s.value for s in LoanStatus], format_func=str.title, key="lead_status")
    view_mode = f3.radio("View", ["Cards", "Table"], horizontal=True, key="lead_view")

    filtered = filter_leads(leads, search=search, status=status)
    st.caption(f"Showing {len(filtered)} of {len(leads)} leads")
    if view_mode == "Cards":
        render_leads(filtered)
    elif filtered:
        df = pd.DataFrame([
            {
                "Name": lead.name,
                "Mobile": lead.mobile_number,
                "City": lead.city,
                "Loan Type": lead.loan_type,
                "Amount": format_currency(lead.amount),
                "Tenure": lead.tenure,
                "Status": lead.status,
                "Application #": lead.application_number,
                "Created": format_date(lead.created_at),
            }
            for lead in filtered
        ])
        st.dataframe(df, use_container_width=True, hide_index=True)

# -----------------------------------------------------------------------
# TAB 2 - Create
# -----------------------------------------------------------------------
with tab_create:
    st.subheader("New Lead")
    st.caption("Status and application number are assigned by the backend.")
    values = lead_form("create_lead_form")
    if values:
        try:
            queries.mutate(lambda: services.leads.create(values), invalidate=LEAD_QUERIES)
            st.toast("Lead created successfully")
            st.rerun()
        except DashboardException as e:
            st.error(e.message or "Failed to create lead")

# -----------------------------------------------------------------------
# TAB 3 - Edit
# -----------------------------------------------------------------------
with tab_edit:
    editable = {f"{lead.name} - {lead.mobile_number} ({lead.id})": lead for lead in leads if lead.id}
    if not editable:
        st.info("No leads to edit.")
    else:
        label = st.selectbox("Lead", list(editable.keys()), key="lead_edit_select")
        lead = editable[label]
        values = lead_form(f"edit_lead_form_{lead.id}", {
            "name": lead.name,
            "mobileNumber": lead.mobile_number,
            "city": lead.city,
            "pincode": lead.pincode,
            "loanType": lead.loan_type,
            "amount": lead.amount,
            "tenure": lead.tenure,
        })
        if values:
            try:
                queries.mutate(lambda: services.leads.update(lead.id, values), invalidate=LEAD_QUERIES)
                st.toast("Lead updated successfully")
                st.rerun()
            except DashboardException as e:
                st.error(e.message or "Failed to update lead")

# -----------------------------------------------------------------------
# TAB 4 - Lookup
# -----------------------------------------------------------------------
with tab_lookup:
    by_mobile, by_application = st.columns(2)

    with by_mobile:
        mobile = st.text_input("Mobile Number", key="lead_lookup_mobile",
                               max_chars=LEAD_FIELD_LIMITS["mobileNumber"])
        if st.button("Find by mobile", key="lead_find_mobile") and mobile.strip():
            try:
                found = queries.fetch(("leads-by-mobile", mobile.strip()),
                                      lambda: services.leads.get_by_mobile(mobile.strip())).data or []
                render_leads(found)
            except DashboardException as e:
                st.error(e.message)

    with by_application:
        application_number = st.text_input("Application Number", key="lead_lookup_app")
        if st.button("Find by application", key="lead_find_app") and application_number.strip():
            try:
                found = queries.fetch(
                    ("lead-by-application", application_number.strip()),
                    lambda: services.leads.get_by_application_number(application_number.strip()),
                ).data
                render_leads([found] if found else [])
            except DashboardException as e:
                st.error(e.message)
