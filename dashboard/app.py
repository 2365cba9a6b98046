import streamlit as st

st.set_page_config(
    page_title="INFINZ Admin",
    page_icon="💳",
    layout="wide",
    initial_sidebar_state="expanded",
)

from utils.auth_guard import is_logged_in, get_config, get_services
from utils.exceptions import DashboardException
from utils.helpers import configure_logging


@st.cache_resource
def _init_logging():
    configure_logging(get_config())


_init_logging()


# --- PAGE DEFINITIONS ---
def login_page():
    # Centered login card
    col_left, col_center, col_right = st.columns([1, 2, 1])

    with col_center:
        st.markdown("<br>", unsafe_allow_html=True)
        st.markdown(
            """
            <div style="text-align:center">
                <h1 style="color:#0F766E">INFINZ Admin</h1>
                <p style="color:#5D6D7E; font-size:1.1rem">Secure admin portal</p>
            </div>
            """,
            unsafe_allow_html=True,
        )
        st.markdown("---")

        # --- Login form ---
        with st.form("login_form", clear_on_submit=False):
            st.subheader("Admin Login")
            st.caption("Enter your credentials to access the admin panel")
            email = st.text_input("Email", placeholder="admin@loanapp.com")
            password = st.text_input("Password", type="password", placeholder="Enter your password")
            submitted = st.form_submit_button("Sign In", use_container_width=True)

        if submitted:
            if not email or not password:
                st.error("Please enter both email and password")
            else:
                with st.spinner("Signing in..."):
                    try:
                        get_services().admin.login(email, password)
                        st.toast("Login successful! Welcome to the admin panel.")
                        st.rerun()
                    except DashboardException as e:
                        st.error(e.message or "Login failed. Please check your credentials.")

        st.markdown("---")
        st.caption(f"{get_config().app_name} v{get_config().app_version}")


# --- NAVIGATION SETUP ---
if not is_logged_in():
    # Only the login view exists without a token
    pg = st.navigation([st.Page(login_page, title="Login", default=True)])
    pg.run()

else:
    pg = st.navigation({
        "Overview": [
            st.Page("pages/1_Dashboard.py", title="Dashboard", default=True),
        ],
        "Customers": [
            st.Page("pages/2_Users.py", title="Users"),
            st.Page("pages/3_User_Details.py", title="User Details"),
            st.Page("pages/4_Loan_Requests.py", title="Loan Requests"),
        ],
        "Origination": [
            st.Page("pages/5_Business_Management.py", title="Business Management"),
            st.Page("pages/6_Leads_Management.py", title="Leads Management"),
        ],
    })
    pg.run()
