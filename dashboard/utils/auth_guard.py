"""
Authentication guard utilities for Streamlit pages.
Decides whether protected pages may render based on session token presence.
"""

from enum import Enum

import streamlit as st

from core.api.session_store import SessionStore, StreamlitSessionStore
from core.config import AppConfig
from core.services.registry import ServiceRegistry

SERVICES_KEY = "services"


class GuardState(Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class RouteGuard:
    """Per-render check of the session store; no backend verification.

    A token revoked server-side is only noticed when the next API call fails.
    """

    def __init__(self, session_store: SessionStore):
        self.session_store = session_store
        self.state = GuardState.UNKNOWN

    def check(self) -> GuardState:
        self.state = (
            GuardState.AUTHENTICATED if self.session_store.has_token()
            else GuardState.UNAUTHENTICATED
        )
        return self.state

    @property
    def is_authenticated(self) -> bool:
        return self.state is GuardState.AUTHENTICATED


@st.cache_resource
def get_config() -> AppConfig:
    """Process-wide configuration, read once"""
    config = AppConfig()
    config.validate_env()
    return config


def get_services() -> ServiceRegistry:
    """Services for the current browser session, created on first use"""
    if SERVICES_KEY not in st.session_state:
        st.session_state[SERVICES_KEY] = ServiceRegistry(get_config(), StreamlitSessionStore())
    return st.session_state[SERVICES_KEY]


def is_logged_in() -> bool:
    """Check whether a session token is resident."""
    return RouteGuard(get_services().session_store).check() is GuardState.AUTHENTICATED


def require_login():
    """Stop page execution and return to login if no session token exists.

    Rerunning sends the script back through app.py, whose navigation only offers the
    login page while unauthenticated, so the protected page cannot be re-entered.
    """
    placeholder = st.empty()
    placeholder.caption("Loading...")
    guard = RouteGuard(get_services().session_store)
    state = guard.check()
    placeholder.empty()
    if state is GuardState.UNAUTHENTICATED:
        st.rerun()


def handle_logout():
    """Clear the token and any cached query data, then rerun into the login view."""
    services = get_services()
    services.admin.logout()

    from utils.queries import get_query_client
    get_query_client().clear()

    st.rerun()
