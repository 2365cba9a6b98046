"""
Admin Service - Admin authentication, user and loan listings, dashboard statistics.
"""
from core.api.client import ApiClient
from core.api.session_store import SessionStore
from utils.exceptions import RequestFailed, ValidationException
from utils.helpers import LoggingUtils


class AdminService:
    """Owns the token lifecycle: written on successful login, cleared on logout"""

    def __init__(self, client: ApiClient, session_store: SessionStore):
        self.client = client
        self.session_store = session_store

    def login(self, email: str, password: str):
        """Authenticate and store the returned token.

        A rejected login, a malformed response or a response without a token leaves
        the session store untouched and raises RequestFailed.
        """
        if not email or not password:
            raise ValidationException("Please enter both email and password")

        try:
            envelope = self.client.admin_login(email, password)
        except RequestFailed as e:
            LoggingUtils.log_security_event(
                "login_failed", email=email, details={'status_code': e.status_code, 'reason': e.message}
            )
            raise
        except ValidationException as e:
            LoggingUtils.log_security_event("login_failed", email=email, details={'reason': e.message})
            raise RequestFailed(f"Malformed login response: {e.message}") from e

        token = envelope.data.token if envelope.data else None
        if not isinstance(token, str) or not token:
            LoggingUtils.log_security_event("login_failed", email=email, details={'reason': 'missing token'})
            raise RequestFailed(
                "Login response did not include a token",
                status_code=envelope.status,
                envelope=envelope.raw,
            )

        self.session_store.set(token)
        LoggingUtils.log_security_event("login_success", email=email)
        return envelope

    def logout(self):
        self.session_store.clear()
        LoggingUtils.log_security_event("logout")

    def get_users(self):
        return self.client.get_admin_users()

    def get_loans(self):
        return self.client.get_admin_loans()

    def get_dashboard_stats(self):
        return self.client.get_admin_dashboard_stats()
