"""
Service Registry - Wires configuration, session store, gateway client and services.
"""
from typing import Optional

import httpx

from core.api.client import ApiClient
from core.api.session_store import SessionStore
from core.config import AppConfig
from core.services.admin_service import AdminService
from core.services.business_service import BusinessService
from core.services.employment_service import EmploymentService
from core.services.lead_service import LeadService
from core.services.user_service import UserService


class ServiceRegistry:
    """One per browser session; every service shares the same client and store"""

    def __init__(self, config: AppConfig, session_store: SessionStore,
                 http_client: Optional[httpx.Client] = None):
        self.config = config
        self.session_store = session_store
        self.client = ApiClient(config.api_base_url, session_store, http_client=http_client)

        self.employment = EmploymentService(self.client)
        self.business = BusinessService(self.client)
        self.leads = LeadService(self.client)
        self.users = UserService(self.client)
        self.admin = AdminService(self.client, session_store)
