"""
Lead Service - Loan leads, including lookups by mobile and application number.
"""
from typing import Any, Mapping

from core.api.client import ApiClient


class LeadService:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_all(self):
        return self.client.get_all_leads()

    def get_by_id(self, lead_id: str):
        return self.client.get_lead_by_id(lead_id)

    def create(self, data: Mapping[str, Any]):
        """Create a lead; status and application number are left to the backend"""
        return self.client.create_lead(data)

    def update(self, lead_id: str, data: Mapping[str, Any]):
        return self.client.update_lead(lead_id, data)

    def get_by_mobile(self, mobile_number: str):
        return self.client.get_leads_by_mobile_number(mobile_number)

    def get_by_application_number(self, application_number: str):
        return self.client.get_lead_by_application_number(application_number)
