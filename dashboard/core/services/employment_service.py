"""
Employment Service - Employment details of the signed-in account.
"""
from typing import Any, Mapping

from core.api.client import ApiClient


class EmploymentService:
    def __init__(self, client: ApiClient):
        self.client = client

    def get(self):
        return self.client.get_employment_details()

    def update(self, data: Mapping[str, Any]):
        """Send a partial update; only the given fields are transmitted"""
        return self.client.update_employment_details(data)
