"""
Business Service - Business-loan applications.
"""
from typing import Any, Mapping

from core.api.client import ApiClient


class BusinessService:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_all(self):
        return self.client.get_all_businesses()

    def get_by_id(self, business_id: str):
        return self.client.get_business_by_id(business_id)

    def create(self, data: Mapping[str, Any]):
        return self.client.create_business(data)

    def update(self, business_id: str, data: Mapping[str, Any]):
        return self.client.update_business(business_id, data)
