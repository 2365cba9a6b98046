"""
User Service - Profile of the signed-in account and phone number changes.
"""
import logging
from typing import Any, Mapping

from core.api.client import ApiClient
from utils.helpers import StringUtils

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_details(self):
        return self.client.get_user_details()

    def update(self, data: Mapping[str, Any]):
        return self.client.update_user(data)

    def get_home_page_data(self):
        return self.client.get_user_home_page_data()

    def change_phone_request(self, phone_number: str):
        """Ask the backend to send an OTP to the new number"""
        logger.info(f"Phone change requested for {StringUtils.mask_phone_number(phone_number)}")
        return self.client.change_phone_number_request(phone_number)

    def confirm_phone_change(self, phone_number: str, otp: str):
        envelope = self.client.confirm_change_phone_number(phone_number, otp)
        logger.info(f"Phone change confirmed for {StringUtils.mask_phone_number(phone_number)}")
        return envelope
