"""
API Gateway Client
Single point of contact with the loan-origination backend: builds URLs, injects the
bearer token, and unwraps JSON envelopes into typed records
"""

import json
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union
from urllib.parse import quote

import httpx

from core.api.session_store import SessionStore
from core.models.entities import (
    ApiEnvelope, Business, DashboardStats, EmploymentDetails, HomePageData, Lead,
    LoanRecord, LoginResult, PhoneChangeResult, User, UserList, UserResult, list_of,
)
from utils.exceptions import RequestFailed, TransportFailed, ValidationException

logger = logging.getLogger(__name__)

# Fields the backend assigns; create calls never send them
SERVER_ASSIGNED_FIELDS = ('_id', 'createdAt', 'updatedAt')
LEAD_SERVER_ASSIGNED_FIELDS = SERVER_ASSIGNED_FIELDS + ('status', 'applicationNumber')


def build_payload(data: Mapping[str, Any], record_cls, forbidden: Iterable[str] = ()) -> Dict[str, Any]:
    """Return the caller's fields keyed by wire name; None is sent as JSON null.

    Keys may be given as wire names (``loanAmount``) or attribute names (``loan_amount``).
    Unknown keys and keys in ``forbidden`` raise ValidationException; nothing is defaulted.
    """
    wire_fields = record_cls.wire_fields()
    by_attr = {attr: wire for wire, attr in wire_fields.items()}
    enums = getattr(record_cls, '_ENUMS', {})

    payload = {}
    for key, value in data.items():
        wire = key if key in wire_fields else by_attr.get(key)
        if wire is None:
            raise ValidationException(f"Unknown field '{key}' for {record_cls.__name__}")
        if wire in forbidden:
            raise ValidationException(f"Field '{wire}' is assigned by the server and cannot be sent")
        enum_cls = enums.get(wire_fields[wire])
        if enum_cls is not None and value is not None:
            value = value.value if isinstance(value, enum_cls) else _check_enum(enum_cls, value, wire)
        payload[wire] = value
    return payload


def _check_enum(enum_cls, value, wire: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationException(f"Invalid {wire} '{value}'; expected one of: {allowed}")


class ApiClient:
    """Gateway to the REST backend.

    Read-only after construction apart from the session token lookup, which happens
    once per request at dispatch time. No timeout and no retry are applied here; the
    caller (or the query layer above it) decides whether to try again.
    """

    def __init__(self, base_url: str, session_store: SessionStore,
                 http_client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip('/')
        self.session_store = session_store
        # httpx keeps a cookie jar per client, so cookies ride along like browser credentials
        self.http = http_client or httpx.Client(timeout=None)

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # ------------------------------------------------------------------
    # Core primitive
    # ------------------------------------------------------------------
    def request(self, endpoint: str, method: str = 'GET',
                body: Optional[Union[str, bytes]] = None,
                headers: Optional[Mapping[str, str]] = None) -> ApiEnvelope:
        """Send one request and return the parsed envelope.

        Raises TransportFailed when the call cannot complete or the body is not a JSON
        object, and RequestFailed when the status is outside 200-299. The envelope's own
        ``success`` flag is not consulted.
        """
        url = f"{self.base_url}{endpoint}"
        token = self.session_store.get()

        merged = {'Content-Type': 'application/json'}
        if token:
            merged['Authorization'] = f'Bearer {token}'
        for name, value in (headers or {}).items():
            for existing in [h for h in merged if h.lower() == name.lower()]:
                del merged[existing]
            merged[name] = value

        logger.debug(f"{method} {url} (authenticated={bool(token)})")
        try:
            response = self.http.request(method, url, content=body, headers=merged)
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"API request failed: {method} {endpoint}: {e}")
            raise TransportFailed(f"Request to {endpoint} failed: {e}") from e

        if not isinstance(payload, dict):
            logger.error(f"API request failed: {method} {endpoint}: response is not a JSON object")
            raise TransportFailed(f"Request to {endpoint} returned a body that is not a JSON envelope")

        if not response.is_success:
            message = payload.get('message') or f"HTTP error, status={response.status_code}"
            logger.warning(f"API request rejected: {method} {endpoint}: {response.status_code} {message}")
            raise RequestFailed(message, status_code=response.status_code, envelope=payload)

        return ApiEnvelope.from_body(payload, response.status_code)

    def _send(self, endpoint: str, method: str = 'GET', data: Optional[Dict[str, Any]] = None) -> ApiEnvelope:
        body = json.dumps(data) if data is not None else None
        return self.request(endpoint, method=method, body=body)

    @staticmethod
    def _segment(value: str) -> str:
        return quote(str(value), safe='')

    # ------------------------------------------------------------------
    # Employment details
    # ------------------------------------------------------------------
    def get_employment_details(self) -> ApiEnvelope[EmploymentDetails]:
        return self._send('/employment-details/').map(EmploymentDetails.from_dict)

    def update_employment_details(self, data: Mapping[str, Any]) -> ApiEnvelope[EmploymentDetails]:
        payload = build_payload(data, EmploymentDetails)
        return self._send('/employment-details/', 'PUT', payload).map(EmploymentDetails.from_dict)

    # ------------------------------------------------------------------
    # Business
    # ------------------------------------------------------------------
    def get_all_businesses(self) -> ApiEnvelope[list]:
        return self._send('/business/list').map(list_of(Business))

    def get_business_by_id(self, business_id: str) -> ApiEnvelope[Business]:
        return self._send(f'/business/details/{self._segment(business_id)}').map(Business.from_dict)

    def create_business(self, data: Mapping[str, Any]) -> ApiEnvelope[Business]:
        payload = build_payload(data, Business, SERVER_ASSIGNED_FIELDS)
        return self._send('/business/create', 'POST', payload).map(Business.from_dict)

    def update_business(self, business_id: str, data: Mapping[str, Any]) -> ApiEnvelope[Business]:
        payload = build_payload(data, Business)
        return self._send(f'/business/update/{self._segment(business_id)}', 'PUT', payload).map(Business.from_dict)

    # ------------------------------------------------------------------
    # Leads
    # ------------------------------------------------------------------
    def get_all_leads(self) -> ApiEnvelope[list]:
        return self._send('/leads/').map(list_of(Lead))

    def get_lead_by_id(self, lead_id: str) -> ApiEnvelope[Lead]:
        return self._send(f'/leads/{self._segment(lead_id)}').map(Lead.from_dict)

    def create_lead(self, data: Mapping[str, Any]) -> ApiEnvelope[Lead]:
        payload = build_payload(data, Lead, LEAD_SERVER_ASSIGNED_FIELDS)
        return self._send('/leads/create', 'POST', payload).map(Lead.from_dict)

    def update_lead(self, lead_id: str, data: Mapping[str, Any]) -> ApiEnvelope[Lead]:
        payload = build_payload(data, Lead)
        return self._send(f'/leads/{self._segment(lead_id)}', 'PUT', payload).map(Lead.from_dict)

    def get_leads_by_mobile_number(self, mobile_number: str) -> ApiEnvelope[list]:
        return self._send(f'/leads/mobile/{self._segment(mobile_number)}').map(list_of(Lead))

    def get_lead_by_application_number(self, application_number: str) -> ApiEnvelope[Lead]:
        return self._send(f'/leads/application/{self._segment(application_number)}').map(Lead.from_dict)

    # ------------------------------------------------------------------
    # Current user
    # ------------------------------------------------------------------
    def get_user_details(self) -> ApiEnvelope[UserResult]:
        return self._send('/users/me').map(UserResult.from_dict)

    def update_user(self, data: Mapping[str, Any]) -> ApiEnvelope[UserResult]:
        payload = build_payload(data, User)
        return self._send('/users/me', 'PUT', payload).map(UserResult.from_dict)

    def get_user_home_page_data(self) -> ApiEnvelope[HomePageData]:
        return self._send('/users/home').map(HomePageData.from_dict)

    def change_phone_number_request(self, phone_number: str) -> ApiEnvelope[None]:
        return self._send('/users/change-phone', 'POST', {'phoneNumber': phone_number})

    def confirm_change_phone_number(self, phone_number: str, otp: str) -> ApiEnvelope[PhoneChangeResult]:
        envelope = self._send('/users/change-phone', 'PUT', {'phoneNumber': phone_number, 'otp': otp})
        return envelope.map(PhoneChangeResult.from_dict)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------
    def admin_login(self, email: str, password: str) -> ApiEnvelope[LoginResult]:
        return self._send('/admin/login', 'POST', {'email': email, 'password': password}).map(LoginResult.from_dict)

    def get_admin_users(self) -> ApiEnvelope[UserList]:
        return self._send('/admin/users').map(UserList.from_dict)

    def get_admin_loans(self) -> ApiEnvelope[list]:
        return self._send('/admin/loans').map(list_of(LoanRecord))

    def get_admin_dashboard_stats(self) -> ApiEnvelope[DashboardStats]:
        return self._send('/admin/dashboard-stats').map(DashboardStats.from_dict)
