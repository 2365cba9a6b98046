"""
Data Models for the Credito Insight admin dashboard
Dataclasses representing backend records and response envelopes
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
from enum import Enum

from utils.exceptions import ValidationException

logger = logging.getLogger(__name__)

T = TypeVar('T')
U = TypeVar('U')

# Enums for closed backend vocabularies
class EmploymentType(Enum):
    SALARIED = 'salaried'
    SELF_EMPLOYED = 'self-employed'
    BUSINESS_OWNER = 'business-owner'
    UNEMPLOYED = 'unemployed'
    OTHER = 'other'

class UserRole(Enum):
    USER = 'user'
    ADMIN = 'admin'

class AuthProvider(Enum):
    PHONE_NUMBER = 'phone-number'
    GOOGLE = 'google'
    APPLE = 'apple'

class LoanStatus(Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    REVIEWING = 'reviewing'

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['LoanStatus']:
        """Return the matching status, or None for anything outside the enumeration"""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

class BadgeCategory(Enum):
    WARNING = 'warning'
    SUCCESS = 'success'
    DANGER = 'danger'
    INFO = 'info'

# Total over LoanStatus; unknown strings never reach this table
STATUS_BADGE_CATEGORIES = {
    LoanStatus.PENDING: BadgeCategory.WARNING,
    LoanStatus.APPROVED: BadgeCategory.SUCCESS,
    LoanStatus.REJECTED: BadgeCategory.DANGER,
    LoanStatus.REVIEWING: BadgeCategory.INFO,
}


def _wire_name(name: str) -> str:
    if name == 'id':
        return '_id'
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def _parse_enum(enum_cls, value, field_name: str):
    """Response-side enum parsing; values outside the enumeration become None"""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        logger.warning(f"Unknown {field_name} '{value}' in response; treating as unknown")
        return None


def _require_object(cls, data) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationException(f"Expected an object for {cls.__name__}, got {type(data).__name__}")
    return data


class WireRecord:
    """Mixin mapping camelCase wire keys onto snake_case dataclass fields"""

    _ENUMS: Dict[str, type] = {}

    @classmethod
    def wire_fields(cls) -> Dict[str, str]:
        """Map wire key -> attribute name, excluding the catch-all ``extra`` field"""
        return {_wire_name(f.name): f.name for f in fields(cls) if f.name != 'extra'}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        if data is None:
            return None
        _require_object(cls, data)

        mapping = cls.wire_fields()
        kwargs = {}
        extra = {}
        for key, value in data.items():
            attr = mapping.get(key)
            if attr is None:
                extra[key] = value
            elif attr in cls._ENUMS:
                kwargs[attr] = _parse_enum(cls._ENUMS[attr], value, key)
            else:
                kwargs[attr] = value
        if 'extra' in {f.name for f in fields(cls)}:
            kwargs['extra'] = extra
        return cls(**kwargs)


@dataclass
class EmploymentDetails(WireRecord):
    """Employment record attached to a registered user"""
    user_id: str = ""
    net_monthly_income: str = ""
    employment_type: Optional[EmploymentType] = None
    company_or_business_name: Optional[str] = None
    company_pin_code: Optional[str] = None
    salary_slip_document: Optional[str] = None
    payment_mode: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _ENUMS = {'employment_type': EmploymentType}

@dataclass
class Business(WireRecord):
    """Business-loan application; monetary fields stay decimal strings"""
    business_type: str = ""
    turnover: str = ""
    loan_amount: str = ""
    mobile_number: str = ""
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

@dataclass
class Lead(WireRecord):
    """Lead entity; status and application number are assigned by the backend"""
    name: str = ""
    city: str = ""
    pincode: str = ""
    loan_type: str = ""
    amount: str = ""
    tenure: str = ""
    mobile_number: str = ""
    status: str = ""
    application_number: str = ""
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

@dataclass
class User(WireRecord):
    """Registered application user"""
    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    pancard_number: Optional[str] = None
    is_verified: bool = False
    pin_code: Optional[str] = None
    marital_status: Optional[str] = None
    role: Optional[UserRole] = None
    auth_provider: Optional[AuthProvider] = None
    auth_provider_id: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _ENUMS = {'role': UserRole, 'auth_provider': AuthProvider}

@dataclass
class LoanRecord(WireRecord):
    """Loan request as listed by the admin loans endpoint"""
    user_id: Optional[str] = None
    amount: Any = None
    status: Optional[str] = None
    purpose: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

@dataclass
class RecentRequest(WireRecord):
    """Row of the dashboard's recent loan requests list"""
    user: Optional[str] = None
    date: Optional[str] = None
    amount: Any = None
    status: Optional[str] = None
    id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def wire_fields(cls) -> Dict[str, str]:
        mapping = super().wire_fields()
        mapping['id'] = mapping.pop('_id')
        return mapping

@dataclass
class DashboardStats(WireRecord):
    """Aggregates shown on the admin dashboard"""
    total_users: int = 0
    pending_requests: int = 0
    completed_loans: int = 0
    total_amount: Any = 0
    recent_requests: List[RecentRequest] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data):
        stats = super().from_dict(data)
        if stats is not None:
            stats.recent_requests = [RecentRequest.from_dict(r) for r in stats.recent_requests or []]
        return stats

@dataclass
class HomePageData(WireRecord):
    """Current user's pending and completed loan requests"""
    pending_loan_request: List[Dict[str, Any]] = field(default_factory=list)
    completed_loan_requests: List[Dict[str, Any]] = field(default_factory=list)

@dataclass
class UserResult:
    """``{user}`` payload of the /users/me endpoints"""
    user: Optional[User] = None

    @classmethod
    def from_dict(cls, data):
        if data is None:
            return None
        return cls(user=User.from_dict(_require_object(cls, data).get('user')))

@dataclass
class UserList:
    """``{users}`` payload of the admin users endpoint"""
    users: List[User] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data):
        if data is None:
            return None
        # either {users} or the bare array
        items = data if isinstance(data, list) else _require_object(cls, data).get('users')
        return cls(users=[User.from_dict(u) for u in items or []])

@dataclass
class LoginResult:
    """``{token}`` payload of the admin login endpoint"""
    token: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        if data is None:
            return None
        return cls(token=_require_object(cls, data).get('token'))

@dataclass
class PhoneChangeResult:
    """``{phoneNumber}`` payload returned after confirming a phone change"""
    phone_number: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        if data is None:
            return None
        return cls(phone_number=_require_object(cls, data).get('phoneNumber'))


@dataclass
class ApiEnvelope(Generic[T]):
    """Uniform ``{success, status, message, data}`` wrapper returned by every backend call.

    ``success`` is informational: the transport status decides success or failure.
    ``raw`` is the parsed response body exactly as received.
    """
    success: bool
    status: int
    message: str
    data: Optional[T]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_body(cls, body: Dict[str, Any], status_code: int) -> 'ApiEnvelope[Any]':
        return cls(
            success=bool(body.get('success', False)),
            status=body.get('status', status_code),
            message=body.get('message') or '',
            data=body.get('data'),
            raw=body,
        )

    def map(self, parser: Callable[[Any], U]) -> 'ApiEnvelope[U]':
        """Return a copy whose ``data`` is converted by ``parser``; null data stays None"""
        data = parser(self.data) if self.data is not None else None
        return ApiEnvelope(self.success, self.status, self.message, data, self.raw)


def list_of(record_cls) -> Callable[[Any], list]:
    """Parser for endpoints whose ``data`` is a JSON array of records"""
    def parse(items):
        if not isinstance(items, list):
            raise ValidationException(f"Expected a list of {record_cls.__name__}")
        return [record_cls.from_dict(item) for item in items]
    return parse
