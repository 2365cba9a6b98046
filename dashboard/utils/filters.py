"""
List filtering for the Users, Loan Requests, Business and Leads pages.
"""

from collections import Counter
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Sequence

from core.models.entities import Business, Lead, LoanRecord, LoanStatus, User
from utils.formatters import user_activity_label

ALL = "all"

# Amount ranges offered on the Loan Requests page, "min-max" with an open upper bound
AMOUNT_RANGES = ["all", "0-10000", "10000-20000", "20000-50000", "50000-"]


def _contains(value: Optional[str], term: str) -> bool:
    return bool(value) and term in value.lower()


def _to_decimal(value) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value).replace(",", ""))
    except InvalidOperation:
        return None


def filter_users(users: Sequence[User], search: str = "", status: str = ALL,
                 location: str = ALL) -> List[User]:
    """Match name/email (case-insensitive) or phone, activity status and pin code"""
    term = search.strip().lower()
    result = []
    for user in users:
        matches_search = (
            not term
            or _contains(user.full_name, term)
            or _contains(user.email, term)
            or (bool(user.phone_number) and search.strip() in user.phone_number)
        )
        matches_status = status == ALL or user_activity_label(user) == status
        matches_location = location == ALL or user.pin_code == location
        if matches_search and matches_status and matches_location:
            result.append(user)
    return result


def user_locations(users: Sequence[User]) -> List[str]:
    """Distinct non-empty pin codes in first-seen order"""
    seen = []
    for user in users:
        if user.pin_code and user.pin_code not in seen:
            seen.append(user.pin_code)
    return seen


def parse_amount_range(amount_range: str):
    """'10000-20000' -> (10000, 20000); '50000-' -> (50000, None); 'all' -> (None, None)"""
    if amount_range == ALL:
        return None, None
    low, _, high = amount_range.partition("-")
    return _to_decimal(low), _to_decimal(high)


def filter_loans(loans: Sequence[LoanRecord], search: str = "", status: str = ALL,
                 amount_range: str = ALL) -> List[LoanRecord]:
    term = search.strip().lower()
    low, high = parse_amount_range(amount_range)
    result = []
    for loan in loans:
        if term and not (_contains(loan.purpose, term) or _contains(loan.user_id, term)
                         or _contains(loan.id, term)):
            continue
        if status != ALL and (loan.status or "").lower() != status:
            continue
        if low is not None or high is not None:
            amount = _to_decimal(loan.amount)
            if amount is None or (low is not None and amount < low) or (high is not None and amount > high):
                continue
        result.append(loan)
    return result


def loans_for_user(loans: Sequence[LoanRecord], user_id: str) -> List[LoanRecord]:
    return [loan for loan in loans if loan.user_id == user_id]


def status_counts(loans: Sequence[LoanRecord]) -> Dict[str, int]:
    """Count per LoanStatus value plus 'unknown' for anything outside the enumeration"""
    counts = Counter()
    for loan in loans:
        parsed = LoanStatus.parse(loan.status)
        counts[parsed.value if parsed else "unknown"] += 1
    result = {s.value: counts.get(s.value, 0) for s in LoanStatus}
    result["unknown"] = counts.get("unknown", 0)
    return result


def filter_businesses(businesses: Sequence[Business], search: str = "") -> List[Business]:
    term = search.strip().lower()
    if not term:
        return list(businesses)
    return [b for b in businesses
            if _contains(b.business_type, term) or _contains(b.mobile_number, term)]


def filter_leads(leads: Sequence[Lead], search: str = "", status: str = ALL) -> List[Lead]:
    term = search.strip().lower()
    result = []
    for lead in leads:
        if term and not (_contains(lead.name, term) or _contains(lead.city, term)
                         or _contains(lead.mobile_number, term)
                         or _contains(lead.application_number, term)):
            continue
        if status != ALL and (lead.status or "").lower() != status:
            continue
        result.append(lead)
    return result
