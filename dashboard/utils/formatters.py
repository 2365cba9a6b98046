"""
Formatting helpers shared across Streamlit pages.
Currency formatting, status badges, date helpers.
"""

from decimal import Decimal, InvalidOperation
from datetime import datetime, date
from typing import Optional, Union

from dateutil import parser as date_parser

from core.models.entities import (
    STATUS_BADGE_CATEGORIES, BadgeCategory, EmploymentType, LoanStatus, User,
)

# Streamlit markdown colour names per badge category
BADGE_COLOURS = {
    BadgeCategory.WARNING: "orange",
    BadgeCategory.SUCCESS: "green",
    BadgeCategory.DANGER: "red",
    BadgeCategory.INFO: "blue",
}
UNKNOWN_BADGE_COLOUR = "gray"

EMPLOYMENT_TYPE_LABELS = {
    EmploymentType.SALARIED: "Salaried",
    EmploymentType.SELF_EMPLOYED: "Self-employed",
    EmploymentType.BUSINESS_OWNER: "Business owner",
    EmploymentType.UNEMPLOYED: "Unemployed",
    EmploymentType.OTHER: "Other",
}


def format_currency(amount: Union[int, float, Decimal, str, None]) -> str:
    """Format amount as Indian Rupee currency string."""
    if amount is None or amount == "":
        return "N/A"
    try:
        if isinstance(amount, str):
            amount = Decimal(amount.replace(",", "").strip())
        elif isinstance(amount, (int, float)):
            amount = Decimal(str(amount))
        return f"₹{amount:,.2f}"
    except (InvalidOperation, ValueError, TypeError):
        return f"₹{amount}"


def parse_date(value: Union[datetime, date, str, None]) -> Optional[Union[datetime, date]]:
    """Parse an ISO-8601 string from the backend; None when absent or unparseable."""
    if value is None or isinstance(value, (datetime, date)):
        return value
    try:
        return date_parser.isoparse(value)
    except (ValueError, TypeError):
        return None


def format_date(dt: Union[datetime, date, str, None]) -> str:
    """Format date for display."""
    dt = parse_date(dt)
    if dt is None:
        return "N/A"
    if isinstance(dt, datetime):
        return dt.strftime("%d %b %Y, %I:%M %p")
    return dt.strftime("%d %b %Y")


def status_badge(status: Optional[str]) -> str:
    """Coloured markdown badge for a loan or lead status.

    Statuses outside the LoanStatus enumeration get an explicit grey 'Unknown' badge.
    """
    parsed = LoanStatus.parse(status)
    if parsed is None:
        label = f"Unknown ({status})" if status else "Unknown"
        return f":{UNKNOWN_BADGE_COLOUR}[{label}]"
    colour = BADGE_COLOURS[STATUS_BADGE_CATEGORIES[parsed]]
    return f":{colour}[{parsed.value.title()}]"


def employment_type_label(employment_type: Optional[EmploymentType]) -> str:
    if employment_type is None:
        return "Not provided"
    return EMPLOYMENT_TYPE_LABELS[employment_type]


def user_activity_label(user: User) -> str:
    """'active' for verified users, 'inactive' otherwise; used for display filtering only"""
    return "active" if user.is_verified else "inactive"
