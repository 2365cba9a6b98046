"""
Input Validation Utilities
Required and max-length checks for dashboard forms; business rules stay on the backend
"""

from typing import Dict, Iterable, Mapping, Optional
from utils.exceptions import ValidationException

BUSINESS_TYPES = ["retail", "manufacturing", "service", "trading", "agriculture", "other"]
LOAN_TYPES = ["personal", "home", "car", "business", "education", "gold"]

BUSINESS_REQUIRED_FIELDS = ["businessType", "turnover", "loanAmount", "mobileNumber"]
BUSINESS_FIELD_LIMITS = {"mobileNumber": 10}

LEAD_REQUIRED_FIELDS = ["name", "mobileNumber", "city", "pincode", "loanType", "amount", "tenure"]
LEAD_FIELD_LIMITS = {"mobileNumber": 10, "pincode": 6}

class FormValidator:
    """Validation utilities for dashboard forms"""

    @staticmethod
    def validate_required(value: Optional[str], field_name: str) -> bool:
        """Reject missing or blank values"""
        if value is None or not str(value).strip():
            raise ValidationException(f"{field_name} is required")
        return True

    @staticmethod
    def validate_max_length(value: Optional[str], max_length: int, field_name: str) -> bool:
        if value is not None and len(str(value)) > max_length:
            raise ValidationException(f"{field_name} cannot exceed {max_length} characters")
        return True

    @staticmethod
    def validate_form(values: Mapping[str, Optional[str]], required: Iterable[str] = (),
                      max_lengths: Dict[str, int] = None) -> Dict[str, str]:
        """Validate a form and return a field -> message map of every failure"""
        errors = {}
        for field_name in required:
            try:
                FormValidator.validate_required(values.get(field_name), field_name)
            except ValidationException as e:
                errors[field_name] = e.message

        for field_name, limit in (max_lengths or {}).items():
            if field_name in errors:
                continue
            try:
                FormValidator.validate_max_length(values.get(field_name), limit, field_name)
            except ValidationException as e:
                errors[field_name] = e.message

        return errors
