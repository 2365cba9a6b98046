"""Tests for form validation."""

import pytest

from utils.exceptions import ValidationException
from utils.validators import (
    BUSINESS_FIELD_LIMITS, BUSINESS_REQUIRED_FIELDS, LEAD_FIELD_LIMITS, LEAD_REQUIRED_FIELDS,
    FormValidator,
)


def test_validate_required():
    assert FormValidator.validate_required("x", "name")
    for blank in (None, "", "   "):
        with pytest.raises(ValidationException) as exc_info:
            FormValidator.validate_required(blank, "name")
        assert exc_info.value.message == "name is required"


def test_validate_max_length():
    assert FormValidator.validate_max_length("123456", 6, "pincode")
    assert FormValidator.validate_max_length(None, 6, "pincode")
    with pytest.raises(ValidationException):
        FormValidator.validate_max_length("1234567", 6, "pincode")


def test_valid_business_form_has_no_errors():
    values = {"businessType": "retail", "turnover": "500000", "loanAmount": "200000",
              "mobileNumber": "9876543210"}
    assert FormValidator.validate_form(values, BUSINESS_REQUIRED_FIELDS, BUSINESS_FIELD_LIMITS) == {}


def test_lead_form_reports_every_failure():
    values = {"name": "", "mobileNumber": "98765432101", "city": "Pune", "pincode": "4110011",
              "loanType": "personal", "amount": "", "tenure": "12"}
    errors = FormValidator.validate_form(values, LEAD_REQUIRED_FIELDS, LEAD_FIELD_LIMITS)
    assert set(errors) == {"name", "amount", "mobileNumber", "pincode"}
    assert errors["pincode"] == "pincode cannot exceed 6 characters"


def test_missing_field_reports_required_not_length():
    errors = FormValidator.validate_form({}, ["mobileNumber"], {"mobileNumber": 10})
    assert errors == {"mobileNumber": "mobileNumber is required"}
