"""Tests for the API gateway client: headers, envelope handling, errors and resource mappings."""

import httpx
import pytest

from conftest import BASE_URL, envelope
from core.models.entities import (
    ApiEnvelope, Business, DashboardStats, EmploymentDetails, EmploymentType, Lead,
    LoanRecord, UserList, UserResult, UserRole,
)
from utils.exceptions import RequestFailed, TransportFailed, ValidationException

# ---------------------------------------------------------------------------
# Authorization and headers
# ---------------------------------------------------------------------------


def test_request_carries_bearer_token_when_store_has_one(client, backend, store):
    store.set("abc")
    client.request("/users/me")
    assert backend.last.headers["authorization"] == "Bearer abc"


def test_request_has_no_authorization_without_token(client, backend):
    client.request("/users/me")
    assert "authorization" not in backend.last.headers


def test_token_is_read_at_dispatch_time(client, backend, store):
    """A token set after construction is used by the next request."""
    client.request("/leads/")
    store.set("late-token")
    client.request("/leads/")
    assert "authorization" not in backend.requests[0].headers
    assert backend.requests[1].headers["authorization"] == "Bearer late-token"


def test_cleared_token_is_not_sent(client, backend, store):
    store.set("abc")
    store.clear()
    assert store.get() is None
    client.request("/business/list")
    assert "authorization" not in backend.last.headers


def test_json_content_type_is_default(client, backend):
    client.request("/leads/")
    assert backend.last.headers["content-type"] == "application/json"


def test_caller_headers_win_on_conflict(client, backend, store):
    store.set("abc")
    client.request("/leads/", headers={"content-type": "text/plain", "Authorization": "Bearer other", "X-Trace": "1"})
    assert backend.last.headers["content-type"] == "text/plain"
    assert backend.last.headers["authorization"] == "Bearer other"
    assert backend.last.headers["x-trace"] == "1"


def test_url_is_base_plus_endpoint(client, backend):
    client.request("/admin/dashboard-stats")
    assert str(backend.last.url) == f"{BASE_URL}/admin/dashboard-stats"


def test_body_is_sent_verbatim(client, backend):
    client.request("/leads/create", method="POST", body='{"name": "Asha"}')
    assert backend.last.method == "POST"
    assert backend.last.content == b'{"name": "Asha"}'


# ---------------------------------------------------------------------------
# Envelope handling
# ---------------------------------------------------------------------------


def test_success_returns_envelope_unmodified(client, backend):
    body = envelope(data={"token": "abc"})
    backend.queue(200, body)
    result = client.request("/admin/login", method="POST", body="{}")
    assert isinstance(result, ApiEnvelope)
    assert result.raw == body
    assert (result.success, result.status, result.message, result.data) == (True, 200, "OK", {"token": "abc"})


def test_success_false_with_2xx_status_is_not_an_error(client, backend):
    """The envelope's own success flag is informational; transport status decides."""
    backend.queue(200, envelope(success=False, message="soft failure"))
    result = client.request("/leads/")
    assert result.success is False
    assert result.message == "soft failure"


@pytest.mark.parametrize("status_code", [201, 204, 299])
def test_any_2xx_status_is_success(client, backend, status_code):
    backend.queue(status_code, envelope(status=status_code))
    assert client.request("/leads/").status == status_code


def test_non_2xx_raises_request_failed_with_envelope_message(client, backend):
    backend.queue(401, envelope(success=False, status=401, message="Invalid credentials"))
    with pytest.raises(RequestFailed) as exc_info:
        client.request("/admin/login", method="POST", body="{}")
    assert str(exc_info.value) == "Invalid credentials"
    assert exc_info.value.status_code == 401
    assert exc_info.value.envelope["message"] == "Invalid credentials"


def test_non_2xx_without_message_uses_generic_text(client, backend):
    backend.queue(500, {"success": False})
    with pytest.raises(RequestFailed, match=r"HTTP error, status=500"):
        client.request("/leads/")


def test_redirect_status_is_a_failure(client, backend):
    backend.queue(302, envelope(message="moved"))
    with pytest.raises(RequestFailed, match="moved"):
        client.request("/leads/")


def test_malformed_body_raises_transport_failed(client, backend):
    backend.queue(200, content=b"<html>gateway</html>")
    with pytest.raises(TransportFailed):
        client.request("/leads/")


def test_malformed_error_body_raises_transport_failed(client, backend):
    """JSON parsing happens before the status check."""
    backend.queue(502, content=b"Bad Gateway")
    with pytest.raises(TransportFailed):
        client.request("/leads/")


def test_non_object_json_raises_transport_failed(client, backend):
    backend.queue(200, body=[1, 2, 3])
    with pytest.raises(TransportFailed):
        client.request("/leads/")


def test_network_error_raises_transport_failed(client, backend):
    backend.queue(exc=httpx.ConnectError)
    with pytest.raises(TransportFailed) as exc_info:
        client.request("/leads/")
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_failures_are_not_retried(client, backend):
    backend.queue(503, envelope(success=False, status=503, message="down"))
    with pytest.raises(RequestFailed):
        client.get_all_leads()
    assert len(backend.requests) == 1


def test_repeated_get_yields_identical_envelopes(client, backend, store):
    store.set("abc")
    body = envelope(data=[{"_id": "b1", "businessType": "retail", "turnover": "100",
                           "loanAmount": "50", "mobileNumber": "9876543210"}])
    backend.queue(200, body)
    backend.queue(200, body)
    first = client.get_all_businesses()
    second = client.get_all_businesses()
    assert first == second


# ---------------------------------------------------------------------------
# Resource method mappings
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("call, verb, path, body", [
    (lambda c: c.get_employment_details(), "GET", "/employment-details/", None),
    (lambda c: c.update_employment_details({"netMonthlyIncome": "50000"}), "PUT", "/employment-details/",
     {"netMonthlyIncome": "50000"}),
    (lambda c: c.get_all_businesses(), "GET", "/business/list", None),
    (lambda c: c.get_business_by_id("b1"), "GET", "/business/details/b1", None),
    (lambda c: c.update_business("b1", {"turnover": "900"}), "PUT", "/business/update/b1", {"turnover": "900"}),
    (lambda c: c.get_all_leads(), "GET", "/leads/", None),
    (lambda c: c.get_lead_by_id("l1"), "GET", "/leads/l1", None),
    (lambda c: c.update_lead("l1", {"status": "approved"}), "PUT", "/leads/l1", {"status": "approved"}),
    (lambda c: c.get_leads_by_mobile_number("9876543210"), "GET", "/leads/mobile/9876543210", None),
    (lambda c: c.get_lead_by_application_number("APP-7"), "GET", "/leads/application/APP-7", None),
    (lambda c: c.get_user_details(), "GET", "/users/me", None),
    (lambda c: c.update_user({"fullName": "Asha Rao"}), "PUT", "/users/me", {"fullName": "Asha Rao"}),
    (lambda c: c.get_user_home_page_data(), "GET", "/users/home", None),
    (lambda c: c.change_phone_number_request("9000000000"), "POST", "/users/change-phone",
     {"phoneNumber": "9000000000"}),
    (lambda c: c.confirm_change_phone_number("9000000000", "1234"), "PUT", "/users/change-phone",
     {"phoneNumber": "9000000000", "otp": "1234"}),
    (lambda c: c.admin_login("admin@loanapp.com", "secret"), "POST", "/admin/login",
     {"email": "admin@loanapp.com", "password": "secret"}),
    (lambda c: c.get_admin_users(), "GET", "/admin/users", None),
    (lambda c: c.get_admin_loans(), "GET", "/admin/loans", None),
    (lambda c: c.get_admin_dashboard_stats(), "GET", "/admin/dashboard-stats", None),
])
def test_resource_method_mapping(client, backend, call, verb, path, body):
    call(client)
    assert backend.last.method == verb
    assert backend.last.url.path == "/api/v1" + path
    if body is None:
        assert backend.last.content == b""
    else:
        assert backend.last_json() == body


def test_path_parameters_are_quoted(client, backend):
    client.get_lead_by_application_number("APP/1 2")
    assert backend.last.url.raw_path == b"/api/v1/leads/application/APP%2F1%202"


# ---------------------------------------------------------------------------
# Create/update payloads
# ---------------------------------------------------------------------------


def test_create_lead_sends_exactly_caller_fields(client, backend):
    fields = {"name": "Asha", "city": "Pune", "pincode": "411001", "loanType": "home",
              "amount": "500000", "tenure": "24", "mobileNumber": "9876543210"}
    client.create_lead(fields)
    sent = backend.last_json()
    assert sent == fields
    for server_field in ("_id", "status", "applicationNumber", "createdAt", "updatedAt"):
        assert server_field not in sent


def test_create_accepts_attribute_names(client, backend):
    client.create_business({"business_type": "retail", "loan_amount": "100000"})
    assert backend.last_json() == {"businessType": "retail", "loanAmount": "100000"}


def test_create_does_not_default_omitted_fields(client, backend):
    client.create_business({"businessType": "service"})
    assert backend.last_json() == {"businessType": "service"}


def test_none_values_are_sent_as_null(client, backend):
    client.update_lead("l1", {"city": "Pune", "tenure": None})
    assert backend.last_json() == {"city": "Pune", "tenure": None}


def test_clearing_an_enum_field_sends_null(client, backend):
    client.update_employment_details({"employmentType": None})
    assert backend.last_json() == {"employmentType": None}


@pytest.mark.parametrize("field", ["status", "applicationNumber", "_id", "createdAt"])
def test_create_lead_rejects_server_assigned_fields(client, backend, field):
    with pytest.raises(ValidationException):
        client.create_lead({"name": "Asha", field: "x"})
    assert backend.requests == []


def test_create_business_rejects_id(client, backend):
    with pytest.raises(ValidationException):
        client.create_business({"_id": "b1", "businessType": "retail"})
    assert backend.requests == []


def test_unknown_field_is_rejected(client, backend):
    with pytest.raises(ValidationException, match="Unknown field"):
        client.update_business("b1", {"colour": "blue"})
    assert backend.requests == []


def test_employment_type_is_validated_and_serialized(client, backend):
    client.update_employment_details({"employmentType": EmploymentType.SELF_EMPLOYED})
    assert backend.last_json() == {"employmentType": "self-employed"}

    with pytest.raises(ValidationException):
        client.update_employment_details({"employmentType": "freelancer"})


# ---------------------------------------------------------------------------
# Typed results
# ---------------------------------------------------------------------------


def test_business_list_is_typed(client, backend):
    backend.queue(200, envelope(data=[{"_id": "b1", "businessType": "retail", "turnover": "1200000.50",
                                       "loanAmount": "300000", "mobileNumber": "9876543210"}]))
    result = client.get_all_businesses()
    assert result.data == [Business(business_type="retail", turnover="1200000.50", loan_amount="300000",
                                     mobile_number="9876543210", id="b1")]


def test_employment_details_are_typed(client, backend):
    backend.queue(200, envelope(data={"userId": "u1", "netMonthlyIncome": "45000",
                                      "employmentType": "salaried", "companyOrBusinessName": "Acme"}))
    details = client.get_employment_details().data
    assert isinstance(details, EmploymentDetails)
    assert details.employment_type is EmploymentType.SALARIED
    assert details.company_or_business_name == "Acme"


def test_admin_users_and_current_user_are_typed(client, backend):
    user = {"_id": "u1", "fullName": "Asha Rao", "email": "asha@example.com", "phoneNumber": "9876543210",
            "role": "user", "authProvider": "google", "isVerified": True}
    backend.queue(200, envelope(data={"users": [user]}))
    backend.queue(200, envelope(data={"user": user}))

    users = client.get_admin_users().data
    me = client.get_user_details().data
    assert isinstance(users, UserList) and users.users[0].full_name == "Asha Rao"
    assert isinstance(me, UserResult) and me.user.is_verified is True


def test_admin_users_with_unknown_role_still_load(client, backend):
    backend.queue(200, envelope(data={"users": [
        {"_id": "u1", "fullName": "Asha Rao", "role": "superadmin", "authProvider": "github"},
        {"_id": "u2", "fullName": "Vikram Singh", "role": "admin"},
    ]}))
    users = client.get_admin_users().data.users
    assert [u.id for u in users] == ["u1", "u2"]
    assert users[0].role is None and users[0].auth_provider is None
    assert users[1].role is UserRole.ADMIN


def test_admin_users_accepts_bare_array(client, backend):
    backend.queue(200, envelope(data=[{"_id": "u1", "fullName": "Asha Rao"}]))
    result = client.get_admin_users().data
    assert [u.full_name for u in result.users] == ["Asha Rao"]


@pytest.mark.parametrize("call, data", [
    (lambda c: c.get_admin_users(), "abc"),
    (lambda c: c.get_user_details(), []),
    (lambda c: c.confirm_change_phone_number("9000000000", "1234"), "ok"),
    (lambda c: c.get_lead_by_id("l1"), [1, 2]),
])
def test_non_object_data_raises_validation_error(client, backend, call, data):
    backend.queue(200, envelope(data=data))
    with pytest.raises(ValidationException, match="Expected an object"):
        call(client)


def test_loans_and_stats_are_typed(client, backend):
    backend.queue(200, envelope(data=[{"_id": "loan1", "userId": "u1", "amount": 15000, "status": "pending",
                                       "tenureMonths": 12}]))
    backend.queue(200, envelope(data={"totalUsers": 10, "pendingRequests": 2, "completedLoans": 5,
                                      "totalAmount": 250000, "recentRequests": [
                                          {"id": 1, "user": "Asha", "date": "2024-01-15",
                                           "amount": "15000", "status": "approved"}]}))

    loans = client.get_admin_loans().data
    stats = client.get_admin_dashboard_stats().data
    assert loans == [LoanRecord(user_id="u1", amount=15000, status="pending", id="loan1",
                                extra={"tenureMonths": 12})]
    assert isinstance(stats, DashboardStats)
    assert stats.total_users == 10
    assert stats.recent_requests[0].id == 1
    assert stats.recent_requests[0].status == "approved"


def test_null_data_stays_none(client, backend):
    backend.queue(200, envelope(data=None))
    result = client.change_phone_number_request("9000000000")
    assert result.data is None


def test_lead_by_application_number_is_typed(client, backend):
    backend.queue(200, envelope(data={"_id": "l1", "name": "Asha", "status": "reviewing",
                                      "applicationNumber": "APP-7"}))
    lead = client.get_lead_by_application_number("APP-7").data
    assert isinstance(lead, Lead)
    assert lead.application_number == "APP-7"
