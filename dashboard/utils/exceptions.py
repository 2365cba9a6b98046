"""
Custom Exceptions for the Credito Insight admin dashboard
"""

class DashboardException(Exception):
    """Base exception for all dashboard errors"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

class ConfigurationException(DashboardException):
    """Raised when required configuration is missing or malformed"""
    pass

class ValidationException(DashboardException):
    """Raised when form or payload validation fails on the client"""
    pass

class ApiException(DashboardException):
    """Base class for failures talking to the backend"""
    pass

class TransportFailed(ApiException):
    """Raised when the backend is unreachable or returns a body that is not a JSON envelope"""
    def __init__(self, message: str, error_code: str = "TRANSPORT_FAILED"):
        super().__init__(message, error_code)

class RequestFailed(ApiException):
    """Raised when the backend answers with a status outside 200-299"""
    def __init__(self, message: str, status_code: int = None, envelope: dict = None,
                 error_code: str = "REQUEST_FAILED"):
        self.status_code = status_code
        self.envelope = envelope or {}
        super().__init__(message, error_code)
