"""
Custom exceptions for Ksher payment operations.
"""


class KsherException(Exception):
    """Base exception for all Ksher-related errors."""

    def __init__(self, message, error_code=None, response_data=None):
        self.message = message
        self.error_code = error_code
        self.response_data = response_data
        super().__init__(self.message)


class ConfigurationError(KsherException):
    """Raised when there's a configuration issue."""
    pass


class ValidationError(KsherException):
    """Raised when a request payload does not match its operation's shape."""
    pass


class APIError(KsherException):
    """Raised when the request cannot be delivered to the Ksher API."""
    pass


class KsherTimeoutError(APIError):
    """Raised when the configured timeout aborts an in-flight request."""
    pass


class ResponseValidationError(KsherException):
    """Raised when a response body does not match the expected envelope."""
    pass


class KsherSignatureError(KsherException):
    """
    Raised when a success-coded response fails signature verification.
    The parsed response is kept on ``response`` for diagnostics.
    """

    def __init__(self, message, response=None):
        self.response = response
        response_data = response.model_dump() if response is not None else None
        super().__init__(message, response_data=response_data)
