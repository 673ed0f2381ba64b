"""
Custom exceptions for the Sift API client library.
"""


class SiftAPIError(Exception):
    """Base exception for Sift API client errors."""
    pass


class ConfigurationError(SiftAPIError):
    """Raised when client credentials or configuration are invalid."""
    pass


class ValidationError(SiftAPIError):
    """Raised when endpoint arguments are rejected before sending."""
    pass


class TransportError(SiftAPIError):
    """Raised when the HTTP exchange fails or the body is not JSON."""

    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response
        self.status_code = response.status_code if response is not None else None


class APIError(SiftAPIError):
    """Raised by raise_for_code() when the API reports a failure."""

    def __init__(self, code, message, body=None):
        super().__init__(f"Sift API error {code}: {message}")
        self.code = code
        self.message = message
        self.body = body
