"""
Situation - Custom Exceptions

This module defines the exceptions raised by the configuration layer and the
remote service client, with error codes, messages and context information.
"""

from typing import Any


class SituationException(Exception):
    """Base exception class for Situation."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code}')"

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


# ============================================================================
# Configuration Exceptions
# ============================================================================

class ConfigurationError(SituationException):
    """Raised when the service URL or credential is missing or invalid."""
    pass


# ============================================================================
# Remote Service Exceptions
# ============================================================================

class ServiceError(SituationException):
    """Base exception for failed remote service calls.

    ``diagnostics`` holds the log lines gathered before the failure so callers
    can decide whether to surface them.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        endpoint: str | None = None,
        diagnostics: list[str] | None = None,
        **kwargs
    ):
        self.operation = operation
        self.endpoint = endpoint
        self.diagnostics = diagnostics or []
        details = kwargs.pop('details', {})
        if operation:
            details['operation'] = operation
        if endpoint:
            details['endpoint'] = endpoint
        super().__init__(message, details=details, **kwargs)

    def __str__(self) -> str:
        return self.message


class TransportError(ServiceError):
    """Raised when the request never produced a response (network, timeout)."""
    pass


class ResponseError(ServiceError):
    """Raised when the service answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str | None = None,
        api_error: Any | None = None,
        **kwargs
    ):
        self.status_code = status_code
        self.body = body
        self.api_error = api_error
        details = kwargs.pop('details', {})
        details['status_code'] = status_code
        if api_error is not None:
            details['api_error_code'] = getattr(api_error, 'code', None)
        super().__init__(message, details=details, **kwargs)


class DecodeError(ServiceError):
    """Raised when a success response body cannot be decoded."""

    def __init__(self, message: str, body: str | None = None, **kwargs):
        self.body = body
        details = kwargs.pop('details', {})
        if body:
            details['body'] = body[:500] + "..." if len(body) > 500 else body
        super().__init__(message, details=details, **kwargs)


# ============================================================================
# Exception Utilities
# ============================================================================

def format_validation_error(errors: list[dict[str, Any]]) -> str:
    """Format Pydantic validation errors into a readable string."""
    error_messages = []
    for error in errors:
        field = " -> ".join(str(loc) for loc in error.get("loc", []))
        message = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {message}")
    return "; ".join(error_messages)
