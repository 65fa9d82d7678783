"""Exception hierarchy for halkit.

All halkit errors inherit from HalkitError and include:
- error_code: An ErrorCode enum for programmatic handling
- message: A human-readable description
- cause: The underlying exception (if any)

Transport and HTTP failures are ApiClientError subclasses that also carry
the HTTP status and the structured error envelope returned by the server
(``{"error": {"code", "message", "details"}}``).

Client-side validation problems are never raised; they are returned as a
list of ``halkit.models.ValidationError`` records.

Example:
    try:
        resource = await transport.request("/users/123")
    except HttpError as e:
        print(f"[{e.status}] {e.code}: {e.message}")
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

    from halkit.models import ApiError, ValidationError


class ErrorCode(Enum):
    """Standardized error codes for halkit.

    Error codes are organized by category:
    - E0xx: Transport errors
    - E1xx: Request/response errors
    - E2xx: Validation and template errors
    - E3xx: Configuration errors
    - E9xx: Unknown/internal errors
    """

    # Transport errors (E0xx)
    NETWORK_ERROR = "E001"

    # Request errors (E1xx)
    REQUEST_TIMEOUT = "E101"
    HTTP_ERROR = "E102"
    RESPONSE_PARSE_FAILED = "E103"
    AUTH_REDIRECT = "E104"

    # Validation and template errors (E2xx)
    VALIDATION_FAILED = "E201"
    TEMPLATE_DATA_MISSING = "E202"

    # Configuration errors (E3xx)
    INVALID_CONFIG = "E301"

    # Unknown/internal errors (E9xx)
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 100:
            return "transport"
        elif code_num < 200:
            return "request"
        elif code_num < 300:
            return "validation"
        elif code_num < 400:
            return "configuration"
        else:
            return "unknown"


class HalkitError(Exception):
    """Base exception for all halkit errors.

    Attributes:
        error_code: ErrorCode for this error type
        message: Human-readable error description
        cause: The underlying exception (if any)
        details: Additional structured information
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.cause = cause
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


class ApiClientError(HalkitError):
    """A request to the API failed.

    Carries the HTTP status (0 when no response was received) and the
    structured error envelope, either parsed from the response body or
    synthesized by the client.
    """

    error_code = ErrorCode.HTTP_ERROR
    default_message = "API request failed"

    def __init__(
        self,
        status: int,
        error: ApiError,
        response: httpx.Response | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.status = status
        self.error = error
        self.response = response
        super().__init__(
            message=error.message,
            cause=cause,
            details=dict(error.details or {}),
        )

    @property
    def code(self) -> str:
        """The wire-level error code (e.g. ``NOT_FOUND``)."""
        return self.error.code

    def __str__(self) -> str:
        return f"[{self.error_code.value}] HTTP {self.status} {self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status"] = self.status
        result["code"] = self.code
        return result


class NetworkError(ApiClientError):
    """The request never produced an HTTP response."""

    error_code = ErrorCode.NETWORK_ERROR

    def __init__(self, message: str | None = None, cause: Exception | None = None) -> None:
        from halkit.models import ApiError

        super().__init__(
            0,
            ApiError(code="NETWORK_ERROR", message=message or "Network error occurred"),
            cause=cause,
        )


class TimeoutError(ApiClientError):
    """The request was aborted because it exceeded the configured timeout."""

    error_code = ErrorCode.REQUEST_TIMEOUT

    def __init__(self, message: str | None = None, cause: Exception | None = None) -> None:
        from halkit.models import ApiError

        super().__init__(
            408,
            ApiError(code="REQUEST_TIMEOUT", message=message or "Request timed out"),
            cause=cause,
        )


class RequestTimeoutError(TimeoutError):
    """HTTP request timed out waiting for a response."""


class HttpError(ApiClientError):
    """The server answered with a non-2xx status.

    ``code`` and ``message`` come from the response's error envelope when
    present, otherwise they are synthesized from the status line.
    """

    error_code = ErrorCode.HTTP_ERROR


class ResponseParseError(ApiClientError):
    """A successful response did not contain a JSON object."""

    error_code = ErrorCode.RESPONSE_PARSE_FAILED


class AuthRedirectError(HalkitError):
    """An authentication failure was handed to the auth-error callback.

    Raised by ``Redirecting.unwrap()`` so that callers which insist on a
    value get an explicit signal instead of a result that never arrives.
    """

    error_code = ErrorCode.AUTH_REDIRECT
    default_message = "Authentication required; redirect in progress"


class ValidationFailedError(HalkitError):
    """Raised by ``Invalid.unwrap()`` when submitted data failed validation."""

    error_code = ErrorCode.VALIDATION_FAILED
    default_message = "Template data failed validation"

    def __init__(self, errors: list[ValidationError], message: str | None = None) -> None:
        self.errors = list(errors)
        super().__init__(
            message=message or self.default_message,
            details={"errors": [{"field": e.field, "message": e.message} for e in self.errors]},
        )


class TemplateDataError(HalkitError):
    """Template execution data could not be assembled from the available sources."""

    error_code = ErrorCode.TEMPLATE_DATA_MISSING
    default_message = "Template data is incomplete"

    def __init__(self, message: str | None = None, field: str | None = None) -> None:
        self.field = field
        super().__init__(message=message, details={"field": field} if field else None)


class ConfigurationError(HalkitError):
    """Invalid construction-time configuration."""

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid configuration"

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message=message, details={"field": field} if field else None)

    def __str__(self) -> str:
        base = super().__str__()
        if self.field:
            base = f"{base} (field: {self.field})"
        return base


__all__ = [
    "ErrorCode",
    "HalkitError",
    "ApiClientError",
    "NetworkError",
    "TimeoutError",
    "RequestTimeoutError",
    "HttpError",
    "ResponseParseError",
    "AuthRedirectError",
    "ValidationFailedError",
    "TemplateDataError",
    "ConfigurationError",
]
