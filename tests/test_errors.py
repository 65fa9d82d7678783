"""Tests for the halkit exception hierarchy."""

from __future__ import annotations

import pytest

from halkit.errors import (
    ApiClientError,
    AuthRedirectError,
    ConfigurationError,
    ErrorCode,
    HalkitError,
    HttpError,
    NetworkError,
    RequestTimeoutError,
    ResponseParseError,
    TemplateDataError,
    TimeoutError,
    ValidationFailedError,
)
from halkit.models import ApiError, ValidationError


class TestErrorCode:
    """Tests for error code categories."""

    @pytest.mark.parametrize(
        "code,category",
        [
            (ErrorCode.NETWORK_ERROR, "transport"),
            (ErrorCode.REQUEST_TIMEOUT, "request"),
            (ErrorCode.HTTP_ERROR, "request"),
            (ErrorCode.VALIDATION_FAILED, "validation"),
            (ErrorCode.TEMPLATE_DATA_MISSING, "validation"),
            (ErrorCode.INVALID_CONFIG, "configuration"),
            (ErrorCode.UNKNOWN, "unknown"),
        ],
    )
    def test_category(self, code: ErrorCode, category: str) -> None:
        assert code.category == category


class TestHalkitError:
    """Tests for the base error."""

    def test_default_message(self) -> None:
        error = HalkitError()

        assert error.message == "An unexpected error occurred"
        assert str(error) == "[E999] An unexpected error occurred"

    def test_to_dict(self) -> None:
        cause = ValueError("boom")
        error = HalkitError("Something failed", cause=cause, details={"step": 2})

        assert error.to_dict() == {
            "error_code": "E999",
            "error_type": "HalkitError",
            "message": "Something failed",
            "details": {"step": 2},
            "cause": "boom",
        }


class TestApiClientErrors:
    """Tests for transport and HTTP errors."""

    def test_http_error_carries_envelope(self) -> None:
        error = HttpError(409, ApiError(code="CONFLICT", message="Already exists", details={"key": "email"}))

        assert isinstance(error, ApiClientError)
        assert error.status == 409
        assert error.code == "CONFLICT"
        assert error.message == "Already exists"
        assert error.details == {"key": "email"}
        assert str(error) == "[E102] HTTP 409 CONFLICT: Already exists"
        assert error.to_dict()["status"] == 409
        assert error.to_dict()["code"] == "CONFLICT"

    def test_network_error(self) -> None:
        cause = OSError("unreachable")
        error = NetworkError(cause=cause)

        assert error.status == 0
        assert error.code == "NETWORK_ERROR"
        assert error.message == "Network error occurred"
        assert error.cause is cause
        assert error.error_code is ErrorCode.NETWORK_ERROR

    def test_timeout_errors(self) -> None:
        error = RequestTimeoutError()

        assert isinstance(error, TimeoutError)
        assert isinstance(error, ApiClientError)
        assert error.status == 408
        assert error.code == "REQUEST_TIMEOUT"
        assert error.message == "Request timed out"

    def test_parse_error(self) -> None:
        error = ResponseParseError(200, ApiError(code="PARSE_ERROR", message="Not JSON"))

        assert error.error_code is ErrorCode.RESPONSE_PARSE_FAILED
        assert error.details == {}


class TestClientSideErrors:
    """Tests for validation, template and configuration errors."""

    def test_auth_redirect(self) -> None:
        assert AuthRedirectError().error_code.category == "request"

    def test_validation_failed(self) -> None:
        errors = [ValidationError(field="name", message="Name is required")]

        error = ValidationFailedError(errors)

        assert error.errors == errors
        assert error.details == {"errors": [{"field": "name", "message": "Name is required"}]}

    def test_template_data_error(self) -> None:
        error = TemplateDataError("Required field email is missing", field="email")

        assert error.field == "email"
        assert error.details == {"field": "email"}
        assert str(error) == "[E202] Required field email is missing"

    def test_configuration_error(self) -> None:
        error = ConfigurationError("Bad URL", field="base_url", value="nope")

        assert error.value == "nope"
        assert str(error) == "[E301] Bad URL (field: base_url)"
        assert str(ConfigurationError()) == "[E301] Invalid configuration"

    def test_all_inherit_from_base(self) -> None:
        for error in (
            NetworkError(),
            RequestTimeoutError(),
            AuthRedirectError(),
            ValidationFailedError([]),
            TemplateDataError(),
            ConfigurationError(),
        ):
            assert isinstance(error, HalkitError)
