"""Tests for the exception hierarchy."""

import pytest

from auth0_frontend.core.exceptions import (
    ApiError,
    ApiErrorKind,
    Auth0FrontendError,
    CancelledError,
    ConfigError,
    FatalError,
    NotFoundError,
    RateLimitError,
    TransientError,
    UnauthorizedError,
    ValidationError,
)


class TestErrorKinds:
    """Test that every error class carries a stable kind."""

    @pytest.mark.parametrize(
        "error_class,kind",
        [
            (UnauthorizedError, ApiErrorKind.UNAUTHORIZED),
            (NotFoundError, ApiErrorKind.NOT_FOUND),
            (TransientError, ApiErrorKind.TRANSIENT),
            (CancelledError, ApiErrorKind.CANCELLED),
            (FatalError, ApiErrorKind.FATAL),
        ],
    )
    def test_kind(self, error_class, kind):
        error = error_class("failure")
        assert error.kind == kind
        assert isinstance(error, ApiError)
        assert isinstance(error, Auth0FrontendError)

    def test_rate_limit_kind(self):
        error = RateLimitError(retry_after=3)
        assert error.kind == ApiErrorKind.RATE_LIMITED
        assert error.status_code == 429

    def test_validation_kind(self):
        assert ValidationError("bad").kind == ApiErrorKind.VALIDATION

    def test_kind_override(self):
        error = ApiError("odd", kind=ApiErrorKind.TRANSIENT)
        assert error.kind == ApiErrorKind.TRANSIENT
        assert ApiError("plain").kind == ApiErrorKind.FATAL

    def test_kind_values_are_strings(self):
        assert ApiErrorKind.NOT_FOUND.value == "not_found"


class TestMessages:
    """Test error message formatting."""

    def test_base_message_with_details(self):
        error = Auth0FrontendError("Something failed", details="disk full")
        assert str(error) == "Something failed: disk full"

    def test_api_error_context(self):
        error = NotFoundError(
            "Resource not found",
            status_code=404,
            endpoint="/api/v2/users/x",
            operation="users.get",
            details="The user does not exist.",
        )
        assert str(error) == (
            "Resource not found | Operation: users.get | Status: 404"
            " | Endpoint: /api/v2/users/x | Details: The user does not exist."
        )

    def test_rate_limit_message(self):
        error = RateLimitError(retry_after=2.5, endpoint="/api/v2/users")
        assert "Retry after: 2.5s" in str(error)

    def test_validation_field(self):
        error = ValidationError("Malformed user payload", field="user_id")
        assert str(error).endswith("| Field: user_id")

    def test_config_error_is_not_api_error(self):
        error = ConfigError("missing")
        assert not isinstance(error, ApiError)
        assert error.kind == ApiErrorKind.FATAL


class TestWithOperation:
    def test_sets_operation_once(self):
        error = ValidationError("bad", field="id")

        assert error.with_operation("users.list") is error
        error.with_operation("users.get")

        assert error.operation == "users.list"
        assert "Operation: users.list" in str(error)
