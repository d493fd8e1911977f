"""Exception hierarchy for the Auth0 frontend management core."""

from enum import Enum


class ApiErrorKind(str, Enum):
    """Classification of every failure the management core can surface."""

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    TRANSIENT = "transient"
    CANCELLED = "cancelled"
    FATAL = "fatal"


class Auth0FrontendError(Exception):
    """Base exception for the Auth0 frontend.

    This is the root exception class for all package-specific errors.
    All other custom exceptions inherit from this class.
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: The main error message
            details: Optional additional details about the error
        """
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message."""
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigError(Auth0FrontendError):
    """Startup configuration errors.

    Raised while loading credentials or tuning values from the environment.
    These are fatal at process start and never produced by an API call.
    """

    kind = ApiErrorKind.FATAL


class ApiError(Auth0FrontendError):
    """Classified Management API failure.

    Every error returned to the presentation layer is an ApiError carrying
    a stable ``kind``. Subclasses fix the kind; the base class accepts any.
    """

    kind: ApiErrorKind = ApiErrorKind.FATAL

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        operation: str | None = None,
        retry_after: float | None = None,
        details: str | None = None,
        kind: ApiErrorKind | None = None,
    ):
        """Initialize the API error.

        Args:
            message: The main error message
            status_code: The HTTP status code from the API response
            endpoint: The API endpoint that failed
            operation: Logical operation name (e.g. ``users.get``)
            retry_after: Seconds the provider asked us to wait, if known
            details: Optional additional details about the error
            kind: Override for the error kind
        """
        if kind is not None:
            self.kind = kind
        self.status_code = status_code
        self.endpoint = endpoint
        self.operation = operation
        self.retry_after = retry_after
        super().__init__(message, details)

    def _format_message(self) -> str:
        """Format the complete error message with API context."""
        parts = [self.message]

        if self.operation:
            parts.append(f"Operation: {self.operation}")

        if self.status_code:
            parts.append(f"Status: {self.status_code}")

        if self.endpoint:
            parts.append(f"Endpoint: {self.endpoint}")

        if self.retry_after is not None:
            parts.append(f"Retry after: {self.retry_after:g}s")

        if self.details:
            parts.append(f"Details: {self.details}")

        return " | ".join(parts)

    def with_operation(self, operation: str) -> "ApiError":
        """Attach an operation name if none is set yet and return self."""
        if self.operation is None:
            self.operation = operation
            self.args = (self._format_message(),)
        return self


class UnauthorizedError(ApiError):
    """Bad credentials or a 401 that survived a forced token refresh."""

    kind = ApiErrorKind.UNAUTHORIZED


class RateLimitError(ApiError):
    """Rate limiting errors from the Auth0 API.

    Raised once the attempt budget is exhausted under 429 responses.
    Contains retry-after information when available.
    """

    kind = ApiErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: float | None = None,
        endpoint: str | None = None,
        operation: str | None = None,
        details: str | None = None,
    ):
        super().__init__(
            message=message,
            status_code=429,
            endpoint=endpoint,
            operation=operation,
            retry_after=retry_after,
            details=details,
        )


class NotFoundError(ApiError):
    """The requested resource does not exist."""

    kind = ApiErrorKind.NOT_FOUND


class ValidationError(ApiError):
    """Malformed request or response.

    Raised for 4xx responses other than 401/404/429 and for response
    payloads that are missing a required field.
    """

    kind = ApiErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        field: str | None = None,
        status_code: int | None = None,
        endpoint: str | None = None,
        operation: str | None = None,
        details: str | None = None,
    ):
        self.field = field
        super().__init__(
            message=message,
            status_code=status_code,
            endpoint=endpoint,
            operation=operation,
            details=details,
        )

    def _format_message(self) -> str:
        """Format the message with the offending field, if known."""
        msg = super()._format_message()
        if self.field:
            msg += f" | Field: {self.field}"
        return msg


class TransientError(ApiError):
    """Network failure or 5xx response after retries were exhausted."""

    kind = ApiErrorKind.TRANSIENT


class CancelledError(ApiError):
    """The caller cancelled the operation or its deadline passed."""

    kind = ApiErrorKind.CANCELLED


class FatalError(ApiError):
    """Response that fits no other category (unexpected status class)."""

    kind = ApiErrorKind.FATAL
