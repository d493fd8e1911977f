"""Authenticated HTTP dispatch with response classification and retries."""

import time
from typing import Any

import requests

from ..models.config import Credentials, RetryConfig
from ..models.request import ApiRequest, ApiResponse
from ..utils.logging_utils import get_logger
from ..utils.rate_limiter import (
    backoff_delay,
    parse_rate_limit_headers,
    parse_retry_after,
)
from .cancellation import CancellationToken
from .exceptions import (
    ApiError,
    CancelledError,
    FatalError,
    NotFoundError,
    RateLimitError,
    TransientError,
    UnauthorizedError,
    ValidationError,
)
from .token_manager import TokenManager

logger = get_logger(__name__)


class HttpDispatcher:
    """Sends Management API requests on behalf of the resource clients.

    Every request carries the current bearer token. Responses are mapped to
    an ``ApiResponse`` or a classified ``ApiError``; 401, 429 and 5xx are
    handled here under a single attempt budget per logical call.
    """

    USER_AGENT = "auth0-frontend/1.0"

    def __init__(
        self,
        credentials: Credentials,
        token_manager: TokenManager,
        config: RetryConfig | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            credentials: Tenant credentials, used for the base URL
            token_manager: Source of bearer tokens
            config: Retry and timeout tuning
        """
        self.base_url = credentials.base_url
        self.token_manager = token_manager
        self.config = config or RetryConfig()

    def send(
        self, request: ApiRequest, cancel: CancellationToken | None = None
    ) -> ApiResponse:
        """Dispatch ``request`` and return its successful response.

        Args:
            request: The request to send
            cancel: Optional cancellation token; defaults to one that never fires

        Returns:
            ApiResponse: Decoded successful response

        Raises:
            ApiError: Classified failure once retry policy is exhausted
        """
        if cancel is None:
            cancel = CancellationToken()

        attempt = 0
        refreshed = False
        while True:
            cancel.raise_if_cancelled(request.operation, request.path)
            attempt += 1

            token = self.token_manager.get_token(cancel)

            start = time.monotonic()
            try:
                response = self._perform(request, token.value, cancel)
            except requests.exceptions.RequestException as e:
                if cancel.cancelled:
                    raise CancelledError(
                        "Operation deadline exceeded during request",
                        endpoint=request.path,
                        operation=request.operation,
                    ) from e
                error = TransientError(
                    f"Request failed: {e}",
                    endpoint=request.path,
                    operation=request.operation,
                )
                self._retry_or_raise(
                    request, error, attempt, cancel, retryable=request.is_idempotent
                )
                continue

            duration = time.monotonic() - start
            status = response.status_code
            self._log_response(request, status, attempt, duration)

            if 200 <= status < 300:
                return self._build_response(request, response, attempt)

            if status == 401:
                if refreshed or attempt >= self.config.max_attempts:
                    raise UnauthorizedError(
                        "Management API rejected the access token",
                        status_code=status,
                        endpoint=request.path,
                        operation=request.operation,
                        details=self._error_detail(response),
                    )
                refreshed = True
                logger.info(
                    "Access token rejected, forcing refresh",
                    extra={"operation": request.operation, "api_endpoint": request.path},
                )
                self.token_manager.invalidate(token.value)
                continue

            if status == 429:
                retry_after = parse_retry_after(response.headers)
                error = RateLimitError(
                    retry_after=retry_after,
                    endpoint=request.path,
                    operation=request.operation,
                    details=self._error_detail(response),
                )
                self._retry_or_raise(
                    request, error, attempt, cancel, retryable=True, delay=retry_after
                )
                continue

            if status >= 500:
                error = TransientError(
                    "Server error",
                    status_code=status,
                    endpoint=request.path,
                    operation=request.operation,
                    details=self._error_detail(response),
                )
                self._retry_or_raise(
                    request, error, attempt, cancel, retryable=request.is_idempotent
                )
                continue

            raise self._classify_client_error(request, response)

    def _perform(
        self, request: ApiRequest, token: str, cancel: CancellationToken
    ) -> requests.Response:
        timeout = self.config.timeout
        remaining = cancel.remaining()
        if remaining is not None:
            timeout = max(0.001, min(timeout, remaining))

        kwargs: dict[str, Any] = {
            "headers": self._build_headers(token),
            "params": request.params or None,
            "timeout": timeout,
        }
        if request.json is not None:
            kwargs["json"] = request.json

        return requests.request(
            request.method.value, f"{self.base_url}{request.path}", **kwargs
        )

    def _build_headers(self, token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.USER_AGENT,
        }

    def _retry_or_raise(
        self,
        request: ApiRequest,
        error: ApiError,
        attempt: int,
        cancel: CancellationToken,
        retryable: bool,
        delay: float | None = None,
    ) -> None:
        """Sleep before the next attempt, or raise ``error`` if out of budget."""
        if not retryable or attempt >= self.config.max_attempts:
            logger.error(
                f"Giving up on {request.method.value} {request.path}: {error.message}",
                extra={
                    "operation": request.operation,
                    "api_endpoint": request.path,
                    "status_code": error.status_code,
                    "attempt": attempt,
                },
            )
            raise error

        if delay is None:
            delay = backoff_delay(attempt, self.config.base_delay, self.config.max_delay)

        logger.warning(
            f"Retrying {request.method.value} {request.path} in {delay:.2f}s: {error.message}",
            extra={
                "operation": request.operation,
                "api_endpoint": request.path,
                "status_code": error.status_code,
                "attempt": attempt,
                "delay": delay,
            },
        )
        if cancel.wait(delay):
            raise CancelledError(
                "Operation cancelled during backoff",
                endpoint=request.path,
                operation=request.operation,
            ) from error

    def _classify_client_error(
        self, request: ApiRequest, response: requests.Response
    ) -> ApiError:
        status = response.status_code
        detail = self._error_detail(response)

        if status == 404:
            return NotFoundError(
                "Resource not found",
                status_code=status,
                endpoint=request.path,
                operation=request.operation,
                details=detail,
            )
        if 400 <= status < 500:
            return ValidationError(
                "Request rejected by the Management API",
                status_code=status,
                endpoint=request.path,
                operation=request.operation,
                details=detail,
            )
        return FatalError(
            f"Unexpected response status {status}",
            status_code=status,
            endpoint=request.path,
            operation=request.operation,
            details=detail,
        )

    def _build_response(
        self, request: ApiRequest, response: requests.Response, attempt: int
    ) -> ApiResponse:
        rate_limit = parse_rate_limit_headers(response.headers)
        if rate_limit.is_low:
            logger.warning(
                f"Rate limit headroom low: {rate_limit.remaining}/{rate_limit.limit}",
                extra={"operation": request.operation, "api_endpoint": request.path},
            )

        data: Any = None
        if response.status_code != 204 and response.text and response.text.strip():
            try:
                data = response.json()
            except ValueError as e:
                raise ValidationError(
                    "Response body is not valid JSON",
                    status_code=response.status_code,
                    endpoint=request.path,
                    operation=request.operation,
                ) from e

        return ApiResponse(
            status_code=response.status_code,
            data=data,
            headers=dict(response.headers),
            rate_limit_remaining=rate_limit.remaining,
            rate_limit_reset=rate_limit.reset_time,
            attempts=attempt,
        )

    @staticmethod
    def _error_detail(response: requests.Response) -> str | None:
        """Extract a human readable message from an error body."""
        try:
            body = response.json()
        except ValueError:
            text = getattr(response, "text", None)
            return text.strip()[:500] if isinstance(text, str) and text.strip() else None

        if isinstance(body, dict):
            for key in ("message", "error_description", "error"):
                if body.get(key):
                    return str(body[key])
            return None
        return str(body)[:500]

    @staticmethod
    def _log_response(
        request: ApiRequest, status: int, attempt: int, duration: float
    ) -> None:
        logger.debug(
            f"{request.method.value} {request.path} -> {status}",
            extra={
                "operation": request.operation,
                "method": request.method.value,
                "api_endpoint": request.path,
                "status_code": status,
                "attempt": attempt,
                "duration": duration,
            },
        )
