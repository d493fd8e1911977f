"""Client-credentials token acquisition with a single-flight cache."""

import threading
import time
from collections.abc import Callable
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any

import requests
from auth0.authentication import GetToken
from auth0.exceptions import Auth0Error

from ..models.config import Credentials, RetryConfig
from ..models.token import Token
from ..utils.logging_utils import get_logger
from ..utils.rate_limiter import backoff_delay
from .cancellation import CancellationToken
from .exceptions import (
    ApiError,
    CancelledError,
    TransientError,
    UnauthorizedError,
    ValidationError,
)

# How often a waiting follower re-checks its own cancellation token
FOLLOWER_POLL_INTERVAL = 0.05

TOKEN_ENDPOINT = "/oauth/token"

logger = get_logger(__name__)


class TokenManager:
    """Owns the Management API token.

    The cached token is the only shared mutable state of the core. A lock
    guards the slot and at most one exchange runs at a time; callers that
    arrive during an exchange wait on the same future and receive the same
    token or the same exception.
    """

    def __init__(
        self,
        credentials: Credentials,
        config: RetryConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the token manager.

        Args:
            credentials: M2M credentials used for the exchange
            config: Retry and timeout tuning
            clock: Source of Unix time, injectable for tests
        """
        self._credentials = credentials
        self._config = config or RetryConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self._token: Token | None = None
        self._inflight: Future[Token] | None = None

    @property
    def cached_token(self) -> Token | None:
        with self._lock:
            return self._token

    def get_token(self, cancel: CancellationToken | None = None) -> Token:
        """Return a token that is not within the safety margin of expiry.

        Args:
            cancel: Optional cancellation token for the caller

        Returns:
            Token: A usable bearer token

        Raises:
            UnauthorizedError: If the credentials are rejected
            TransientError: If the token endpoint stays unreachable
            CancelledError: If ``cancel`` fires while waiting
        """
        with self._lock:
            token = self._token
            if token is not None and token.is_usable(
                self._clock(), self._config.token_safety_margin
            ):
                return token

            future = self._inflight
            leader = future is None
            if leader:
                future = Future()
                self._inflight = future

        assert future is not None
        if not leader:
            return self._await(future, cancel)

        try:
            token = self._exchange(cancel)
        except BaseException as e:
            with self._lock:
                self._inflight = None
            future.set_exception(e)
            raise

        with self._lock:
            self._token = token
            self._inflight = None
        future.set_result(token)
        return token

    def invalidate(self, stale_value: str | None = None) -> None:
        """Drop the cached token so the next ``get_token`` refreshes.

        With ``stale_value`` the cache is only cleared while it still holds
        that token, so concurrent 401s on the same token refresh once.
        """
        with self._lock:
            if self._token is None:
                return
            if stale_value is None or self._token.value == stale_value:
                self._token = None
                logger.debug("Invalidated cached management token")

    def _await(
        self, future: "Future[Token]", cancel: CancellationToken | None
    ) -> Token:
        if cancel is None:
            return future.result()
        while True:
            cancel.raise_if_cancelled(operation="token_request")
            try:
                return future.result(timeout=FOLLOWER_POLL_INTERVAL)
            except FutureTimeoutError:
                continue

    def _exchange(self, cancel: CancellationToken | None) -> Token:
        """Run the client-credentials exchange with bounded retries."""
        attempt = 0
        while True:
            if cancel is not None:
                cancel.raise_if_cancelled(
                    operation="token_request", endpoint=TOKEN_ENDPOINT
                )
            attempt += 1
            try:
                return self._request_token(cancel)
            except TransientError as e:
                if cancel is not None and cancel.cancelled:
                    raise CancelledError(
                        "Token exchange cancelled",
                        operation="token_request",
                        endpoint=TOKEN_ENDPOINT,
                    ) from e
                if attempt >= self._config.token_max_attempts:
                    logger.error(
                        f"Token exchange failed after {attempt} attempts: {e}",
                        extra={
                            "operation": "token_request",
                            "api_endpoint": TOKEN_ENDPOINT,
                            "attempt": attempt,
                        },
                    )
                    raise
                delay = backoff_delay(
                    attempt, self._config.base_delay, self._config.max_delay
                )
                logger.warning(
                    f"Token exchange failed, retrying in {delay:.2f}s: {e}",
                    extra={
                        "operation": "token_request",
                        "api_endpoint": TOKEN_ENDPOINT,
                        "attempt": attempt,
                        "delay": delay,
                    },
                )
                if cancel is None:
                    time.sleep(delay)
                elif cancel.wait(delay):
                    raise CancelledError(
                        "Token exchange cancelled during backoff",
                        operation="token_request",
                        endpoint=TOKEN_ENDPOINT,
                    ) from e

    def _request_token(self, cancel: CancellationToken | None) -> Token:
        """Perform one exchange and classify its failure."""
        timeout = self._config.token_timeout
        if cancel is not None:
            remaining = cancel.remaining()
            if remaining is not None:
                timeout = max(0.001, min(timeout, remaining))

        get_token = GetToken(
            domain=self._credentials.domain,
            client_id=self._credentials.client_id,
            client_secret=self._credentials.client_secret,
            timeout=timeout,
        )

        try:
            response = get_token.client_credentials(
                audience=self._credentials.audience
            )
        except Auth0Error as e:
            raise self._classify_auth0_error(e) from e
        except requests.exceptions.RequestException as e:
            if cancel is not None and cancel.cancelled:
                raise CancelledError(
                    "Token exchange deadline exceeded during request",
                    endpoint=TOKEN_ENDPOINT,
                    operation="token_request",
                ) from e
            raise TransientError(
                f"Token endpoint unreachable: {e}",
                endpoint=TOKEN_ENDPOINT,
                operation="token_request",
            ) from e

        token = self._parse_token_response(response)
        logger.info(
            "Obtained management API token",
            extra={"operation": "token_request", "api_endpoint": TOKEN_ENDPOINT},
        )
        return token

    @staticmethod
    def _classify_auth0_error(exc: Auth0Error) -> ApiError:
        status_code = getattr(exc, "status_code", None)
        message = getattr(exc, "message", None) or str(exc)

        if isinstance(status_code, int) and 400 <= status_code < 500 and status_code != 429:
            return UnauthorizedError(
                f"Client credentials rejected: {message}",
                status_code=status_code,
                endpoint=TOKEN_ENDPOINT,
                operation="token_request",
            )

        return TransientError(
            f"Token endpoint failure: {message}",
            status_code=status_code if isinstance(status_code, int) else None,
            endpoint=TOKEN_ENDPOINT,
            operation="token_request",
        )

    def _parse_token_response(self, response: Any) -> Token:
        if not isinstance(response, dict):
            raise ValidationError(
                "Token endpoint returned a non-object payload",
                endpoint=TOKEN_ENDPOINT,
                operation="token_request",
            )
        for field_name in ("access_token", "expires_in"):
            if field_name not in response:
                raise ValidationError(
                    "Token endpoint response is missing a required field",
                    field=field_name,
                    endpoint=TOKEN_ENDPOINT,
                    operation="token_request",
                )
        try:
            expires_in = float(response["expires_in"])
        except (TypeError, ValueError) as e:
            raise ValidationError(
                "Token endpoint returned a non-numeric lifetime",
                field="expires_in",
                endpoint=TOKEN_ENDPOINT,
                operation="token_request",
            ) from e

        if expires_in <= 0:
            raise ValidationError(
                "Token endpoint returned a non-positive lifetime",
                field="expires_in",
                endpoint=TOKEN_ENDPOINT,
                operation="token_request",
            )
        if expires_in <= self._config.token_safety_margin:
            logger.warning(
                "Token lifetime is shorter than the refresh safety margin, "
                "refreshing at half its lifetime instead",
                extra={"operation": "token_request"},
            )

        return Token(
            value=str(response["access_token"]),
            expires_at=self._clock() + expires_in,
            scope=response.get("scope"),
            lifetime=expires_in,
        )
