"""Configuration data models for Auth0 Management API access."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Credentials:
    """Machine-to-machine credentials for the Management API.

    Immutable after load; the secret is never included in ``repr`` output.
    """

    domain: str
    client_id: str
    client_secret: str = field(repr=False)
    audience: str = ""

    def __post_init__(self) -> None:
        """Default the audience to the tenant's Management API identifier."""
        if not self.audience:
            object.__setattr__(self, "audience", f"https://{self.domain}/api/v2/")

    @property
    def base_url(self) -> str:
        """Base URL of the Auth0 tenant."""
        return f"https://{self.domain}"

    def to_dict(self) -> dict[str, Any]:
        """Convert credentials to dictionary format without the secret.

        Returns:
            Dict[str, Any]: Credentials as dictionary
        """
        return {
            "domain": self.domain,
            "client_id": self.client_id,
            "client_secret": "***REDACTED***",
            "audience": self.audience,
            "base_url": self.base_url,
        }


@dataclass(frozen=True)
class RetryConfig:
    """Retry, backoff and timeout tuning for the management core.

    Passed at construction so tests can shrink timings.
    """

    max_attempts: int = 5  # Shared budget per logical call
    base_delay: float = 0.5  # Seconds; also the jitter upper bound
    max_delay: float = 30.0  # Cap on the exponential part of the delay
    timeout: float = 30.0  # HTTP request timeout in seconds
    token_timeout: float = 5.0  # Token endpoint timeout in seconds
    token_max_attempts: int = 3  # Transient retries for the token exchange
    token_safety_margin: float = 60.0  # Refresh tokens this close to expiry

    def __post_init__(self) -> None:
        """Reject values that would disable retries or loop forever."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.token_max_attempts < 1:
            raise ValueError("token_max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("backoff delays must not be negative")
        if self.timeout <= 0 or self.token_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.token_safety_margin < 0:
            raise ValueError("token_safety_margin must not be negative")

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary format.

        Returns:
            Dict[str, Any]: Configuration as dictionary
        """
        return {
            "max_attempts": self.max_attempts,
            "base_delay": self.base_delay,
            "max_delay": self.max_delay,
            "timeout": self.timeout,
            "token_timeout": self.token_timeout,
            "token_max_attempts": self.token_max_attempts,
            "token_safety_margin": self.token_safety_margin,
        }
