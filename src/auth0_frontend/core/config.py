"""Configuration utilities for Auth0 Management API access."""

import os
from collections.abc import Mapping

import dotenv

from ..models.config import Credentials, RetryConfig
from .exceptions import ConfigError


def check_env_file() -> None:
    """Check if .env file exists and load it."""
    env_path = ".env"
    if os.path.exists(env_path):
        dotenv.load_dotenv(env_path)


def validate_env_var(name: str, value: str | None) -> str:
    """Validate that an environment variable is set and not empty.

    Args:
        name: Environment variable name
        value: Environment variable value

    Returns:
        str: The validated value, stripped of surrounding whitespace

    Raises:
        ConfigError: If the environment variable is missing or empty
    """
    if value is None or not value.strip():
        raise ConfigError(
            f"Environment variable {name} is required but not set or empty"
        )
    return value.strip()


def normalize_domain(domain: str) -> str:
    """Strip scheme and trailing slashes from an Auth0 domain.

    Raises:
        ConfigError: If the value is not a bare host name
    """
    for scheme in ("https://", "http://"):
        if domain.lower().startswith(scheme):
            domain = domain[len(scheme) :]
    domain = domain.rstrip("/")

    if not domain or "/" in domain or " " in domain or "." not in domain:
        raise ConfigError(
            f"Invalid Auth0 domain format: {domain!r}",
            details="Expected a host name such as tenant.eu.auth0.com",
        )
    return domain


def _read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"Environment variable {name} must be a number: {raw!r}") from e


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(
            f"Environment variable {name} must be an integer: {raw!r}"
        ) from e


def load_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """Load Auth0 M2M credentials from environment variables.

    Args:
        environ: Mapping to read from; defaults to ``os.environ`` after
            loading a local ``.env`` file

    Returns:
        Credentials: Validated credentials

    Raises:
        ConfigError: If required environment variables are missing or malformed
    """
    if environ is None:
        check_env_file()
        environ = os.environ

    domain = normalize_domain(
        validate_env_var("AUTH0_DOMAIN", environ.get("AUTH0_DOMAIN"))
    )
    client_id = validate_env_var("AUTH0_CLIENT_ID", environ.get("AUTH0_CLIENT_ID"))
    client_secret = validate_env_var(
        "AUTH0_CLIENT_SECRET", environ.get("AUTH0_CLIENT_SECRET")
    )
    audience = (environ.get("AUTH0_AUDIENCE") or "").strip()

    return Credentials(
        domain=domain,
        client_id=client_id,
        client_secret=client_secret,
        audience=audience,
    )


def load_retry_config(environ: Mapping[str, str] | None = None) -> RetryConfig:
    """Load retry and timeout tuning from environment variables.

    Unset variables fall back to the ``RetryConfig`` defaults.

    Raises:
        ConfigError: If a value is not a number or is out of range
    """
    if environ is None:
        check_env_file()
        environ = os.environ

    defaults = RetryConfig()
    try:
        return RetryConfig(
            max_attempts=_read_int(environ, "AUTH0_MAX_ATTEMPTS", defaults.max_attempts),
            base_delay=_read_float(environ, "AUTH0_BASE_DELAY", defaults.base_delay),
            max_delay=_read_float(environ, "AUTH0_MAX_DELAY", defaults.max_delay),
            timeout=_read_float(environ, "AUTH0_TIMEOUT", defaults.timeout),
            token_safety_margin=_read_float(
                environ, "AUTH0_TOKEN_SAFETY_MARGIN", defaults.token_safety_margin
            ),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid retry configuration: {e}") from e


class CredentialStore:
    """Process-wide holder of the M2M credentials.

    Read-only after construction, so it needs no synchronization.
    """

    __slots__ = ("_credentials",)

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CredentialStore":
        """Build the store from the environment; see ``load_credentials``."""
        return cls(load_credentials(environ))

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def __repr__(self) -> str:
        return f"CredentialStore(domain={self._credentials.domain!r})"
