"""Core functionality: configuration, tokens, dispatch and pagination."""

from auth0_frontend.core.cancellation import CancellationToken
from auth0_frontend.core.config import (
    CredentialStore,
    check_env_file,
    load_credentials,
    load_retry_config,
    validate_env_var,
)
from auth0_frontend.core.dispatcher import HttpDispatcher
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
from auth0_frontend.core.paginator import (
    CheckpointPagination,
    OffsetPagination,
    Page,
    Paginator,
)
from auth0_frontend.core.token_manager import TokenManager

__all__ = [
    "CancellationToken",
    "CredentialStore",
    "check_env_file",
    "load_credentials",
    "load_retry_config",
    "validate_env_var",
    "HttpDispatcher",
    "TokenManager",
    "Page",
    "Paginator",
    "OffsetPagination",
    "CheckpointPagination",
    # Exceptions
    "Auth0FrontendError",
    "ConfigError",
    "ApiError",
    "ApiErrorKind",
    "UnauthorizedError",
    "RateLimitError",
    "NotFoundError",
    "ValidationError",
    "TransientError",
    "CancelledError",
    "FatalError",
]
