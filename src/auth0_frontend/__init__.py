"""Auth0 Frontend - Management API core for the tenant admin frontend."""

from .client import ManagementClient
from .core import (
    ApiError,
    ApiErrorKind,
    Auth0FrontendError,
    CancellationToken,
    CancelledError,
    ConfigError,
    CredentialStore,
    FatalError,
    HttpDispatcher,
    NotFoundError,
    Page,
    Paginator,
    RateLimitError,
    TokenManager,
    TransientError,
    UnauthorizedError,
    ValidationError,
)
from .core.auth import doctor
from .models import (
    Application,
    Connection,
    CreateUserRequest,
    Credentials,
    ListLogsParams,
    ListUsersParams,
    LogEvent,
    RetryConfig,
    Token,
    UpdateUserRequest,
    User,
    UserIdentity,
)

__version__ = "1.0.0"

__all__ = [
    # Entry points
    "ManagementClient",
    "doctor",
    # Core
    "CredentialStore",
    "TokenManager",
    "HttpDispatcher",
    "Paginator",
    "Page",
    "CancellationToken",
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
    # Models
    "Credentials",
    "RetryConfig",
    "Token",
    "User",
    "UserIdentity",
    "Connection",
    "Application",
    "LogEvent",
    "CreateUserRequest",
    "UpdateUserRequest",
    "ListUsersParams",
    "ListLogsParams",
]
