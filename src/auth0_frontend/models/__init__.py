"""Typed records exchanged between the management core and its callers."""

from auth0_frontend.models.application import Application
from auth0_frontend.models.config import Credentials, RetryConfig
from auth0_frontend.models.connection import Connection
from auth0_frontend.models.log import ListLogsParams, LogEvent
from auth0_frontend.models.request import ApiRequest, ApiResponse, HttpMethod
from auth0_frontend.models.token import Token
from auth0_frontend.models.user import (
    CreateUserRequest,
    ListUsersParams,
    UpdateUserRequest,
    User,
    UserIdentity,
)

__all__ = [
    # Config models
    "Credentials",
    "RetryConfig",
    # Transport models
    "ApiRequest",
    "ApiResponse",
    "HttpMethod",
    "Token",
    # Resource records
    "Application",
    "Connection",
    "LogEvent",
    "User",
    "UserIdentity",
    # Request records
    "CreateUserRequest",
    "UpdateUserRequest",
    "ListUsersParams",
    "ListLogsParams",
]
