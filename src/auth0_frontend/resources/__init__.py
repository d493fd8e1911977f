"""Typed clients for each Management API surface family."""

from auth0_frontend.resources.applications import ApplicationsClient
from auth0_frontend.resources.connections import ConnectionsClient
from auth0_frontend.resources.logs import LogsClient
from auth0_frontend.resources.users import UsersClient

__all__ = [
    "ApplicationsClient",
    "ConnectionsClient",
    "LogsClient",
    "UsersClient",
]
