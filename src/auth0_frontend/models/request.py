"""Request and response value objects exchanged with the dispatcher."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class HttpMethod(str, Enum):
    """HTTP methods used against the Management API."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"


IDEMPOTENT_METHODS = frozenset(
    {HttpMethod.GET, HttpMethod.HEAD, HttpMethod.PUT, HttpMethod.DELETE}
)


@dataclass(frozen=True)
class ApiRequest:
    """A single Management API call.

    Attributes:
        method: HTTP method
        path: Path below the tenant base URL, e.g. ``/api/v2/users``
        params: Query parameters, passed through unchanged
        json: Optional JSON body
        idempotent: Explicit retry-safety flag; derived from the method when None
        operation: Logical operation name used in logs and errors
    """

    method: HttpMethod
    path: str
    params: dict[str, Any] = field(default_factory=dict)
    json: dict[str, Any] | None = None
    idempotent: bool | None = None
    operation: str | None = None

    @property
    def is_idempotent(self) -> bool:
        if self.idempotent is not None:
            return self.idempotent
        return self.method in IDEMPOTENT_METHODS

    def with_params(self, **params: Any) -> "ApiRequest":
        """Return a copy with ``params`` merged over the existing query."""
        merged = {**self.params, **params}
        return replace(self, params=merged)


@dataclass
class ApiResponse:
    """Successful Management API response.

    ``data`` is the decoded JSON body, or None for empty bodies (e.g. 204).
    """

    status_code: int
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    rate_limit_remaining: int | None = None
    rate_limit_reset: int | None = None
    attempts: int = 1
