"""Shared plumbing for the typed resource clients."""

from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

from ..core.cancellation import CancellationToken
from ..core.exceptions import ValidationError
from ..core.paginator import Dispatcher, PaginationStrategy, Paginator
from ..models.request import ApiRequest, ApiResponse, HttpMethod

T = TypeVar("T")

API_PREFIX = "/api/v2"


def api_path(*segments: str) -> str:
    """Build a Management API path, URL-encoding every segment.

    Auth0 user ids contain ``|`` which must be encoded.
    """
    encoded = "/".join(quote(segment, safe="") for segment in segments)
    return f"{API_PREFIX}/{encoded}"


class ResourceClient:
    """Base class for one Management API surface family."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    def _send(
        self,
        method: HttpMethod,
        path: str,
        operation: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        cancel: CancellationToken | None = None,
    ) -> ApiResponse:
        request = ApiRequest(
            method=method,
            path=path,
            params=params or {},
            json=json,
            operation=operation,
        )
        return self.dispatcher.send(request, cancel)

    @staticmethod
    def _parse(parser: Callable[[Any], T], data: Any, operation: str) -> T:
        """Map a payload into a record, naming the operation on failure."""
        try:
            return parser(data)
        except ValidationError as e:
            raise e.with_operation(operation)

    def _paginate(
        self,
        path: str,
        operation: str,
        parse_item: Callable[[dict[str, Any]], T],
        strategy: PaginationStrategy,
        params: dict[str, Any] | None = None,
        cancel: CancellationToken | None = None,
    ) -> Paginator[T]:
        request = ApiRequest(
            method=HttpMethod.GET,
            path=path,
            params=params or {},
            operation=operation,
        )
        return Paginator(
            dispatcher=self.dispatcher,
            request=request,
            parse_item=parse_item,
            strategy=strategy,
            cancel=cancel,
        )
