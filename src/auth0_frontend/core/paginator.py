"""Lazy page iteration over Management API list endpoints.

Pages are fetched one at a time, only when the caller pulls the next one.
Items keep the order the server returned them in. If the remote collection
changes while it is being walked, items may be skipped or repeated across a
page boundary; this mirrors the consistency of the Management API itself.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

from ..models.request import ApiRequest, ApiResponse
from .cancellation import CancellationToken
from .exceptions import ValidationError

T = TypeVar("T")


class Dispatcher(Protocol):
    """Anything that can send an ApiRequest."""

    def send(
        self, request: ApiRequest, cancel: CancellationToken | None = None
    ) -> ApiResponse: ...


@dataclass
class Page(Generic[T]):
    """One page of a list endpoint.

    ``next_cursor`` is None on the final page.
    """

    items: list[T] = field(default_factory=list)
    next_cursor: Any = None
    number: int = 0
    total: int | None = None

    @property
    def is_last(self) -> bool:
        return self.next_cursor is None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)


def _extract_items(payload: Any, items_key: str, endpoint: str) -> list[dict[str, Any]]:
    """Pull the raw item list out of either a bare list or a totals envelope."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get(items_key), list):
        return list(payload[items_key])
    raise ValidationError(
        "List response has an unexpected shape",
        field=items_key,
        endpoint=endpoint,
    )


class PaginationStrategy(Protocol):
    """Maps a cursor to query parameters and a payload to items and the next cursor."""

    def params(self, cursor: Any) -> dict[str, Any]: ...

    def parse(
        self, payload: Any, cursor: Any, endpoint: str
    ) -> tuple[list[dict[str, Any]], Any, int | None]: ...


class OffsetPagination:
    """Auth0 ``page``/``per_page`` pagination.

    Requests totals so the last page is recognised without an extra empty
    request; without totals a short page marks the end.
    """

    def __init__(self, items_key: str, per_page: int = 50) -> None:
        if per_page < 1:
            raise ValueError("per_page must be at least 1")
        self.items_key = items_key
        self.per_page = per_page

    def params(self, cursor: Any) -> dict[str, Any]:
        return {
            "page": 0 if cursor is None else cursor,
            "per_page": self.per_page,
            "include_totals": "true",
        }

    def parse(
        self, payload: Any, cursor: Any, endpoint: str
    ) -> tuple[list[dict[str, Any]], Any, int | None]:
        raw_items = _extract_items(payload, self.items_key, endpoint)
        page_number = 0 if cursor is None else cursor

        total = payload.get("total") if isinstance(payload, dict) else None
        if isinstance(total, int):
            start = payload.get("start", page_number * self.per_page)
            if not isinstance(start, int):
                start = page_number * self.per_page
            has_more = start + len(raw_items) < total and len(raw_items) > 0
        else:
            total = None
            has_more = len(raw_items) >= self.per_page

        return raw_items, (page_number + 1 if has_more else None), total


class CheckpointPagination:
    """Auth0 checkpoint pagination (``from``/``take``) used by log streams.

    The cursor is the id of the last item seen; a short page ends the stream.
    """

    def __init__(
        self,
        take: int = 100,
        id_field: str = "log_id",
        items_key: str = "logs",
        start_from: str | None = None,
    ) -> None:
        if take < 1:
            raise ValueError("take must be at least 1")
        self.take = take
        self.id_field = id_field
        self.items_key = items_key
        self.start_from = start_from

    def params(self, cursor: Any) -> dict[str, Any]:
        params: dict[str, Any] = {"take": self.take}
        checkpoint = cursor if cursor is not None else self.start_from
        if checkpoint is not None:
            params["from"] = checkpoint
        return params

    def parse(
        self, payload: Any, cursor: Any, endpoint: str
    ) -> tuple[list[dict[str, Any]], Any, int | None]:
        raw_items = _extract_items(payload, self.items_key, endpoint)
        if len(raw_items) < self.take:
            return raw_items, None, None

        last = raw_items[-1]
        next_cursor = last.get(self.id_field) if isinstance(last, dict) else None
        if not next_cursor:
            raise ValidationError(
                "Log entry is missing its checkpoint id",
                field=self.id_field,
                endpoint=endpoint,
            )
        return raw_items, next_cursor, None


class Paginator(Generic[T]):
    """Restartable, lazy sequence of typed pages for one list request.

    Each call to ``pages()`` or ``items()`` starts again from the first page.
    Consumption is strictly sequential; nothing is prefetched.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        request: ApiRequest,
        parse_item: Callable[[dict[str, Any]], T],
        strategy: PaginationStrategy,
        cancel: CancellationToken | None = None,
    ) -> None:
        """Create a paginator.

        Args:
            dispatcher: Dispatcher used for every page request
            request: Base request; its query parameters are kept on every page
            parse_item: Maps one raw item into its typed record
            strategy: Pagination parameter scheme of the endpoint
            cancel: Optional cancellation token applied to every page request
        """
        self.dispatcher = dispatcher
        self.request = request
        self.parse_item = parse_item
        self.strategy = strategy
        self.cancel = cancel

    def pages(self) -> Iterator[Page[T]]:
        """Yield pages until one carries no next cursor.

        An empty final page is not yielded.
        """
        cursor: Any = None
        number = 0
        while True:
            page_request = self.request.with_params(**self.strategy.params(cursor))
            response = self.dispatcher.send(page_request, self.cancel)
            try:
                raw_items, next_cursor, total = self.strategy.parse(
                    response.data, cursor, page_request.path
                )
                items = [self.parse_item(raw) for raw in raw_items]
            except ValidationError as e:
                if self.request.operation:
                    e.with_operation(self.request.operation)
                raise

            if not items and next_cursor is None:
                return

            yield Page(items=items, next_cursor=next_cursor, number=number, total=total)

            if next_cursor is None:
                return
            cursor = next_cursor
            number += 1

    def items(self) -> Iterator[T]:
        """Yield items one by one, fetching pages lazily."""
        for page in self.pages():
            yield from page.items

    def __iter__(self) -> Iterator[T]:
        return self.items()

    def first_page(self) -> Page[T]:
        """Fetch only the first page; an empty collection gives an empty page."""
        return next(self.pages(), Page())

    def to_list(self, limit: int | None = None) -> list[T]:
        """Collect items, stopping after ``limit`` items when given."""
        collected: list[T] = []
        if limit is not None and limit <= 0:
            return collected
        for item in self.items():
            collected.append(item)
            if limit is not None and len(collected) >= limit:
                break
        return collected
