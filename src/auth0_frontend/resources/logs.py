"""Logs resource client."""

from ..core.cancellation import CancellationToken
from ..core.paginator import CheckpointPagination, OffsetPagination, Paginator
from ..models.log import ListLogsParams, LogEvent
from ..models.request import HttpMethod
from .base import ResourceClient, api_path


class LogsClient(ResourceClient):
    """Typed access to ``/api/v2/logs``."""

    def list(
        self,
        params: ListLogsParams | None = None,
        cancel: CancellationToken | None = None,
    ) -> Paginator[LogEvent]:
        """Search tenant logs, newest first.

        The search query is forwarded as-is; Auth0 caps offset paging of
        logs, so use ``stream`` to walk the full history.
        """
        params = params or ListLogsParams()
        return self._paginate(
            api_path("logs"),
            "logs.list",
            LogEvent.from_auth0_data,
            OffsetPagination("logs", per_page=params.per_page),
            params=params.to_query(),
            cancel=cancel,
        )

    def get(self, log_id: str, cancel: CancellationToken | None = None) -> LogEvent:
        response = self._send(
            HttpMethod.GET, api_path("logs", log_id), "logs.get", cancel=cancel
        )
        return self._parse(LogEvent.from_auth0_data, response.data, "logs.get")

    def stream(
        self,
        from_log_id: str | None = None,
        take: int = 100,
        cancel: CancellationToken | None = None,
    ) -> Paginator[LogEvent]:
        """Walk logs with checkpoint pagination, starting after ``from_log_id``."""
        return self._paginate(
            api_path("logs"),
            "logs.stream",
            LogEvent.from_auth0_data,
            CheckpointPagination(take=take, start_from=from_log_id),
            cancel=cancel,
        )
