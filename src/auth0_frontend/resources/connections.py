"""Connections resource client."""

from __future__ import annotations

from ..core.cancellation import CancellationToken
from ..core.paginator import OffsetPagination, Paginator
from ..models.connection import Connection
from ..models.request import HttpMethod
from .base import ResourceClient, api_path


class ConnectionsClient(ResourceClient):
    """Typed access to ``/api/v2/connections``."""

    def list(
        self,
        per_page: int = 100,
        strategy: str | None = None,
        cancel: CancellationToken | None = None,
    ) -> Paginator[Connection]:
        """List connections, optionally restricted to one strategy."""
        params = {"strategy": strategy} if strategy else {}
        return self._paginate(
            api_path("connections"),
            "connections.list",
            Connection.from_auth0_data,
            OffsetPagination("connections", per_page=per_page),
            params=params,
            cancel=cancel,
        )

    def get(
        self, connection_id: str, cancel: CancellationToken | None = None
    ) -> Connection:
        response = self._send(
            HttpMethod.GET,
            api_path("connections", connection_id),
            "connections.get",
            cancel=cancel,
        )
        return self._parse(Connection.from_auth0_data, response.data, "connections.get")

    def names(self, cancel: CancellationToken | None = None) -> list[str]:
        """Names of every connection, e.g. for a connection picker."""
        return [connection.name for connection in self.list(cancel=cancel)]
