"""Applications resource client."""

from ..core.cancellation import CancellationToken
from ..core.paginator import OffsetPagination, Paginator
from ..models.application import Application
from ..models.request import HttpMethod
from .base import ResourceClient, api_path


class ApplicationsClient(ResourceClient):
    """Typed access to ``/api/v2/clients``."""

    def list(
        self, per_page: int = 100, cancel: CancellationToken | None = None
    ) -> Paginator[Application]:
        return self._paginate(
            api_path("clients"),
            "applications.list",
            Application.from_auth0_data,
            OffsetPagination("clients", per_page=per_page),
            cancel=cancel,
        )

    def get(
        self, client_id: str, cancel: CancellationToken | None = None
    ) -> Application:
        response = self._send(
            HttpMethod.GET,
            api_path("clients", client_id),
            "applications.get",
            cancel=cancel,
        )
        return self._parse(
            Application.from_auth0_data, response.data, "applications.get"
        )
