"""Users resource client."""

from ..core.cancellation import CancellationToken
from ..core.paginator import OffsetPagination, Paginator
from ..models.log import LogEvent
from ..models.request import HttpMethod
from ..models.user import CreateUserRequest, ListUsersParams, UpdateUserRequest, User
from ..utils.logging_utils import get_logger
from .base import ResourceClient, api_path

logger = get_logger(__name__)


class UsersClient(ResourceClient):
    """Typed access to ``/api/v2/users``."""

    def list(
        self,
        params: ListUsersParams | None = None,
        cancel: CancellationToken | None = None,
    ) -> Paginator[User]:
        """List or search users.

        Args:
            params: Search query, connection filter, page size and sort
            cancel: Optional cancellation token applied to every page

        Returns:
            Paginator[User]: Lazy pages of users
        """
        params = params or ListUsersParams()
        return self._paginate(
            api_path("users"),
            "users.list",
            User.from_auth0_data,
            OffsetPagination("users", per_page=params.per_page),
            params=params.to_query(),
            cancel=cancel,
        )

    def get(self, user_id: str, cancel: CancellationToken | None = None) -> User:
        """Get user details by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        response = self._send(
            HttpMethod.GET, api_path("users", user_id), "users.get", cancel=cancel
        )
        return self._parse(User.from_auth0_data, response.data, "users.get")

    def create(
        self, request: CreateUserRequest, cancel: CancellationToken | None = None
    ) -> User:
        """Create a user in a database connection."""
        response = self._send(
            HttpMethod.POST,
            api_path("users"),
            "users.create",
            json=request.to_payload(),
            cancel=cancel,
        )
        user = self._parse(User.from_auth0_data, response.data, "users.create")
        logger.info(
            f"Created user {user.user_id}",
            extra={"operation": "users.create"},
        )
        return user

    def update(
        self,
        user_id: str,
        request: UpdateUserRequest,
        cancel: CancellationToken | None = None,
    ) -> User:
        """Apply a partial update to a user and return the updated record."""
        response = self._send(
            HttpMethod.PATCH,
            api_path("users", user_id),
            "users.update",
            json=request.to_payload(),
            cancel=cancel,
        )
        return self._parse(User.from_auth0_data, response.data, "users.update")

    def delete(self, user_id: str, cancel: CancellationToken | None = None) -> None:
        """Permanently delete a user."""
        self._send(
            HttpMethod.DELETE,
            api_path("users", user_id),
            "users.delete",
            cancel=cancel,
        )
        logger.info(f"Deleted user {user_id}", extra={"operation": "users.delete"})

    def block(self, user_id: str, cancel: CancellationToken | None = None) -> User:
        return self._set_blocked(user_id, True, "users.block", cancel)

    def unblock(self, user_id: str, cancel: CancellationToken | None = None) -> User:
        return self._set_blocked(user_id, False, "users.unblock", cancel)

    def toggle_block(
        self, user_id: str, cancel: CancellationToken | None = None
    ) -> User:
        """Flip the blocked flag based on the user's current state."""
        user = self.get(user_id, cancel)
        return self._set_blocked(
            user_id, not user.blocked, "users.toggle_block", cancel
        )

    def logs(
        self,
        user_id: str,
        per_page: int = 10,
        cancel: CancellationToken | None = None,
    ) -> Paginator[LogEvent]:
        """Most recent log events for one user, newest first."""
        return self._paginate(
            api_path("users", user_id, "logs"),
            "users.logs",
            LogEvent.from_auth0_data,
            OffsetPagination("logs", per_page=per_page),
            params={"sort": "date:-1"},
            cancel=cancel,
        )

    def _set_blocked(
        self,
        user_id: str,
        blocked: bool,
        operation: str,
        cancel: CancellationToken | None,
    ) -> User:
        response = self._send(
            HttpMethod.PATCH,
            api_path("users", user_id),
            operation,
            json={"blocked": blocked},
            cancel=cancel,
        )
        user = self._parse(User.from_auth0_data, response.data, operation)
        logger.info(
            f"{'Blocked' if blocked else 'Unblocked'} user {user_id}",
            extra={"operation": operation},
        )
        return user
