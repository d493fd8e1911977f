"""Facade wiring credentials, token cache, dispatcher and resource clients."""

from collections.abc import Mapping

from .core.config import CredentialStore, load_retry_config
from .core.dispatcher import HttpDispatcher
from .core.token_manager import TokenManager
from .models.config import RetryConfig
from .resources.applications import ApplicationsClient
from .resources.connections import ConnectionsClient
from .resources.logs import LogsClient
from .resources.users import UsersClient
from .utils.logging_utils import get_logger

logger = get_logger(__name__)


class ManagementClient:
    """Entry point for the presentation layer.

    One instance is meant to be shared by all request handlers of a process;
    the token cache inside it is thread-safe.
    """

    def __init__(
        self, store: CredentialStore, config: RetryConfig | None = None
    ) -> None:
        """Wire up the management core.

        Args:
            store: Credential store holding the M2M credentials
            config: Retry and timeout tuning
        """
        self.store = store
        self.config = config or RetryConfig()
        self.token_manager = TokenManager(store.credentials, self.config)
        self.dispatcher = HttpDispatcher(
            store.credentials, self.token_manager, self.config
        )

        self.users = UsersClient(self.dispatcher)
        self.connections = ConnectionsClient(self.dispatcher)
        self.applications = ApplicationsClient(self.dispatcher)
        self.logs = LogsClient(self.dispatcher)

        logger.info(
            f"Initialized management client for {store.credentials.domain}",
            extra={"operation": "client_init"},
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ManagementClient":
        """Build a client from environment configuration.

        Raises:
            ConfigError: If credentials or tuning values are missing or malformed
        """
        store = CredentialStore.from_env(environ)
        return cls(store, load_retry_config(environ))
