"""Tests for the management client facade."""

import pytest

from auth0_frontend.client import ManagementClient
from auth0_frontend.core.config import CredentialStore
from auth0_frontend.core.exceptions import ConfigError
from auth0_frontend.resources import (
    ApplicationsClient,
    ConnectionsClient,
    LogsClient,
    UsersClient,
)


class TestManagementClient:
    def test_from_env(self, env_vars):
        """Test wiring of all components from the environment."""
        env_vars["AUTH0_MAX_ATTEMPTS"] = "2"

        client = ManagementClient.from_env(env_vars)

        assert client.config.max_attempts == 2
        assert client.dispatcher.token_manager is client.token_manager
        assert client.dispatcher.base_url == "https://test.auth0.com"
        assert isinstance(client.users, UsersClient)
        assert isinstance(client.connections, ConnectionsClient)
        assert isinstance(client.applications, ApplicationsClient)
        assert isinstance(client.logs, LogsClient)
        assert client.users.dispatcher is client.dispatcher

    def test_from_store(self, credentials, fast_config):
        client = ManagementClient(CredentialStore(credentials), fast_config)

        assert client.config is fast_config
        assert client.store.credentials is credentials

    def test_from_env_invalid(self, env_vars):
        env_vars["AUTH0_DOMAIN"] = "not a domain"

        with pytest.raises(ConfigError):
            ManagementClient.from_env(env_vars)
