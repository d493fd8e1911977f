"""Tests for CLI functionality."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from auth0_frontend.cli.main import cli
from auth0_frontend.core.auth import DOCTOR_TIMEOUT
from auth0_frontend.core.exceptions import ConfigError, NotFoundError
from auth0_frontend.models.application import Application
from auth0_frontend.models.connection import Connection
from auth0_frontend.models.log import LogEvent
from auth0_frontend.models.user import User


@pytest.fixture(autouse=True)
def quiet_setup():
    """Keep CLI runs from installing global logging and traceback hooks."""
    with (
        patch("auth0_frontend.cli.main.init_default_logging"),
        patch("auth0_frontend.cli.main.install_rich_tracebacks"),
    ):
        yield


@pytest.fixture
def mock_client():
    with patch("auth0_frontend.cli.main.ManagementClient") as mock_class:
        client = MagicMock()
        mock_class.from_env.return_value = client
        yield client


class TestCLIMain:
    """Test main CLI functionality."""

    def test_cli_help(self):
        """Test CLI help output."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Auth0 Frontend" in result.output
        assert "doctor" in result.output
        assert "users" in result.output
        assert "connections" in result.output

    def test_cli_no_command(self):
        """Test CLI with no command shows help."""
        result = CliRunner().invoke(cli, [])

        assert result.exit_code == 0
        assert "Auth0 Frontend" in result.output

    @patch("auth0_frontend.cli.main.run_doctor")
    def test_doctor_command(self, mock_doctor):
        """Test doctor command."""
        mock_doctor.return_value = {
            "success": True,
            "details": "Credentials are working correctly",
        }

        result = CliRunner().invoke(cli, ["doctor"])

        assert result.exit_code == 0
        assert "Credentials are working correctly" in result.output
        mock_doctor.assert_called_once_with(test_api=False, timeout=DOCTOR_TIMEOUT)

    @patch("auth0_frontend.cli.main.run_doctor")
    def test_doctor_command_failure(self, mock_doctor):
        """Test doctor command exits non-zero when the token fails."""
        mock_doctor.return_value = {
            "success": False,
            "details": "Could not obtain an access token",
            "error": "Client credentials rejected",
        }

        result = CliRunner().invoke(cli, ["doctor", "--test-api"])

        assert result.exit_code == 1
        mock_doctor.assert_called_once_with(test_api=True, timeout=DOCTOR_TIMEOUT)

    @patch("auth0_frontend.cli.main.run_doctor")
    def test_doctor_command_honours_timeout(self, mock_doctor):
        """Test that the group --timeout bounds the doctor run."""
        mock_doctor.return_value = {"success": True, "details": "ok"}

        result = CliRunner().invoke(cli, ["--timeout", "5", "doctor"])

        assert result.exit_code == 0
        mock_doctor.assert_called_once_with(test_api=False, timeout=5.0)

    def test_users_subcommand_help(self):
        """Test users subcommand help."""
        result = CliRunner().invoke(cli, ["users", "--help"])

        assert result.exit_code == 0
        assert "Manage users" in result.output
        for command in ("list", "show", "block", "unblock", "delete"):
            assert command in result.output


class TestUserCommands:
    """Test user commands."""

    def test_list_users(self, mock_client):
        mock_client.users.list.return_value.to_list.return_value = [
            User(user_id="auth0|1", email="a@x.io", blocked=True),
        ]

        result = CliRunner().invoke(cli, ["users", "list", "-q", "email:a*", "--limit", "5"])

        assert result.exit_code == 0
        assert "auth0|1" in result.output
        params = mock_client.users.list.call_args.args[0]
        assert params.q == "email:a*"
        assert params.per_page == 5
        mock_client.users.list.return_value.to_list.assert_called_once_with(5)

    def test_list_users_rejects_zero_limit(self, mock_client):
        result = CliRunner().invoke(cli, ["users", "list", "--limit", "0"])

        assert result.exit_code == 2
        mock_client.users.list.assert_not_called()

    def test_show_user_with_logs(self, mock_client):
        mock_client.users.get.return_value = User(user_id="auth0|1", name="Alice")
        mock_client.users.logs.return_value.first_page.return_value.items = [
            LogEvent(
                log_id="1",
                date=datetime(2024, 1, 15, tzinfo=timezone.utc),
                type="s",
                description="ok",
            )
        ]

        result = CliRunner().invoke(cli, ["users", "show", "auth0|1", "--logs"])

        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "Success Login" in result.output

    def test_show_missing_user(self, mock_client):
        """Test that API errors exit with status 1."""
        mock_client.users.get.side_effect = NotFoundError(
            "Resource not found", status_code=404, operation="users.get"
        )

        result = CliRunner().invoke(cli, ["users", "show", "auth0|404"])

        assert result.exit_code == 1
        assert "not_found" in result.output

    def test_block_user(self, mock_client):
        mock_client.users.block.return_value = User(user_id="auth0|1", email="a@x.io")

        result = CliRunner().invoke(cli, ["users", "block", "auth0|1"])

        assert result.exit_code == 0
        assert "Blocked" in result.output
        assert mock_client.users.block.call_args.args[0] == "auth0|1"

    def test_unblock_user(self, mock_client):
        mock_client.users.unblock.return_value = User(user_id="auth0|1")

        result = CliRunner().invoke(cli, ["users", "unblock", "auth0|1"])

        assert result.exit_code == 0
        assert "Unblocked" in result.output

    def test_delete_requires_confirmation(self, mock_client):
        result = CliRunner().invoke(cli, ["users", "delete", "auth0|1"], input="n\n")

        assert result.exit_code == 1
        mock_client.users.delete.assert_not_called()

    def test_delete_with_yes(self, mock_client):
        result = CliRunner().invoke(cli, ["users", "delete", "auth0|1", "--yes"])

        assert result.exit_code == 0
        assert mock_client.users.delete.call_args.args[0] == "auth0|1"

    def test_config_error(self):
        with patch("auth0_frontend.cli.main.ManagementClient") as mock_class:
            mock_class.from_env.side_effect = ConfigError(
                "Environment variable AUTH0_DOMAIN is required but not set or empty"
            )

            result = CliRunner().invoke(cli, ["users", "list"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestListingCommands:
    def test_connections_list(self, mock_client):
        mock_client.connections.list.return_value = [
            Connection(id="con_1", name="db", strategy="auth0", enabled_clients=["a", "b"])
        ]

        result = CliRunner().invoke(cli, ["connections", "list", "--strategy", "auth0"])

        assert result.exit_code == 0
        assert "con_1" in result.output
        assert mock_client.connections.list.call_args.kwargs["strategy"] == "auth0"

    def test_applications_list(self, mock_client):
        mock_client.applications.list.return_value = [
            Application(client_id="abc", name="SPA", app_type="spa")
        ]

        result = CliRunner().invoke(cli, ["applications", "list"])

        assert result.exit_code == 0
        assert "SPA" in result.output

    def test_logs_list(self, mock_client):
        mock_client.logs.list.return_value.to_list.return_value = [
            LogEvent(
                log_id="1",
                date=datetime(2024, 1, 15, tzinfo=timezone.utc),
                type="f",
            )
        ]

        result = CliRunner().invoke(cli, ["logs", "list", "-q", "type:f"])

        assert result.exit_code == 0
        assert "Failed Login" in result.output
        assert mock_client.logs.list.call_args.args[0].q == "type:f"
