import json
from unittest.mock import MagicMock, patch

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from auth0_frontend.models.config import Credentials, RetryConfig
from auth0_frontend.models.request import ApiResponse
from auth0_frontend.models.token import Token


@pytest.fixture
def credentials():
    """Credentials for a test tenant."""
    return Credentials(
        domain="test.auth0.com",
        client_id="test_client_id",
        client_secret="test_client_secret",
    )


@pytest.fixture
def fast_config():
    """Retry config with delays small enough for unit tests."""
    return RetryConfig(
        max_attempts=5,
        base_delay=0.001,
        max_delay=0.005,
        timeout=2.0,
        token_timeout=1.0,
        token_max_attempts=3,
        token_safety_margin=60.0,
    )


@pytest.fixture
def env_vars():
    """Minimal environment for building a client."""
    return {
        "AUTH0_DOMAIN": "test.auth0.com",
        "AUTH0_CLIENT_ID": "test_client_id",
        "AUTH0_CLIENT_SECRET": "test_client_secret",
    }


@pytest.fixture
def make_response():
    """Factory building real ``requests.Response`` objects."""

    def _make(status_code=200, body=None, headers=None, text=None):
        response = requests.Response()
        response.status_code = status_code
        if text is not None:
            response._content = text.encode("utf-8")
        elif body is not None:
            response._content = json.dumps(body).encode("utf-8")
        else:
            response._content = b""
        response.headers = CaseInsensitiveDict(headers or {})
        response.encoding = "utf-8"
        return response

    return _make


@pytest.fixture
def mock_get_token():
    """Create a mock GetToken instance."""
    get_token = MagicMock()
    get_token.client_credentials = MagicMock(
        return_value={
            "access_token": "test_token",
            "expires_in": 86400,
            "scope": "read:users update:users",
            "token_type": "Bearer",
        }
    )
    return get_token


@pytest.fixture
def mock_token_manager():
    """Token manager that always hands out the same long-lived token."""
    manager = MagicMock()
    manager.get_token = MagicMock(
        return_value=Token(value="test_token", expires_at=4_102_444_800.0)
    )
    return manager


@pytest.fixture
def mock_requests():
    """Patch the requests module used by the dispatcher."""
    with patch("auth0_frontend.core.dispatcher.requests") as mock:
        # Keep real exception classes so except clauses still match
        mock.exceptions = requests.exceptions
        yield mock


@pytest.fixture
def mock_dispatcher():
    """Dispatcher double returning an empty successful response."""
    dispatcher = MagicMock()
    dispatcher.send = MagicMock(return_value=ApiResponse(status_code=200, data={}))
    return dispatcher
