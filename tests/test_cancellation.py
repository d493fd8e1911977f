"""Tests for cancellation tokens."""

import threading
import time

import pytest

from auth0_frontend.core.cancellation import CancellationToken
from auth0_frontend.core.exceptions import CancelledError


class TestCancellationToken:
    def test_fresh_token(self):
        token = CancellationToken()
        assert not token.cancelled
        assert token.remaining() is None
        token.raise_if_cancelled()

    def test_explicit_cancel(self):
        token = CancellationToken()
        token.cancel()

        with pytest.raises(CancelledError) as exc_info:
            token.raise_if_cancelled("users.get", "/api/v2/users/x")

        assert exc_info.value.operation == "users.get"
        assert exc_info.value.endpoint == "/api/v2/users/x"
        assert "cancelled" in exc_info.value.message

    def test_deadline(self):
        token = CancellationToken(timeout=0.01)
        time.sleep(0.02)

        assert token.cancelled
        assert token.remaining() == 0.0
        with pytest.raises(CancelledError) as exc_info:
            token.raise_if_cancelled()
        assert "deadline" in exc_info.value.message

    def test_wait_full_delay(self):
        token = CancellationToken()
        assert token.wait(0.01) is False

    def test_wait_interrupted_by_cancel(self):
        """Test that cancelling wakes a sleeping waiter."""
        token = CancellationToken()
        threading.Timer(0.05, token.cancel).start()

        start = time.monotonic()
        assert token.wait(10) is True
        assert time.monotonic() - start < 2.0

    def test_wait_past_deadline_returns_immediately(self):
        token = CancellationToken(timeout=5)

        start = time.monotonic()
        assert token.wait(60) is True
        assert time.monotonic() - start < 1.0
