"""Cooperative cancellation and deadlines for management API calls."""

import threading
import time

from .exceptions import CancelledError


class CancellationToken:
    """Cancellation signal shared between a caller and an in-flight call.

    A token is cancelled either explicitly through ``cancel()`` or implicitly
    once its optional deadline passes. Backoff sleeps wait on the token, so
    cancelling wakes them immediately.
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Create a token.

        Args:
            timeout: Optional number of seconds after which the token counts
                as cancelled
        """
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        """Cancel every operation observing this token."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def wait(self, seconds: float) -> bool:
        """Sleep for ``seconds`` unless cancelled first.

        A sleep that would run past the deadline is abandoned right away.

        Returns:
            bool: True if the token is cancelled, False if the full delay elapsed
        """
        if self.cancelled:
            return True
        remaining = self.remaining()
        if remaining is not None and seconds >= remaining:
            return True
        if self._event.wait(max(0.0, seconds)):
            return True
        return self.cancelled

    def raise_if_cancelled(
        self, operation: str | None = None, endpoint: str | None = None
    ) -> None:
        """Raise CancelledError if the token has been cancelled."""
        if self.cancelled:
            reason = "deadline exceeded" if not self._event.is_set() else "cancelled"
            raise CancelledError(
                f"Operation {reason}", operation=operation, endpoint=endpoint
            )
