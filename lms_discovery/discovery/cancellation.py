"""Cooperative cancellation for discovery sessions."""

import threading
import time
from typing import Optional

from ..errors import DiscoveryCancelled


class CancellationToken:
    """Signal a discovery session to stop at its next checkpoint.

    Cancellation is cooperative: a receive that is already blocking is not
    interrupted, the session only observes the token between datagrams.
    A token created with a timeout cancels itself once that many seconds
    have passed.
    """

    def __init__(self, timeout: Optional[float] = None):
        """Initialize cancellation token.

        Args:
            timeout: Seconds until the token cancels itself. None = never.
        """
        self.timeout = timeout
        self._event = threading.Event()
        self._start_time = time.monotonic()

    @property
    def elapsed(self) -> float:
        """Seconds since the token was created."""
        return time.monotonic() - self._start_time

    @property
    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without one."""
        if self.timeout is None:
            return None
        return max(0.0, self.timeout - self.elapsed)

    @property
    def is_cancelled(self) -> bool:
        """Whether cancellation was requested or the deadline has passed."""
        if self._event.is_set():
            return True
        if self.timeout is not None and self.elapsed >= self.timeout:
            self._event.set()
            return True
        return False

    def cancel(self) -> None:
        """Request cancellation. Safe to call from any thread."""
        self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise DiscoveryCancelled if cancellation was requested."""
        if self.is_cancelled:
            raise DiscoveryCancelled("Discovery cancelled")
