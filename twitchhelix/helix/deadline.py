"""
Per-call time budget and cancellation.

A Deadline travels with one logical request through token acquisition,
every retry attempt, and every backoff sleep.
"""

import threading
import time
from typing import Optional

from .exceptions import HelixCancelledError


class Deadline:
    """
    Total time budget plus an optional cancellation event for a call.

    Args:
        timeout: Seconds the whole call may take, or None for no limit.
        cancel_event: A threading.Event; setting it aborts the call at the
            next attempt or wakes it from a backoff sleep.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self._expires_at = (
            time.monotonic() + timeout if timeout is not None else None
        )
        self._cancel_event = cancel_event

    @property
    def cancelled(self) -> bool:
        return self._cancel_event is not None and self._cancel_event.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left in the budget, or None when unbounded."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    def check(self) -> None:
        """
        Raises:
            HelixCancelledError: If the call was cancelled or ran out of time.
        """
        if self.cancelled:
            raise HelixCancelledError("request cancelled")
        if self._expires_at is not None and self.remaining() <= 0:
            raise HelixCancelledError("request deadline exceeded")

    def request_timeout(self, default: float) -> float:
        """Transport timeout for the next attempt, bounded by the budget."""
        remaining = self.remaining()
        if remaining is None:
            return default
        return min(default, remaining)

    def sleep(self, seconds: float) -> None:
        """
        Block for ``seconds`` unless cancelled or out of budget first.

        Raises:
            HelixCancelledError: If the wait would outlast the deadline or
                the cancel event fires while waiting.
        """
        self.check()
        remaining = self.remaining()
        if remaining is not None and seconds > remaining:
            raise HelixCancelledError(
                f"backoff of {seconds}s exceeds remaining deadline of {remaining:.1f}s"
            )
        if self._cancel_event is not None:
            if self._cancel_event.wait(seconds):
                raise HelixCancelledError("request cancelled")
        else:
            time.sleep(seconds)
