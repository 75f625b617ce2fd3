"""
Tests for Deadline time budgets and cancellation.
"""

import threading
from unittest.mock import patch

import pytest

from twitchhelix.helix.deadline import Deadline
from twitchhelix.helix.exceptions import HelixCancelledError


class TestDeadline:
    """Tests for check, remaining and request_timeout."""

    def test_unbounded_deadline(self):
        deadline = Deadline()

        assert deadline.remaining() is None
        assert deadline.request_timeout(30) == 30
        deadline.check()

    def test_request_timeout_bounded_by_budget(self):
        deadline = Deadline(timeout=5)
        assert deadline.request_timeout(30) <= 5

    def test_expired_deadline_raises(self):
        deadline = Deadline(timeout=0)

        with pytest.raises(HelixCancelledError, match="deadline exceeded"):
            deadline.check()

    def test_cancelled_deadline_raises(self):
        event = threading.Event()
        deadline = Deadline(cancel_event=event)
        event.set()

        assert deadline.cancelled is True
        with pytest.raises(HelixCancelledError, match="cancelled"):
            deadline.check()


class TestDeadlineSleep:
    """Tests for Deadline.sleep."""

    @patch("twitchhelix.helix.deadline.time.sleep")
    def test_sleep_without_cancel_event(self, mock_sleep):
        Deadline().sleep(3)
        mock_sleep.assert_called_once_with(3)

    def test_sleep_longer_than_budget_raises(self):
        deadline = Deadline(timeout=1)

        with pytest.raises(HelixCancelledError, match="exceeds remaining deadline"):
            deadline.sleep(60)

    def test_cancel_wakes_sleep(self):
        """Should abort the wait as soon as the cancel event fires."""
        event = threading.Event()
        deadline = Deadline(cancel_event=event)
        timer = threading.Timer(0.05, event.set)
        timer.start()
        try:
            with pytest.raises(HelixCancelledError, match="cancelled"):
                deadline.sleep(10)
        finally:
            timer.cancel()

    def test_sleep_with_unset_cancel_event_returns(self):
        event = threading.Event()
        Deadline(cancel_event=event).sleep(0.01)
