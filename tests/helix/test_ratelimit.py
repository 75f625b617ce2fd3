"""
Tests for rate-limit header parsing and backoff.
"""

from unittest.mock import patch

from twitchhelix.helix.ratelimit import (
    RateLimitSnapshot,
    calculate_backoff_delay,
    extract_rate_limit,
    retry_delay,
    seconds_until_reset,
)


class TestExtractRateLimit:
    """Tests for extract_rate_limit."""

    def test_valid_headers(self):
        headers = {
            "Ratelimit-Limit": "800",
            "Ratelimit-Remaining": "799",
            "Ratelimit-Reset": "1234567890",
        }
        snapshot = extract_rate_limit(headers)

        assert snapshot == RateLimitSnapshot(limit=800, remaining=799, reset=1234567890)

    def test_invalid_headers_default_to_zero(self):
        headers = {
            "Ratelimit-Limit": "invalid",
            "Ratelimit-Remaining": "invalid",
            "Ratelimit-Reset": "invalid",
        }
        assert extract_rate_limit(headers) == RateLimitSnapshot(0, 0, 0)

    def test_missing_headers_default_to_zero(self):
        assert extract_rate_limit({}) == RateLimitSnapshot()
        assert extract_rate_limit(None) == RateLimitSnapshot()

    def test_lookup_is_case_insensitive(self):
        headers = {"ratelimit-limit": "30", "RATELIMIT-REMAINING": "0"}
        snapshot = extract_rate_limit(headers)

        assert snapshot.limit == 30
        assert snapshot.remaining == 0

    def test_to_dict(self):
        snapshot = RateLimitSnapshot(limit=800, remaining=10, reset=99)
        assert snapshot.to_dict() == {"limit": 800, "remaining": 10, "reset": 99}


class TestRetryDelay:
    """Tests for backoff calculation."""

    def test_seconds_until_reset(self):
        snapshot = RateLimitSnapshot(reset=1005)
        assert seconds_until_reset(snapshot, now=1000.4) == 5

    @patch("twitchhelix.helix.ratelimit.time.time", return_value=1000.0)
    def test_seconds_until_reset_uses_clock(self, mock_time):
        assert seconds_until_reset(RateLimitSnapshot(reset=1003)) == 3

    def test_waits_until_reset_when_in_future(self):
        snapshot = RateLimitSnapshot(reset=1005)
        assert retry_delay(snapshot, attempt=0, now=1000) == 5

    def test_backoff_when_reset_in_past(self):
        """Should fall back to exponential backoff: 1, 2, 4, 8s."""
        snapshot = RateLimitSnapshot(reset=900)
        delays = [retry_delay(snapshot, attempt, now=1000) for attempt in range(4)]
        assert delays == [1, 2, 4, 8]

    def test_backoff_when_reset_missing(self):
        assert retry_delay(RateLimitSnapshot(), attempt=1, now=1000) == 2

    def test_backoff_capped(self):
        assert calculate_backoff_delay(10) == 16
