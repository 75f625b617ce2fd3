"""
Rate-limit header parsing and backoff calculation.

Helix reports its token bucket in the ``Ratelimit-*`` headers of every
response. The pipeline turns those into a RateLimitSnapshot, publishes it,
and on a 429 decides how long to wait before retrying.
"""

import re
import time
from dataclasses import dataclass
from typing import Mapping, Optional

from twitchhelix.config import Settings

LIMIT_HEADER = "Ratelimit-Limit"
REMAINING_HEADER = "Ratelimit-Remaining"
RESET_HEADER = "Ratelimit-Reset"

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Token bucket state reported by a single response."""

    limit: int = 0
    remaining: int = 0
    reset: int = 0  # epoch seconds

    def to_dict(self) -> dict:
        return {"limit": self.limit, "remaining": self.remaining, "reset": self.reset}


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup that also works on plain dicts."""
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def _parse_int(value: Optional[str]) -> int:
    if value is None or not _INTEGER.fullmatch(value):
        return 0
    return int(value)


def extract_rate_limit(headers: Optional[Mapping[str, str]]) -> RateLimitSnapshot:
    """
    Build a snapshot from response headers.

    Missing or malformed values default to zero.
    """
    if not headers:
        return RateLimitSnapshot()
    return RateLimitSnapshot(
        limit=_parse_int(_header(headers, LIMIT_HEADER)),
        remaining=_parse_int(_header(headers, REMAINING_HEADER)),
        reset=_parse_int(_header(headers, RESET_HEADER)),
    )


def seconds_until_reset(
    snapshot: RateLimitSnapshot, now: Optional[float] = None
) -> float:
    """Seconds until the bucket resets; zero or negative if already reset."""
    if now is None:
        now = time.time()
    return snapshot.reset - int(now)


def calculate_backoff_delay(attempt: int) -> float:
    """Calculate exponential backoff delay, capped at MAX_DELAY."""
    return min(Settings.BASE_DELAY * (2 ** attempt), Settings.MAX_DELAY)


def retry_delay(
    snapshot: RateLimitSnapshot, attempt: int, now: Optional[float] = None
) -> float:
    """
    Delay before retrying a rate-limited request.

    Waits until the advertised reset when it lies in the future, otherwise
    falls back to exponential backoff for this attempt.
    """
    wait = seconds_until_reset(snapshot, now)
    if wait > 0:
        return wait
    return calculate_backoff_delay(attempt)
