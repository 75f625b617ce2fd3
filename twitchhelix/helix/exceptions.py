"""
Helix module exceptions.

Provides a clean exception hierarchy for Twitch Helix API operations.
"""


class HelixError(Exception):
    """Base exception for all Helix-related errors."""
    pass


class HelixPreconditionError(HelixError):
    """Raised when a call is rejected locally, before any network round-trip."""
    pass


class HelixScopeError(HelixPreconditionError):
    """Raised when the client lacks the scope an endpoint requires."""

    def __init__(self, *scopes):
        names = " or ".join(str(s) for s in scopes)
        super().__init__(f"missing scope: {names}")
        self.scopes = scopes


class HelixConfigError(HelixError):
    """Raised when client configuration is missing or invalid."""
    pass


class HelixAuthError(HelixError):
    """Raised when authentication/authorization fails."""
    pass


class HelixTokenError(HelixAuthError):
    """Raised when a token exchange with the identity service fails."""
    pass


class HelixTokenExpiredError(HelixTokenError):
    """Raised when a token is still rejected after a refresh."""
    pass


class HelixMissingTokenError(HelixAuthError):
    """Raised when the identity service reports no authorization token."""
    pass


class HelixAPIError(HelixError):
    """Raised when a Helix API call returns an error payload."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class HelixRateLimitError(HelixAPIError):
    """Raised when rate limited and rate-limit errors are surfaced."""

    def __init__(self, rate_limit, message: str = None):
        if message is None:
            message = (
                f"twitch api is rate limited (limit {rate_limit.limit}, "
                f"remaining {rate_limit.remaining}, "
                f"reset {rate_limit.reset})"
            )
        super().__init__(message, status=429)
        self.rate_limit = rate_limit


class HelixTransportError(HelixError):
    """Raised when the HTTP transport fails (connection, timeout)."""
    pass


class HelixCancelledError(HelixTransportError):
    """Raised when a call's deadline expires or it is cancelled."""
    pass


class HelixDecodeError(HelixError):
    """Raised when a response body does not decode into the expected shape."""
    pass
