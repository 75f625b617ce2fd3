"""
Twitch Helix API integration module.

This module provides a clean, modular interface for Twitch OAuth
authentication and Helix API operations.

Architecture:
    - credentials.py: ClientConfig and the local credential cache
    - auth.py: HelixAuthManager for OAuth grants and token refresh
    - encoding.py: Option record -> query string encoding
    - ratelimit.py: Rate-limit header parsing and backoff
    - events.py: EventEmitter for refresh/rate-limit/user_auth signals
    - deadline.py: Per-call time budget and cancellation
    - http_client.py: HelixHTTPClient request pipeline
    - client.py: TwitchClient facade (one method per endpoint)
    - exceptions.py: Exception hierarchy

Usage:
    from twitchhelix.helix import ClientConfig, TwitchClient, EVENT_REFRESH

    config = ClientConfig.from_env()
    client = TwitchClient(config)

    # Persist rotated tokens
    client.add_event_handler(EVENT_REFRESH, lambda token: save(token))

    streams = client.get_streams(GetStreamsOptions(channels=["twitchdev"]))
"""

# Configuration
from .credentials import (
    ClientConfig,
    LocalCache,
    DEFAULT_CACHE_PATH,
    get_local_access_token,
    get_local_refresh_token,
    get_local_client_id,
    get_local_client_secret,
)

# Auth (token management)
from .auth import (
    AuthState,
    Credentials,
    HelixAuthManager,
)

# Pipeline
from .deadline import Deadline
from .encoding import (
    encode_options,
    encode_mixed_param,
    build_query,
    is_number,
    choose_key,
)
from .events import (
    EventEmitter,
    EVENT_REFRESH,
    EVENT_RATELIMIT,
    EVENT_RATELIMIT_POLL,
    EVENT_USER_AUTH,
)
from .ratelimit import RateLimitSnapshot, extract_rate_limit
from .http_client import HelixHTTPClient, decode_response, API_HELIX, API_INGEST

# Client (facade)
from .client import TwitchClient

# Exceptions
from .exceptions import (
    HelixError,
    HelixPreconditionError,
    HelixScopeError,
    HelixConfigError,
    HelixAuthError,
    HelixTokenError,
    HelixTokenExpiredError,
    HelixMissingTokenError,
    HelixAPIError,
    HelixRateLimitError,
    HelixTransportError,
    HelixCancelledError,
    HelixDecodeError,
)


__all__ = [
    # Configuration
    'ClientConfig',
    'LocalCache',
    'DEFAULT_CACHE_PATH',
    'get_local_access_token',
    'get_local_refresh_token',
    'get_local_client_id',
    'get_local_client_secret',

    # Auth
    'AuthState',
    'Credentials',
    'HelixAuthManager',

    # Pipeline
    'Deadline',
    'encode_options',
    'encode_mixed_param',
    'build_query',
    'is_number',
    'choose_key',
    'EventEmitter',
    'EVENT_REFRESH',
    'EVENT_RATELIMIT',
    'EVENT_RATELIMIT_POLL',
    'EVENT_USER_AUTH',
    'RateLimitSnapshot',
    'extract_rate_limit',
    'HelixHTTPClient',
    'decode_response',
    'API_HELIX',
    'API_INGEST',

    # Client (facade)
    'TwitchClient',

    # Exceptions
    'HelixError',
    'HelixPreconditionError',
    'HelixScopeError',
    'HelixConfigError',
    'HelixAuthError',
    'HelixTokenError',
    'HelixTokenExpiredError',
    'HelixMissingTokenError',
    'HelixAPIError',
    'HelixRateLimitError',
    'HelixTransportError',
    'HelixCancelledError',
    'HelixDecodeError',
]
