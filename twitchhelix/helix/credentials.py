"""
Twitch client configuration and local credential cache.

Provides immutable dataclasses for the client's OAuth configuration and
for the small JSON file used to bootstrap credentials between runs.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from twitchhelix.config import Settings, env_flag
from twitchhelix.enums import Scope, filter_invalid_scopes

from .exceptions import HelixConfigError, HelixDecodeError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_PATH = Settings.LOCAL_CACHE_PATH


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable configuration for a TwitchClient.

    Attributes:
        client_id: The Twitch application client ID.
        client_secret: The Twitch application client secret.
        scopes: Scopes requested for and granted to this client.
        access_token: Optional pre-seeded access token.
        refresh_token: Optional pre-seeded refresh token.
        redirect_uri: Optional OAuth callback URL.
        throw_rate_limit_errors: Raise on 429 instead of sleeping.
        timeout: Per-request transport timeout in seconds.
        verbose: Trace every request at DEBUG level.

    Example:
        config = ClientConfig(
            client_id='your_client_id',
            client_secret='your_client_secret',
            scopes=(Scope.USER_READ_CHAT,),
        )
    """

    client_id: str
    client_secret: str
    scopes: Tuple[Scope, ...] = ()
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    redirect_uri: Optional[str] = None
    throw_rate_limit_errors: bool = False
    timeout: float = Settings.REQUEST_TIMEOUT
    verbose: bool = field(default=False, compare=False)

    def __post_init__(self):
        """Validate configuration on creation."""
        if not self.client_id:
            raise HelixConfigError("client_id is required")
        if not self.client_secret:
            raise HelixConfigError("client_secret is required")

        invalid = filter_invalid_scopes(self.scopes)
        if invalid:
            raise HelixConfigError(f"Unknown scopes: {invalid}")
        object.__setattr__(
            self, 'scopes', tuple(Scope(s) for s in self.scopes)
        )

    @classmethod
    def from_env(cls) -> 'ClientConfig':
        """
        Create configuration from environment variables.

        Reads TWITCH_CLIENT_ID, TWITCH_CLIENT_SECRET, TWITCH_ACCESS_TOKEN,
        TWITCH_REFRESH_TOKEN, TWITCH_REDIRECT_URI, TWITCH_SCOPES (space
        separated) and TWITCH_THROW_RATELIMIT_ERRORS. A ``.env`` file is
        honoured through python-dotenv.

        Raises:
            HelixConfigError: If required variables are missing.
        """
        scopes = os.getenv('TWITCH_SCOPES', '').split()
        return cls(
            client_id=os.getenv('TWITCH_CLIENT_ID', ''),
            client_secret=os.getenv('TWITCH_CLIENT_SECRET', ''),
            scopes=tuple(scopes),
            access_token=os.getenv('TWITCH_ACCESS_TOKEN') or None,
            refresh_token=os.getenv('TWITCH_REFRESH_TOKEN') or None,
            redirect_uri=os.getenv('TWITCH_REDIRECT_URI') or None,
            throw_rate_limit_errors=env_flag('TWITCH_THROW_RATELIMIT_ERRORS'),
        )

    @classmethod
    def from_local_cache(
        cls, path: str = DEFAULT_CACHE_PATH, **overrides
    ) -> 'ClientConfig':
        """
        Create configuration from the local credential cache file.

        Args:
            path: Location of the JSON cache.
            **overrides: Extra fields such as ``scopes`` or ``redirect_uri``.
        """
        cache = LocalCache.load(path)
        return cls(
            client_id=cache.client_id,
            client_secret=cache.client_secret,
            access_token=cache.access_token or None,
            refresh_token=cache.refresh_token or None,
            **overrides,
        )


@dataclass(frozen=True)
class LocalCache:
    """The on-disk credential record used to bootstrap a client."""

    access_token: str = ''
    refresh_token: str = ''
    client_id: str = ''
    client_secret: str = ''

    @classmethod
    def load(cls, path: str = DEFAULT_CACHE_PATH) -> 'LocalCache':
        """
        Read the cache from disk.

        Raises:
            HelixConfigError: If the file does not exist or cannot be read.
            HelixDecodeError: If the file is not a JSON object.
        """
        cache_file = Path(path)
        try:
            raw = cache_file.read_text(encoding='utf-8')
        except OSError as e:
            raise HelixConfigError(
                f"Cannot read local cache {cache_file}: {e}"
            ) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise HelixDecodeError(
                f"failed to unmarshal JSON: {e}"
            ) from e
        if not isinstance(data, dict):
            raise HelixDecodeError(
                f"Local cache must be a JSON object, got {type(data).__name__}"
            )

        return cls(
            access_token=data.get('access_token', ''),
            refresh_token=data.get('refresh_token', ''),
            client_id=data.get('client_id', ''),
            client_secret=data.get('client_secret', ''),
        )

    def save(self, path: str = DEFAULT_CACHE_PATH) -> None:
        """Write the cache to disk, creating parent directories."""
        cache_file = Path(path)
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache_file.write_text(json.dumps(asdict(self), indent=2), encoding='utf-8')
        logger.debug("Wrote local credential cache to %s", cache_file)

    def to_dict(self) -> dict:
        return asdict(self)


def get_local_access_token(path: str = DEFAULT_CACHE_PATH) -> str:
    return LocalCache.load(path).access_token


def get_local_refresh_token(path: str = DEFAULT_CACHE_PATH) -> str:
    return LocalCache.load(path).refresh_token


def get_local_client_id(path: str = DEFAULT_CACHE_PATH) -> str:
    return LocalCache.load(path).client_id


def get_local_client_secret(path: str = DEFAULT_CACHE_PATH) -> str:
    return LocalCache.load(path).client_secret
