import logging

from twitchhelix.enums import Scope
from twitchhelix.helix import (
    ClientConfig,
    Deadline,
    TwitchClient,
    HelixError,
    EVENT_REFRESH,
    EVENT_RATELIMIT,
    EVENT_RATELIMIT_POLL,
    EVENT_USER_AUTH,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    'Scope',
    'ClientConfig',
    'Deadline',
    'TwitchClient',
    'HelixError',
    'EVENT_REFRESH',
    'EVENT_RATELIMIT',
    'EVENT_RATELIMIT_POLL',
    'EVENT_USER_AUTH',
]
