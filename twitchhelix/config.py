import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Endpoint and transport settings shared by the Helix client."""
    HELIX_BASE_URL = os.getenv('TWITCH_HELIX_BASE_URL', 'https://api.twitch.tv/helix')
    INGEST_BASE_URL = os.getenv('TWITCH_INGEST_BASE_URL', 'https://ingest.twitch.tv')
    ID_BASE_URL = os.getenv('TWITCH_ID_BASE_URL', 'https://id.twitch.tv/oauth2')

    # Transport
    REQUEST_TIMEOUT = int(os.getenv('TWITCH_REQUEST_TIMEOUT', 30))  # seconds

    # Retry configuration
    MAX_RETRIES = 4
    BASE_DELAY = 1  # seconds
    MAX_DELAY = 16  # seconds

    # Local credential cache
    LOCAL_CACHE_PATH = os.getenv('TWITCH_LOCAL_CACHE', './data/apiUser.json')


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable ("1", "true", "yes", "on")."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')
