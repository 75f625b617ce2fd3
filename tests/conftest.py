"""
Pytest configuration and shared fixtures for twitchhelix tests.

Provides a mocked requests session, sample payloads, and ready-made
auth manager / HTTP client instances wired to that session.
"""

import pytest
from unittest.mock import MagicMock

from twitchhelix.enums import Scope
from twitchhelix.helix.auth import Credentials, HelixAuthManager
from twitchhelix.helix.credentials import ClientConfig
from twitchhelix.helix.events import EventEmitter
from twitchhelix.helix.http_client import HelixHTTPClient


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def sample_user():
    """Sample Helix user record."""
    return {
        'id': '141981764',
        'login': 'twitchdev',
        'display_name': 'TwitchDev',
        'type': '',
        'broadcaster_type': 'partner',
        'description': 'Supporting third-party developers building Twitch integrations.',
        'profile_image_url': 'https://static-cdn.jtvnw.net/profile.png',
        'offline_image_url': 'https://static-cdn.jtvnw.net/offline.png',
        'view_count': 5980557,
        'created_at': '2016-12-14T20:32:28Z',
    }


@pytest.fixture
def token_payload():
    """A successful token exchange payload."""
    return {
        'access_token': 'new_access_token',
        'refresh_token': 'new_refresh_token',
        'expires_in': 14124,
        'scope': ['user:read:chat'],
        'token_type': 'bearer',
    }


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture
def session():
    """A mocked requests.Session."""
    return MagicMock()


@pytest.fixture
def emitter():
    return EventEmitter()


@pytest.fixture
def auth(session, emitter):
    """Auth manager holding a user token pair."""
    return HelixAuthManager(
        client_id='test_client_id',
        client_secret='test_client_secret',
        scopes=(Scope.USER_READ_CHAT,),
        redirect_uri='http://localhost:3000/callback',
        credentials=Credentials('old_access_token', 'old_refresh_token'),
        session=session,
        emitter=emitter,
    )


@pytest.fixture
def http_client(auth, emitter, session):
    return HelixHTTPClient(auth, emitter=emitter, session=session)


@pytest.fixture
def config():
    """Minimal client configuration with no tokens."""
    return ClientConfig(
        client_id='test_client_id',
        client_secret='test_client_secret',
    )
