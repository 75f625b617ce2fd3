"""
Tests for ClientConfig and the local credential cache.
"""

import json

import pytest

from twitchhelix.enums import Scope
from twitchhelix.helix.credentials import (
    ClientConfig,
    LocalCache,
    get_local_access_token,
    get_local_client_id,
    get_local_client_secret,
    get_local_refresh_token,
)
from twitchhelix.helix.exceptions import HelixConfigError, HelixDecodeError


# =============================================================================
# ClientConfig Tests
# =============================================================================

class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_valid_config(self):
        config = ClientConfig(
            client_id='id',
            client_secret='secret',
            scopes=(Scope.USER_READ_CHAT, 'user:bot'),
        )

        assert config.scopes == (Scope.USER_READ_CHAT, Scope.USER_BOT)
        assert config.access_token is None
        assert config.throw_rate_limit_errors is False

    def test_missing_client_id(self):
        with pytest.raises(HelixConfigError, match="client_id"):
            ClientConfig(client_id='', client_secret='secret')

    def test_missing_client_secret(self):
        with pytest.raises(HelixConfigError, match="client_secret"):
            ClientConfig(client_id='id', client_secret='')

    def test_unknown_scope(self):
        with pytest.raises(HelixConfigError, match="Unknown scopes"):
            ClientConfig(client_id='id', client_secret='secret', scopes=('user:fly',))

    def test_is_immutable(self, config):
        with pytest.raises(AttributeError):
            config.client_id = 'other'


class TestClientConfigFromEnv:
    """Tests for ClientConfig.from_env."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('TWITCH_CLIENT_ID', 'env_id')
        monkeypatch.setenv('TWITCH_CLIENT_SECRET', 'env_secret')
        monkeypatch.setenv('TWITCH_ACCESS_TOKEN', 'env_access')
        monkeypatch.setenv('TWITCH_REFRESH_TOKEN', 'env_refresh')
        monkeypatch.setenv('TWITCH_REDIRECT_URI', 'http://localhost:3000/callback')
        monkeypatch.setenv('TWITCH_SCOPES', 'user:read:chat moderation:read')
        monkeypatch.setenv('TWITCH_THROW_RATELIMIT_ERRORS', 'true')

        config = ClientConfig.from_env()

        assert config.client_id == 'env_id'
        assert config.client_secret == 'env_secret'
        assert config.access_token == 'env_access'
        assert config.refresh_token == 'env_refresh'
        assert config.redirect_uri == 'http://localhost:3000/callback'
        assert config.scopes == (Scope.USER_READ_CHAT, Scope.MODERATION_READ)
        assert config.throw_rate_limit_errors is True

    def test_from_env_missing_required(self, monkeypatch):
        monkeypatch.delenv('TWITCH_CLIENT_ID', raising=False)
        monkeypatch.setenv('TWITCH_CLIENT_SECRET', 'env_secret')

        with pytest.raises(HelixConfigError):
            ClientConfig.from_env()


# =============================================================================
# LocalCache Tests
# =============================================================================

@pytest.fixture
def cache_file(tmp_path):
    path = tmp_path / 'data' / 'apiUser.json'
    path.parent.mkdir()
    path.write_text(json.dumps({
        'access_token': 'test_access',
        'refresh_token': 'test_refresh',
        'client_id': 'test_client_id',
        'client_secret': 'test_client_secret',
    }))
    return path


class TestLocalCache:
    """Tests for LocalCache load/save."""

    def test_load(self, cache_file):
        cache = LocalCache.load(str(cache_file))

        assert cache == LocalCache(
            access_token='test_access',
            refresh_token='test_refresh',
            client_id='test_client_id',
            client_secret='test_client_secret',
        )

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(HelixConfigError):
            LocalCache.load(str(tmp_path / 'nonexistent.json'))

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / 'apiUser.json'
        path.write_text('{invalid json}')

        with pytest.raises(HelixDecodeError):
            LocalCache.load(str(path))

    def test_load_non_object(self, tmp_path):
        path = tmp_path / 'apiUser.json'
        path.write_text('["a", "b"]')

        with pytest.raises(HelixDecodeError):
            LocalCache.load(str(path))

    def test_partial_file_defaults_to_empty(self, tmp_path):
        path = tmp_path / 'apiUser.json'
        path.write_text('{"access_token": "only_this"}')

        cache = LocalCache.load(str(path))

        assert cache.access_token == 'only_this'
        assert cache.refresh_token == ''

    def test_save_creates_directories(self, tmp_path):
        path = tmp_path / 'nested' / 'dir' / 'apiUser.json'
        cache = LocalCache(access_token='a', refresh_token='r', client_id='c', client_secret='s')

        cache.save(str(path))

        assert json.loads(path.read_text()) == cache.to_dict()
        assert LocalCache.load(str(path)) == cache

    def test_field_accessors(self, cache_file):
        path = str(cache_file)

        assert get_local_access_token(path) == 'test_access'
        assert get_local_refresh_token(path) == 'test_refresh'
        assert get_local_client_id(path) == 'test_client_id'
        assert get_local_client_secret(path) == 'test_client_secret'

    def test_config_from_local_cache(self, cache_file):
        config = ClientConfig.from_local_cache(str(cache_file), scopes=(Scope.BITS_READ,))

        assert config.client_id == 'test_client_id'
        assert config.access_token == 'test_access'
        assert config.refresh_token == 'test_refresh'
        assert config.scopes == (Scope.BITS_READ,)
