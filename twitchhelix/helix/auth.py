"""
Twitch authentication and token management.

Handles the client-credentials, authorization-code and refresh-token
grants against the identity service, token validation, and authorization
URL construction. This module owns the client's current credentials;
every other component reads them from here.
"""

import logging
import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable, Optional
from urllib.parse import urlencode

import requests
from pydantic import ValidationError
from requests.exceptions import RequestException

from twitchhelix.config import Settings
from twitchhelix.enums import scopes_to_strings
from twitchhelix.schemas.responses import TokenResponse

from .deadline import Deadline
from .events import EVENT_REFRESH, EVENT_USER_AUTH, EventEmitter
from .exceptions import (
    HelixAuthError,
    HelixDecodeError,
    HelixMissingTokenError,
    HelixTokenError,
    HelixTransportError,
)

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = "missing authorization token"


class AuthState(StrEnum):
    """Which kind of credential the client currently holds."""
    UNAUTHENTICATED = "unauthenticated"
    APP_TOKEN = "app_token"
    USER_TOKEN = "user_token"


@dataclass(frozen=True)
class Credentials:
    """
    The current access/refresh token pair.

    Instances are replaced on every exchange, never mutated, so a reader
    always sees a consistent pair.
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class HelixAuthManager:
    """
    Manages Twitch OAuth credentials for one client.

    Token acquisition and refresh are single-flight: concurrent callers
    that hit an expired token wait on one exchange instead of issuing
    their own.

    Example:
        auth = HelixAuthManager('client_id', 'client_secret')

        # App token on first use
        token = auth.ensure_token()

        # User consent flow
        url = auth.get_auth_url()
        auth.exchange_code(code)
    """

    # Twitch identity endpoints
    _TOKEN_URL = f"{Settings.ID_BASE_URL}/token"
    _VALIDATE_URL = f"{Settings.ID_BASE_URL}/validate"
    _AUTHORIZE_URL = f"{Settings.ID_BASE_URL}/authorize"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        scopes: Iterable = (),
        redirect_uri: Optional[str] = None,
        credentials: Optional[Credentials] = None,
        session: Optional[requests.Session] = None,
        emitter: Optional[EventEmitter] = None,
        timeout: float = Settings.REQUEST_TIMEOUT,
    ):
        self.client_id = client_id
        self._client_secret = client_secret
        self.scopes = tuple(scopes)
        self.redirect_uri = redirect_uri
        self._session = session or requests.Session()
        self._emitter = emitter or EventEmitter()
        self._timeout = timeout
        self._lock = threading.RLock()
        self.refresh_attempts = 0

        self._credentials = credentials or Credentials()
        if self._credentials.access_token:
            self._state = AuthState.USER_TOKEN
        else:
            self._state = AuthState.UNAUTHENTICATED

    # -----------------------------------------------------------------
    # Credential state
    # -----------------------------------------------------------------

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def access_token(self) -> Optional[str]:
        return self._credentials.access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._credentials.refresh_token

    @property
    def state(self) -> AuthState:
        return self._state

    def _replace(self, credentials: Credentials, state: AuthState) -> None:
        self._credentials = credentials
        self._state = state

    @property
    def _scope_string(self) -> str:
        return " ".join(scopes_to_strings(self.scopes))

    # -----------------------------------------------------------------
    # Identity service calls
    # -----------------------------------------------------------------

    def _post_token(self, data: dict, deadline: Deadline) -> TokenResponse:
        """POST a grant to the token endpoint and decode the result."""
        deadline.check()
        try:
            response = self._session.post(
                self._TOKEN_URL,
                data=data,
                timeout=deadline.request_timeout(self._timeout),
            )
        except RequestException as e:
            raise HelixTransportError(f"Token request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise HelixTokenError(
                f"Expected JSON but got: {response.text}"
            ) from e

        if not isinstance(payload, dict):
            raise HelixTokenError(f"Expected a JSON object but got: {payload!r}")

        if response.status_code != 200:
            error_msg = payload.get("message", response.text)
            raise HelixTokenError(f"Token exchange failed: {error_msg}")

        try:
            token = TokenResponse.model_validate(payload)
        except ValidationError as e:
            raise HelixTokenError(f"Malformed token response: {e}") from e

        if not token.access_token:
            raise HelixTokenError("no access_token in response")
        return token

    def get_app_access_token(self, deadline: Optional[Deadline] = None) -> str:
        """
        Exchange client credentials for an app access token.

        Returns:
            The new access token.

        Raises:
            HelixTokenError: If the grant is rejected or returns no token.
        """
        deadline = deadline or Deadline()
        data = {
            "client_id": self.client_id,
            "client_secret": self._client_secret,
            "grant_type": "client_credentials",
        }
        if self.scopes:
            data["scope"] = self._scope_string

        with self._lock:
            token = self._post_token(data, deadline)
            self._replace(
                Credentials(token.access_token, self.refresh_token),
                AuthState.APP_TOKEN,
            )
        logger.info("Obtained app access token")
        return token.access_token

    def ensure_token(self, deadline: Optional[Deadline] = None) -> str:
        """Return the current access token, fetching an app token if there is none."""
        token = self.access_token
        if token:
            return token

        with self._lock:
            if self.access_token:
                return self.access_token
            logger.info("No access token set, requesting app access token")
            return self.get_app_access_token(deadline)

    def validate(self, deadline: Optional[Deadline] = None) -> bool:
        """
        Ask the identity service whether the current access token is valid.

        Returns:
            False if there is no token or it is rejected, True otherwise.

        Raises:
            HelixMissingTokenError: If the service reports no token was sent.
        """
        token = self.access_token
        if not token:
            return False

        deadline = deadline or Deadline()
        deadline.check()
        try:
            response = self._session.get(
                self._VALIDATE_URL,
                headers={"Authorization": f"OAuth {token}"},
                timeout=deadline.request_timeout(self._timeout),
            )
        except RequestException as e:
            raise HelixTransportError(f"Token validation failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise HelixDecodeError(
                f"Expected JSON from validate but got: {response.text}"
            ) from e

        if isinstance(payload, dict) and payload.get("message") == MISSING_TOKEN_MESSAGE:
            raise HelixMissingTokenError(MISSING_TOKEN_MESSAGE)

        return response.status_code == 200

    def refresh(
        self,
        failed_token: Optional[str] = None,
        deadline: Optional[Deadline] = None,
    ) -> bool:
        """
        Refresh the access token after it was rejected.

        The existing token is validated first; a token that is still valid
        is kept. If another caller already rotated the token since
        ``failed_token`` was used, nothing is exchanged.

        Args:
            failed_token: The access token the rejected request carried.
            deadline: Time budget for the validation and exchange.

        Returns:
            True if a new token pair was obtained.

        Raises:
            HelixTokenError: If there is no refresh token or the grant fails.
        """
        deadline = deadline or Deadline()
        with self._lock:
            if failed_token is not None and self.access_token != failed_token:
                logger.debug("Access token already rotated, skipping refresh")
                return False

            if self.validate(deadline):
                logger.debug("Access token still valid, skipping refresh")
                return False

            if not self.refresh_token:
                if self._state == AuthState.APP_TOKEN:
                    logger.info("App access token rejected, requesting a new one")
                    self.get_app_access_token(deadline)
                    return True
                raise HelixTokenError("refresh token is not set")

            data = {
                "client_id": self.client_id,
                "client_secret": self._client_secret,
                "grant_type": "refresh_token",
                "refresh_token": self.refresh_token,
            }
            try:
                token = self._post_token(data, deadline)
            except HelixTokenError as e:
                self.refresh_attempts += 1
                logger.warning(
                    "Token refresh failed (attempt %d): %s",
                    self.refresh_attempts, e,
                )
                raise

            # Keep the old refresh token if the service did not rotate it.
            self._replace(
                Credentials(
                    token.access_token,
                    token.refresh_token or self.refresh_token,
                ),
                AuthState.USER_TOKEN,
            )
            logger.info("Successfully refreshed token")
            self._emitter.emit(EVENT_REFRESH, token)
            return True

    def exchange_code(
        self, code: str, deadline: Optional[Deadline] = None
    ) -> TokenResponse:
        """
        Exchange an authorization code for a user token pair.

        Raises:
            HelixAuthError: If the code is missing.
            HelixTokenError: If the exchange fails.
        """
        if not code:
            raise HelixAuthError("Authorization code is required")

        deadline = deadline or Deadline()
        data = {
            "client_id": self.client_id,
            "client_secret": self._client_secret,
            "code": code,
            "grant_type": "authorization_code",
        }
        if self.redirect_uri:
            data["redirect_uri"] = self.redirect_uri

        with self._lock:
            token = self._post_token(data, deadline)
            self._replace(
                Credentials(
                    token.access_token,
                    token.refresh_token or self.refresh_token,
                ),
                AuthState.USER_TOKEN,
            )
            logger.info("Successfully exchanged code for token")
            self._emitter.emit(EVENT_USER_AUTH, token)
        return token

    def get_auth_url(self, state: Optional[str] = None) -> str:
        """
        Generate the user consent URL.

        Args:
            state: Optional state parameter for CSRF protection.
        """
        params = {
            "client_id": self.client_id,
            "response_type": "code",
        }
        if self.redirect_uri:
            params["redirect_uri"] = self.redirect_uri
        if self.scopes:
            params["scope"] = self._scope_string
        if state:
            params["state"] = state

        return f"{self._AUTHORIZE_URL}?{urlencode(params)}"
