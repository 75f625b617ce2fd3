"""
Request pipeline for the Twitch Helix API.

Every endpoint call passes through HelixHTTPClient: it makes sure a token
exists, attaches the Client-ID and bearer headers, publishes rate-limit
telemetry, refreshes credentials on 401 and backs off on 429.
"""

import json
import logging
from typing import Any, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError
from requests.exceptions import RequestException

from twitchhelix.config import Settings
from twitchhelix.schemas.responses import ResponseError

from .auth import HelixAuthManager
from .deadline import Deadline
from .events import EVENT_RATELIMIT, EVENT_RATELIMIT_POLL, EventEmitter
from .exceptions import (
    HelixAPIError,
    HelixDecodeError,
    HelixPreconditionError,
    HelixRateLimitError,
    HelixTokenExpiredError,
    HelixTransportError,
)
from .ratelimit import extract_rate_limit, retry_delay

logger = logging.getLogger(__name__)

API_HELIX = "helix"
API_INGEST = "ingest"

T = TypeVar("T", bound=BaseModel)


def decode_response(body: bytes, model: Type[T]) -> T:
    """
    Decode a raw response body into a response record.

    Raises:
        HelixAPIError: If the body is a Helix error payload.
        HelixDecodeError: If the body is not JSON of the expected shape.
    """
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as e:
        raise HelixDecodeError(f"failed to unmarshal JSON: {e}") from e

    if isinstance(payload, dict) and "error" in payload and "status" in payload:
        try:
            error = ResponseError.model_validate(payload)
        except ValidationError as e:
            raise HelixDecodeError(f"Malformed error response: {e}") from e
        if error.is_error:
            raise HelixAPIError(
                f"API error {error.status}: {error.message or error.error}",
                status=error.status,
            )

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise HelixDecodeError(
            f"Response does not match {model.__name__}: {e}"
        ) from e


def _json_body(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    return data


class HelixHTTPClient:
    """
    HTTP client for Helix API requests.

    Handles authorization headers, token refresh on 401 and rate limit
    backoff on 429. Transport errors are not retried.
    """

    def __init__(
        self,
        auth: HelixAuthManager,
        emitter: Optional[EventEmitter] = None,
        session: Optional[requests.Session] = None,
        throw_rate_limit_errors: bool = False,
        base_url: str = Settings.HELIX_BASE_URL,
        ingest_base_url: str = Settings.INGEST_BASE_URL,
        timeout: float = Settings.REQUEST_TIMEOUT,
        max_retries: int = Settings.MAX_RETRIES,
    ):
        """
        Initialize the HTTP client.

        Args:
            auth: Owner of the client's credentials.
            emitter: Registry that receives rate-limit events.
            session: Shared requests session (one is created if omitted).
            throw_rate_limit_errors: Raise on 429 instead of sleeping.
            base_url: Helix API base URL.
            ingest_base_url: Ingest service base URL.
            timeout: Per-attempt transport timeout in seconds.
            max_retries: Retries allowed after the first attempt.
        """
        self._auth = auth
        self._emitter = emitter or EventEmitter()
        self._session = session or requests.Session()
        self.throw_rate_limit_errors = throw_rate_limit_errors
        self.base_url = base_url
        self.ingest_base_url = ingest_base_url
        self._timeout = timeout
        self._max_retries = max_retries

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    # -----------------------------------------------------------------
    # Public HTTP methods
    # -----------------------------------------------------------------

    def get(
        self,
        endpoint: str,
        api: str = API_HELIX,
        deadline: Optional[Deadline] = None,
    ) -> bytes:
        """Send a GET request against the Helix or ingest base."""
        logger.debug("GET: Endpoint(%s)", endpoint)
        return self._request("GET", endpoint, api=api, deadline=deadline)

    def post(self, endpoint: str, data: Any = None, deadline: Optional[Deadline] = None) -> bytes:
        """Send a POST request."""
        return self._update("POST", endpoint, data, deadline)

    def put(self, endpoint: str, data: Any = None, deadline: Optional[Deadline] = None) -> bytes:
        """Send a PUT request."""
        return self._update("PUT", endpoint, data, deadline)

    def patch(self, endpoint: str, data: Any = None, deadline: Optional[Deadline] = None) -> bytes:
        """Send a PATCH request."""
        return self._update("PATCH", endpoint, data, deadline)

    def delete(self, endpoint: str, data: Any = None, deadline: Optional[Deadline] = None) -> bytes:
        """Send a DELETE request."""
        return self._update("DELETE", endpoint, data, deadline)

    # -----------------------------------------------------------------
    # Internal request handling
    # -----------------------------------------------------------------

    def _update(
        self,
        method: str,
        endpoint: str,
        data: Any,
        deadline: Optional[Deadline],
    ) -> bytes:
        if not endpoint.startswith("/"):
            raise HelixPreconditionError(
                "endpoint must start with a '/' (forward slash)"
            )
        logger.debug("%s: Endpoint(%s)", method, endpoint)
        return self._request(method, endpoint, data=data, deadline=deadline)

    def _base_for(self, api: str) -> str:
        if api == API_INGEST:
            return self.ingest_base_url
        return self.base_url

    def _request(
        self,
        method: str,
        endpoint: str,
        api: str = API_HELIX,
        data: Any = None,
        deadline: Optional[Deadline] = None,
    ) -> bytes:
        """
        Execute a request with token refresh and rate limit handling.

        On 401 the credentials are refreshed once and the request is
        re-issued with the new token; that re-issue does not count against
        the retry budget. On 429 the call either raises or sleeps until the
        bucket resets and tries again, at most max_retries times.
        """
        deadline = deadline or Deadline()
        url = f"{self._base_for(api)}{endpoint}"
        json_body = _json_body(data) if data is not None else None
        token_refreshed = False
        rate_limit_retries = 0
        attempts = self._max_retries + 1

        while True:
            deadline.check()
            token = self._auth.ensure_token(deadline)

            headers = {
                "Client-ID": self._auth.client_id,
                "Authorization": f"Bearer {token}",
            }
            if json_body is not None:
                headers["Content-Type"] = "application/json"

            try:
                response = self._session.request(
                    method,
                    url,
                    headers=headers,
                    json=json_body,
                    timeout=deadline.request_timeout(self._timeout),
                )
            except RequestException as e:
                raise HelixTransportError(f"Network error: {e}") from e

            rate_limit = extract_rate_limit(response.headers)
            self._emitter.emit(EVENT_RATELIMIT_POLL, rate_limit)

            # --- 401 Unauthorized: refresh once, then re-issue ---
            if response.status_code == 401:
                if token_refreshed:
                    raise HelixTokenExpiredError("Token expired or invalid")
                logger.info("401 received, attempting token refresh")
                self._auth.refresh(failed_token=token, deadline=deadline)
                token_refreshed = True
                continue

            # --- 429 Rate Limited ---
            if response.status_code == 429:
                self._emitter.emit(EVENT_RATELIMIT, rate_limit)
                if self.throw_rate_limit_errors:
                    raise HelixRateLimitError(rate_limit)
                if rate_limit_retries >= self._max_retries:
                    raise HelixRateLimitError(
                        rate_limit,
                        f"Rate limited after {attempts} attempts",
                    )
                delay = retry_delay(rate_limit, rate_limit_retries)
                rate_limit_retries += 1
                logger.warning(
                    "Rate limited (429), retry %d/%d in %ss",
                    rate_limit_retries, self._max_retries, delay,
                )
                deadline.sleep(delay)
                continue

            return response.content
