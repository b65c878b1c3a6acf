"""Authenticated access to the WordPress REST API.

`ClientProvider` owns the single `WordPressClient` of the process. The server
builds one provider at startup, calls `initialize()` once and hands the provider
to the tool modules; nothing reaches for the client through module globals.
"""
from __future__ import annotations

import base64
import logging
from typing import Any, Mapping, Optional

import httpx

from core.config import ClientConfig
from core.errors import (
    AuthenticationError,
    NotInitializedError,
    RemoteApiError,
    RequestFailedError,
    SecurityError,
    WordPressError,
)
from utils.response_utils import is_html, parse_body

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "WordPress API request failed"

# substring in an HTML error page -> (error class, message)
HTML_ERROR_MARKERS = (
    (("incorrect_password",), AuthenticationError, "WordPress API Error: Incorrect password."),
    (("invalid_username",), AuthenticationError, "WordPress API Error: Invalid username."),
    (("nonce", "security check"), SecurityError, "WordPress API Error: Nonce or security check failed."),
)


def basic_auth_header(user: str, password: str) -> str:
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def classify_error(response: httpx.Response) -> WordPressError:
    """Turn a failed WordPress response into the matching WordPressError.

    The decoded body is kept as the error payload whatever the classification.
    """
    payload = parse_body(response)

    if is_html(response) and isinstance(payload, str):
        for markers, error_cls, message in HTML_ERROR_MARKERS:
            if any(marker in payload for marker in markers):
                return error_cls(message, payload=payload)
    elif isinstance(payload, dict) and payload.get("message"):
        return RemoteApiError(f"WordPress API Error: {payload['message']}", payload=payload)

    return RequestFailedError(f"{GENERIC_FAILURE} (HTTP {response.status_code})", payload=payload)


async def raise_on_error(response: httpx.Response) -> None:
    """httpx response hook: raise a classified WordPressError for any 4xx/5xx reply."""
    if not response.is_error:
        return
    await response.aread()
    error = classify_error(response)
    logger.warning(
        "%s %s failed with HTTP %s: %s",
        response.request.method,
        response.request.url.path,
        response.status_code,
        error.message,
    )
    raise error


class WordPressClient:
    """Thin wrapper over `httpx.AsyncClient` that returns decoded bodies."""

    def __init__(self, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.config = config
        headers = {}
        if config.credential is not None:
            headers["Authorization"] = basic_auth_header(config.credential.user, config.credential.app_password)
        self.http = httpx.AsyncClient(
            base_url=config.base_url,
            headers=headers,
            timeout=config.timeout,
            transport=transport,
            event_hooks={"response": [raise_on_error]},
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def headers(self) -> httpx.Headers:
        return self.http.headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self.http.request(method, path, params=params, json=json)
        except httpx.RequestError as e:
            logger.warning("%s %s could not be sent: %s", method, path, e)
            raise RequestFailedError(f"{GENERIC_FAILURE}: {e}") from e
        return parse_body(response)

    async def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, payload: Any) -> Any:
        return await self.request("POST", path, json=payload)

    async def delete(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("DELETE", path, params=params)


class ClientProvider:
    """Builds the WordPress client once and hands it out afterwards."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport
        self._client: Optional[WordPressClient] = None

    @property
    def initialized(self) -> bool:
        return self._client is not None

    def initialize(self, environ: Optional[Mapping[str, str]] = None) -> WordPressClient:
        """Read WP_URL / WP_APP_USER / WP_APP_PASSWORD and build the client.

        A second call returns the existing client without looking at the environment again.
        Raises ConfigurationError when WP_URL is missing.
        """
        if self._client is not None:
            return self._client

        config = ClientConfig.from_env(environ)
        if config.credential is None:
            logger.warning(
                "No application password credentials found (WP_APP_USER, WP_APP_PASSWORD). "
                "API requests might fail."
            )
        self._client = WordPressClient(config, transport=self._transport)
        logger.info(
            "WordPress client initialized for %s (authenticated=%s)",
            config.base_url,
            config.credential is not None,
        )
        return self._client

    def get_client(self) -> WordPressClient:
        if self._client is None:
            raise NotInitializedError("API client has not been initialized. Call initialize() first.")
        return self._client
