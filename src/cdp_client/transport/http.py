"""
Async HTTP transport for the CDP platform API.

ApiClient owns one aiohttp session. Each attempt of each request is signed
with a fresh JWT from the Authenticator; connection failures are retried by
the transport's backoff policy, while error responses are mapped to the
APIError hierarchy and raised immediately.
"""

from __future__ import annotations
import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from ..auth.authenticator import Authenticator, RequestDescriptor
from ..config import ClientConfig
from ..recovery.retry import ExponentialBackoff, MaxRetriesExceeded, RetryPolicy
from ..runtime.errors import NetworkError, api_error_from_response


logger = logging.getLogger(__name__)


class ApiClient:
    """
    Authenticated JSON client for the platform REST API.

    Usage:
        async with ApiClient(ClientConfig.from_json("~/cdp_api_key.json")) as client:
            transfer = await Transfer.fetch(client, wallet_id, address_id, transfer_id)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        authenticator: Optional[Authenticator] = None,
        session: Optional[aiohttp.ClientSession] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration; an empty config defers the
                ConfigurationError to the first request
            authenticator: Pre-built authenticator (overrides the config key)
            session: Externally owned aiohttp session
            retry_policy: Policy for connection-level failures
        """
        self.config = config or ClientConfig()

        if authenticator is None:
            credential = None
            if self.config.api_key_name or self.config.private_key:
                credential = self.config.credential()
            authenticator = Authenticator(credential)
        self.authenticator = authenticator

        self._session = session
        self._owns_session = session is None
        self.retry_policy = retry_policy or ExponentialBackoff(
            max_attempts=self.config.max_retries + 1,
            base_delay=self.config.retry_delay,
            factor=self.config.retry_backoff,
            retryable_exceptions=(aiohttp.ClientError, asyncio.TimeoutError),
        )

        if self.config.debug:
            logging.getLogger("cdp_client").setLevel(logging.DEBUG)

    @property
    def base_path(self) -> str:
        return self.config.base_path.rstrip("/")

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout)
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def url_for(self, path: str) -> str:
        return f"{self.base_path}/{path.lstrip('/')}"

    async def _send(self, method: str, url: str, params: Optional[Dict[str, Any]],
                    body: Optional[Dict[str, Any]]) -> Any:
        headers = self.authenticator.authenticate_request(
            RequestDescriptor(method=method, url=url), debug=self.config.debug
        )
        session = self._get_session()

        async with session.request(method, url, params=params, json=body, headers=headers) as response:
            text = await response.text()
            try:
                data = json.loads(text) if text else None
            except json.JSONDecodeError:
                data = text

            if self.config.debug:
                logger.debug(f"API RESPONSE: Status: {response.status} URL: {url} Data: {data}")

            if response.status >= 400:
                raise api_error_from_response(response.status, data)
            return data

    async def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                      json: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send an authenticated request.

        Args:
            method: HTTP method
            path: Path below the base path, e.g. ``/v1/wallets/w/addresses/a/transfers``
            params: Query parameters
            json: JSON body

        Returns:
            Decoded JSON response body

        Raises:
            APIError: On an error response
            NetworkError: When connection failures outlast the retry policy
            ConfigurationError: If no API key is configured
        """
        method = method.upper()
        url = self.url_for(path)
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            return await self.retry_policy.execute(self._send, method, url, params, json)
        except MaxRetriesExceeded as e:
            raise NetworkError(
                f"{method} {url} failed after {e.attempts} attempts",
                details={"method": method, "url": url},
                cause=e.last_error,
            )

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None,
                   params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, params=params, json=json)


__all__ = ["ApiClient"]
