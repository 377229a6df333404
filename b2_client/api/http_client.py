"""
Async HTTP client for the B2 API.

Provides a clean interface for making API requests with error handling.
Authorization tokens are passed in per request; this layer keeps no session.
"""

import asyncio
from collections.abc import AsyncIterable
from typing import Any

import httpx
import structlog

from b2_client.config import B2Config
from b2_client.exceptions import RemoteAPIError

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "authorizationToken",
        "applicationKey",
        "Authorization",
        "authorization",
    }
)


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


class AsyncHttpClient:
    """Async HTTP client for the B2 API."""

    def __init__(
        self,
        config: B2Config,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            transport: Optional transport for testing (mock transport).
        """
        self._config = config
        self._transport = transport

        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def __aenter__(self) -> "AsyncHttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=self._config.timeout,
                    transport=self._transport,
                    headers={"User-Agent": self._config.user_agent},
                )
        return self._client

    async def _close(self) -> None:
        async with self._client_lock:
            if self._client is None:
                logger.debug("Client not open.")
                return
            await self._client.aclose()
            self._client = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def operation_url(self, base_url: str, operation: str) -> str:
        """Full URL of an API operation, e.g. ``{apiUrl}/b2api/v1/b2_list_buckets``."""
        return self._config.endpoint(base_url, operation)

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
        content: bytes | AsyncIterable[bytes] | None = None,
    ) -> dict[str, Any]:
        """
        Make an API request.

        Args:
            method: HTTP method (GET, POST, etc.).
            url: Full URL of the API operation.
            json: JSON body.
            headers: Extra request headers (e.g. Authorization).
            auth: Basic-auth (username, password) pair.
            content: Raw request body, possibly streamed.

        Returns:
            Response JSON data.

        Raises:
            RemoteAPIError: If the service answers with a non-success status
                or an unparseable body.
            httpx.HTTPError: If the request fails due to network issues.
        """
        if self._client is None:
            msg = "HTTP client not initialized. Use 'async with' first."
            raise RuntimeError(msg)

        logger.debug("API request", method=method, url=url)
        response = await self._client.request(
            method=method,
            url=url,
            json=json,
            headers=headers,
            auth=auth,
            content=content,
        )

        if not response.is_success:
            self._raise_api_error(response, url)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteAPIError(
                "Invalid JSON response from API",
                status=response.status_code,
                endpoint=url,
                body=response.text,
            ) from e

    @staticmethod
    def _raise_api_error(response: httpx.Response, endpoint: str) -> None:
        try:
            body: Any = response.json()
        except ValueError:
            body = response.text

        if isinstance(body, dict):
            message = body.get("message") or response.reason_phrase
            code = body.get("code")
            logger.warning(
                "API request failed",
                status=response.status_code,
                endpoint=endpoint,
                body=sanitize_for_log(body),
            )
        else:
            message = response.reason_phrase or "Unknown error"
            code = None
            logger.warning("API request failed", status=response.status_code, endpoint=endpoint)

        raise RemoteAPIError(
            message,
            status=response.status_code,
            code=code,
            endpoint=endpoint,
            body=body,
        )
