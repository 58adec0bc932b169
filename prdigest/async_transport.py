"""
Async HTTP Transport for prdigest.

Same behaviour as HTTPTransport on top of the httpx async client.
"""

import time
from typing import Any

import httpx

from prdigest.exceptions import ServerError
from prdigest.logging import log_http_request, log_http_response
from prdigest.transport import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    Page,
    default_headers,
    parse_page,
)


class AsyncHTTPTransport:
    """
    Async HTTP transport layer for GitHub API reads.

    Handles:
    - Token authentication and API version headers
    - Link header pagination (``rel="next"``)
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Personal access or app token (optional for public repositories)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=default_headers(token),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get(self, url: str, params: dict[str, Any] | None = None) -> Page:
        """
        Fetch one page.

        Args:
            url: API path or absolute URL from a previous response
            params: Query parameters

        Returns:
            Decoded body and next page link

        Raises:
            TransportError: On network failures and error responses
        """
        log_http_request("GET", url, dict(self._client.headers), params)
        start = time.monotonic()
        try:
            response = await self._client.request("GET", url, params=params)
        except httpx.RequestError as e:
            raise ServerError("CONNECTION_ERROR", str(e), url=url) from e

        page = parse_page(response, url)
        log_http_response(
            response.status_code,
            url,
            elapsed_ms=(time.monotonic() - start) * 1000,
            next_url=page.next_url,
        )
        return page
