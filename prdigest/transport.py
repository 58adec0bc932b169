"""
HTTP Transport for prdigest.

Handles HTTP communication with the GitHub REST API: authentication headers,
pagination links and error responses mapped to typed exceptions.
"""

import time
from dataclasses import dataclass
from typing import Any

import httpx

from prdigest import __version__
from prdigest.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    TransportError,
    ValidationError,
)
from prdigest.logging import log_http_request, log_http_response

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


@dataclass
class Page:
    """One decoded response body and the link to the following page."""

    data: Any
    next_url: str | None = None


def default_headers(token: str | None) -> dict[str, str]:
    """Headers sent with every API request."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
        "User-Agent": f"prdigest/{__version__}",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def parse_page(response: httpx.Response, url: str) -> Page:
    """
    Turn a response into a Page, raising for error statuses.

    Raises:
        TransportError: On any status >= 400 or a body that is not JSON
    """
    if response.status_code >= 400:
        raise parse_error_response(response, url)

    try:
        data = response.json()
    except ValueError as e:
        raise ServerError(
            "INVALID_RESPONSE",
            f"Response body is not JSON: {e}",
            response.headers.get("X-GitHub-Request-Id"),
            response.status_code,
            url,
        ) from e

    next_url = response.links.get("next", {}).get("url")
    return Page(data=data, next_url=next_url)


def parse_error_response(response: httpx.Response, url: str | None = None) -> TransportError:
    """
    Parse an error response into a typed exception.

    Args:
        response: HTTP response with error status
        url: URL that was requested

    Returns:
        Appropriate TransportError subclass
    """
    try:
        data = response.json()
    except Exception:
        data = {}
    if not isinstance(data, dict):
        data = {}

    status_code = response.status_code
    message = data.get("message") or f"HTTP {status_code}"
    request_id = response.headers.get("X-GitHub-Request-Id")

    if status_code == 429 or (
        status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
    ):
        reset_str = response.headers.get("X-RateLimit-Reset")
        try:
            reset_at = int(reset_str) if reset_str is not None else None
        except ValueError:
            reset_at = None
        return RateLimitedError("RATE_LIMITED", message, reset_at, request_id, status_code, url)
    elif status_code == 401:
        return AuthenticationError("UNAUTHORIZED", message, request_id, status_code, url)
    elif status_code == 403:
        return AuthorizationError("FORBIDDEN", message, request_id, status_code, url)
    elif status_code == 404:
        return NotFoundError("NOT_FOUND", message, request_id, status_code, url)
    elif status_code >= 500:
        return ServerError("SERVER_ERROR", message, request_id, status_code, url)
    else:
        return ValidationError("CLIENT_ERROR", message, request_id, status_code, url)


class HTTPTransport:
    """
    HTTP transport layer for GitHub API reads.

    Handles:
    - Token authentication and API version headers
    - Link header pagination (``rel="next"``)
    - Error response parsing into typed exceptions

    Requests are made exactly once; failures are raised to the caller.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Personal access or app token (optional for public repositories)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=default_headers(token),
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(self, url: str, params: dict[str, Any] | None = None) -> Page:
        """
        Fetch one page.

        Args:
            url: API path (e.g., "/repos/o/r/pulls") or absolute URL from a
                previous response
            params: Query parameters

        Returns:
            Decoded body and next page link

        Raises:
            TransportError: On network failures and error responses
        """
        log_http_request("GET", url, dict(self._client.headers), params)
        start = time.monotonic()
        try:
            response = self._client.request("GET", url, params=params)
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
