"""
Mock transports for testing.

Provides MockTransport and MockAsyncTransport that serve configured pages
by URL and record every request, without touching the network.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from prdigest.exceptions import NotFoundError
from prdigest.transport import DEFAULT_BASE_URL, Page


@dataclass
class MockResponse:
    """Configuration for a mock response."""

    data: Any
    next_url: str | None = None
    error: Exception | None = None
    call_count: int = 0


@dataclass
class MockCall:
    """Record of a request."""

    method: str
    url: str
    params: dict[str, Any] | None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class _MockTransportBase:
    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        """
        Initialize the mock transport.

        Args:
            base_url: Base URL used to build pagination links
        """
        self.base_url = base_url.rstrip("/")
        self._responses: dict[str, MockResponse] = {}
        self._calls: list[MockCall] = []

    def configure_page(self, url: str, data: Any, next_url: str | None = None) -> None:
        """Serve `data` (and an optional next link) for requests to `url`."""
        self._responses[url] = MockResponse(data=data, next_url=next_url)

    def configure_error(self, url: str, error: Exception) -> None:
        """Raise `error` for requests to `url`."""
        self._responses[url] = MockResponse(data=None, error=error)

    def configure_listing(self, repo: str, pages: list[list[dict[str, Any]]]) -> list[str]:
        """
        Serve a paginated pull request listing.

        Args:
            repo: Repository in format owner/repo
            pages: Records of each page, first page first

        Returns:
            URL of each page, in order
        """
        urls = [f"/repos/{repo}/pulls"] + [
            f"{self.base_url}/repos/{repo}/pulls?state=all&sort=updated&direction=desc&page={n}"
            for n in range(2, len(pages) + 1)
        ]
        for i, records in enumerate(pages):
            next_url = urls[i + 1] if i + 1 < len(urls) else None
            self.configure_page(urls[i], records, next_url)
        return urls

    def configure_pull_request(
        self,
        data: dict[str, Any],
        files: list[dict[str, Any]] | None = None,
    ) -> None:
        """Serve the detail and files endpoints of one pull request."""
        self.configure_page(data["url"], data)
        self.configure_page(f"{data['url']}/files", files or [])

    def _fetch(self, url: str, params: dict[str, Any] | None) -> Page:
        self._calls.append(MockCall(method="GET", url=url, params=params))
        resp = self._responses.get(url)
        if resp is None:
            raise NotFoundError(
                "NOT_FOUND", f"No mock response configured for {url}", status_code=404, url=url
            )
        resp.call_count += 1
        if resp.error:
            raise resp.error
        return Page(data=resp.data, next_url=resp.next_url)

    def was_called(self, url: str) -> bool:
        """Check whether `url` was requested."""
        return any(call.url == url for call in self._calls)

    def call_count(self, url: str) -> int:
        """Get the number of requests made to `url`."""
        return sum(1 for call in self._calls if call.url == url)

    def get_calls(self, url: str | None = None) -> list[MockCall]:
        """Get recorded calls, optionally filtered by URL."""
        if url is None:
            return list(self._calls)
        return [call for call in self._calls if call.url == url]

    @property
    def requested_urls(self) -> list[str]:
        """URLs requested so far, in request order."""
        return [call.url for call in self._calls]

    def reset(self) -> None:
        """Reset all recorded calls and configured responses."""
        self._calls.clear()
        self._responses.clear()


class MockTransport(_MockTransportBase):
    """
    Mock HTTPTransport for testing.

    Example:
        ```python
        from prdigest.clients import PullsClient
        from prdigest.testing import MockTransport, create_mock_pull_request_data

        transport = MockTransport()
        transport.configure_listing("octo/repo", [[create_mock_pull_request_data(1)]])

        open_prs, closed_prs = PullsClient(transport).list_since("octo/repo", since)
        assert transport.call_count("/repos/octo/repo/pulls") == 1
        ```
    """

    def get(self, url: str, params: dict[str, Any] | None = None) -> Page:
        """Mock get method."""
        return self._fetch(url, params)

    def close(self) -> None:
        """No-op for compatibility with the real transport."""
        pass

    def __enter__(self) -> "MockTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class MockAsyncTransport(_MockTransportBase):
    """Mock AsyncHTTPTransport for testing."""

    async def get(self, url: str, params: dict[str, Any] | None = None) -> Page:
        """Mock get method."""
        return self._fetch(url, params)

    async def close(self) -> None:
        """No-op for compatibility with the real transport."""
        pass

    async def __aenter__(self) -> "MockAsyncTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


__all__ = [
    "MockTransport",
    "MockAsyncTransport",
    "MockCall",
    "MockResponse",
]
