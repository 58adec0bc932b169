"""
prdigest async client.

Provides the async interface for collecting pull request statistics.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

from prdigest.async_clients import AsyncPullsClient
from prdigest.async_transport import AsyncHTTPTransport
from prdigest.client import validate_repo
from prdigest.clients.pulls import DEFAULT_PER_PAGE, EnrichObserver, ListObserver
from prdigest.config import DEFAULT_LOOKBACK, ClientConfig
from prdigest.filters import DEFAULT_IGNORE_PATTERNS
from prdigest.logging import get_logger, log_enrich_progress, log_list_progress
from prdigest.timestamps import ensure_aware
from prdigest.transport import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from prdigest.types.pulls import QueryResult

logger = get_logger()


class AsyncPRDigestClient:
    """
    Async client for collecting pull request statistics.

    Requests are awaited one at a time, in the same order as PRDigestClient.

    Example:
        ```python
        import asyncio
        from prdigest import AsyncPRDigestClient

        async def main():
            async with AsyncPRDigestClient.from_env() as client:
                result = await client.query("cockroachdb/cockroach")
                print(result.total)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = DEFAULT_BASE_URL
    DEFAULT_TIMEOUT = DEFAULT_TIMEOUT

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
        per_page: int = DEFAULT_PER_PAGE,
        lookback: timedelta = DEFAULT_LOOKBACK,
    ) -> None:
        """
        Initialize the async client.

        Args:
            token: API token (optional for public repositories)
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            ignore_patterns: File regexes left out of statistics
            per_page: Listing page size (default: 100)
            lookback: Cutoff window used when query() gets no `since` (default: 24h)
        """
        self.config = ClientConfig(
            token=token,
            base_url=base_url,
            timeout=timeout,
            per_page=per_page,
            lookback=lookback,
            ignore_patterns=tuple(ignore_patterns),
        )
        self.base_url = base_url
        self.timeout = timeout
        self.lookback = lookback

        # Raises ConfigurationError on an invalid pattern, before any client is opened.
        file_filter = self.config.file_filter()

        # Create async transport layer
        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
        )

        self.pulls = AsyncPullsClient(
            self._transport,
            file_filter=file_filter,
            per_page=per_page,
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> "AsyncPRDigestClient":
        """Create an async client from an existing ClientConfig."""
        return cls(
            token=config.token,
            base_url=config.base_url,
            timeout=config.timeout,
            ignore_patterns=config.ignore_patterns,
            per_page=config.per_page,
            lookback=config.lookback,
        )

    @classmethod
    def from_env(cls) -> "AsyncPRDigestClient":
        """
        Create an async client from environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls.from_config(ClientConfig.from_env())

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    def default_since(self, now: datetime | None = None) -> datetime:
        """Cutoff used when none is given: `now` minus the lookback window."""
        now = ensure_aware(now) if now is not None else datetime.now(timezone.utc)
        return now - self.lookback

    async def query(
        self,
        repo: str,
        since: datetime | None = None,
        on_page: ListObserver | None = log_list_progress,
        on_record: EnrichObserver | None = log_enrich_progress,
    ) -> QueryResult:
        """
        Query open and closed pull requests of a repository since a cutoff.

        Raises:
            ConfigurationError: If `repo` is malformed
            TransportError: If any fetch fails
            FormatError: If a listing timestamp cannot be parsed
        """
        repo = validate_repo(repo)
        since = ensure_aware(since) if since is not None else self.default_since()

        open_prs, closed_prs = await self.pulls.list_since(repo, since, on_page=on_page)
        open_prs = await self.pulls.enrich(open_prs, on_record=on_record)
        closed_prs = await self.pulls.enrich(closed_prs, on_record=on_record)

        logger.info(
            "collected %d open and %d closed pull requests from %s",
            len(open_prs),
            len(closed_prs),
            repo,
        )
        return QueryResult(repo=repo, since=since, open=open_prs, closed=closed_prs)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncPRDigestClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
