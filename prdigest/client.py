"""
prdigest main client.

Provides the primary interface for collecting recent pull requests of a
repository together with their change statistics.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

from prdigest.clients import PullsClient
from prdigest.clients.pulls import DEFAULT_PER_PAGE, EnrichObserver, ListObserver
from prdigest.config import DEFAULT_LOOKBACK, ClientConfig
from prdigest.exceptions import ConfigurationError
from prdigest.filters import DEFAULT_IGNORE_PATTERNS, FileFilter
from prdigest.logging import get_logger, log_enrich_progress, log_list_progress
from prdigest.timestamps import ensure_aware
from prdigest.transport import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HTTPTransport
from prdigest.types.pulls import QueryResult

logger = get_logger()


def validate_repo(repo: str) -> str:
    """Return `repo` stripped, raising if it is not of the form owner/name."""
    repo = repo.strip().strip("/")
    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        raise ConfigurationError(f"Repository must be given as owner/name, got {repo!r}")
    return repo


class PRDigestClient:
    """
    Main client for collecting pull request statistics.

    Example:
        ```python
        from prdigest import PRDigestClient, stats

        with PRDigestClient.from_env() as client:
            result = client.query("cockroachdb/cockroach")

        for pr in result.closed:
            print(pr.number, stats.size_class(pr), stats.total_changes(pr))
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
        Initialize the client.

        Args:
            token: API token (optional for public repositories)
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            ignore_patterns: File regexes left out of statistics (default: protobuf outputs, css)
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

        # Create transport layer
        self._transport = HTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
        )

        self.pulls = PullsClient(
            self._transport,
            file_filter=file_filter,
            per_page=per_page,
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> "PRDigestClient":
        """Create a client from an existing ClientConfig."""
        return cls(
            token=config.token,
            base_url=config.base_url,
            timeout=config.timeout,
            ignore_patterns=config.ignore_patterns,
            per_page=config.per_page,
            lookback=config.lookback,
        )

    @classmethod
    def from_env(cls) -> "PRDigestClient":
        """
        Create a client from environment variables.

        See prdigest.config for the variables read.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls.from_config(ClientConfig.from_env())

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    @property
    def file_filter(self) -> FileFilter:
        return self.pulls.file_filter

    def default_since(self, now: datetime | None = None) -> datetime:
        """Cutoff used when none is given: `now` minus the lookback window."""
        now = ensure_aware(now) if now is not None else datetime.now(timezone.utc)
        return now - self.lookback

    def query(
        self,
        repo: str,
        since: datetime | None = None,
        on_page: ListObserver | None = log_list_progress,
        on_record: EnrichObserver | None = log_enrich_progress,
    ) -> QueryResult:
        """
        Query open and closed pull requests of a repository since a cutoff.

        Lists the pull requests, then enriches the open ones, then the closed
        ones. Any failure aborts the whole query.

        Args:
            repo: Repository in format owner/repo
            since: Cutoff (default: now minus the lookback window)
            on_page: Listing progress observer (None to disable)
            on_record: Enrichment progress observer (None to disable)

        Returns:
            QueryResult with enriched open and closed pull requests

        Raises:
            ConfigurationError: If `repo` is malformed
            TransportError: If any fetch fails
            FormatError: If a listing timestamp cannot be parsed
        """
        repo = validate_repo(repo)
        since = ensure_aware(since) if since is not None else self.default_since()

        open_prs, closed_prs = self.pulls.list_since(repo, since, on_page=on_page)
        open_prs = self.pulls.enrich(open_prs, on_record=on_record)
        closed_prs = self.pulls.enrich(closed_prs, on_record=on_record)

        logger.info(
            "collected %d open and %d closed pull requests from %s",
            len(open_prs),
            len(closed_prs),
            repo,
        )
        return QueryResult(repo=repo, since=since, open=open_prs, closed=closed_prs)

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "PRDigestClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
