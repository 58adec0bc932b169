"""Async pull requests resource client."""

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from prdigest.clients.pulls import (
    DEFAULT_PER_PAGE,
    EnrichObserver,
    ListingWalk,
    ListObserver,
    expect_list,
    expect_object,
    parse_file,
    parse_pull_request,
)
from prdigest.filters import FileFilter
from prdigest.logging import get_logger, log_enrich_progress, log_list_progress
from prdigest.types.progress import EnrichProgress
from prdigest.types.pulls import File, PullRequest

if TYPE_CHECKING:
    from prdigest.async_transport import AsyncHTTPTransport

logger = get_logger()


class AsyncPullsClient:
    """Async client for pull request operations.

    Every request is awaited before the next one is issued.
    """

    def __init__(
        self,
        transport: "AsyncHTTPTransport",
        file_filter: FileFilter | None = None,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        """
        Initialize the async pulls client.

        Args:
            transport: Async HTTP transport for making requests
            file_filter: Files to leave out of enriched pull requests
            per_page: Page size requested from list endpoints
        """
        self.transport = transport
        self.file_filter = file_filter or FileFilter()
        self.per_page = per_page

    async def list_since(
        self,
        repo: str,
        since: datetime,
        on_page: ListObserver | None = log_list_progress,
    ) -> tuple[list[PullRequest], list[PullRequest]]:
        """
        List pull requests opened or closed after a cutoff.

        Returns:
            (open, closed) pull requests in listing order, not yet enriched
        """
        walk = ListingWalk(since)
        logger.info(
            "querying pull requests from %s opened or closed after %s",
            repo,
            walk.since.isoformat(),
        )

        url: str | None = f"/repos/{repo}/pulls"
        params: dict[str, Any] | None = {
            "state": "all",
            "sort": "updated",
            "direction": "desc",
            "per_page": self.per_page,
        }
        while url and not walk.done:
            page = await self.transport.get(url, params=params)
            walk.add_page(expect_list(page, url))
            if on_page is not None:
                on_page(walk.progress())
            url, params = page.next_url, None

        return walk.open, walk.closed

    async def get(self, url: str) -> PullRequest:
        """Get full pull request information."""
        page = await self.transport.get(url)
        return parse_pull_request(expect_object(page, url))

    async def list_files(self, url: str) -> list[File]:
        """List every file changed by a pull request, following pagination."""
        files: list[File] = []
        next_url: str | None = f"{url}/files"
        params: dict[str, Any] | None = {"per_page": self.per_page}
        while next_url:
            page = await self.transport.get(next_url, params=params)
            files.extend(parse_file(f) for f in expect_list(page, next_url))
            next_url, params = page.next_url, None
        return files

    async def enrich(
        self,
        prs: Sequence[PullRequest],
        on_record: EnrichObserver | None = log_enrich_progress,
    ) -> list[PullRequest]:
        """
        Fetch details and changed files for each pull request, in order.

        Returns:
            Enriched pull requests, same order as `prs`
        """
        logger.info("querying detailed info for each of %d pull requests", len(prs))
        enriched: list[PullRequest] = []
        for i, pr in enumerate(prs):
            detail = await self.get(pr.url)
            files = await self.list_files(pr.url)
            kept = self.file_filter.filter(files)
            if len(kept) != len(files):
                logger.debug(
                    "ignoring %d of %d files in #%d", len(files) - len(kept), len(files), pr.number
                )
            enriched.append(replace(detail, files=kept))
            if on_record is not None:
                on_record(EnrichProgress(done=i + 1, total=len(prs), number=pr.number))
        return enriched
