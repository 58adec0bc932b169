"""Pull requests resource client.

Walks the repository's pull request listing back to a cutoff and enriches
the retained pull requests with their details and changed files.
"""

from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from prdigest.exceptions import ServerError
from prdigest.filters import FileFilter
from prdigest.logging import get_logger, log_enrich_progress, log_list_progress
from prdigest.timestamps import ensure_aware, parse_timestamp
from prdigest.types.progress import EnrichProgress, ListProgress
from prdigest.types.pulls import File, PullRequest, User

if TYPE_CHECKING:
    from prdigest.transport import HTTPTransport, Page

DEFAULT_PER_PAGE = 100

ListObserver = Callable[[ListProgress], None]
EnrichObserver = Callable[[EnrichProgress], None]

logger = get_logger()


def parse_user(data: dict | None) -> User | None:
    """Parse a user object; None when the account is missing (deleted users)."""
    if not data:
        return None
    return User(
        login=data.get("login", ""),
        id=data.get("id", 0),
        html_url=data.get("html_url"),
        type=data.get("type", "User"),
        site_admin=data.get("site_admin", False),
    )


def parse_file(data: dict) -> File:
    """Parse one entry of a pull request's files list."""
    return File(
        filename=data["filename"],
        status=data.get("status", "modified"),
        additions=data.get("additions", 0),
        deletions=data.get("deletions", 0),
        changes=data.get("changes", 0),
        sha=data.get("sha"),
        previous_filename=data.get("previous_filename"),
    )


def parse_pull_request(data: dict) -> PullRequest:
    """Parse a pull request from a listing entry or a detail response."""
    return PullRequest(
        url=data["url"],
        id=data["id"],
        number=data["number"],
        state=data.get("state", ""),
        title=data.get("title", ""),
        html_url=data.get("html_url"),
        user=parse_user(data.get("user")),
        body=data.get("body"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        closed_at=data.get("closed_at"),
        merged_at=data.get("merged_at"),
        merge_commit_sha=data.get("merge_commit_sha"),
        merged=data.get("merged", False),
        mergeable=data.get("mergeable"),
        comments=data.get("comments", 0),
        review_comments=data.get("review_comments", 0),
        commits=data.get("commits", 0),
        additions=data.get("additions", 0),
        deletions=data.get("deletions", 0),
        changed_files=data.get("changed_files", 0),
    )


def expect_list(page: "Page", url: str) -> list[Any]:
    """Return the page body, which must be a JSON array."""
    if not isinstance(page.data, list):
        raise ServerError(
            "INVALID_RESPONSE",
            f"Expected a list, got {type(page.data).__name__}",
            url=url,
        )
    return page.data


def expect_object(page: "Page", url: str) -> dict[str, Any]:
    """Return the page body, which must be a JSON object."""
    if not isinstance(page.data, dict):
        raise ServerError(
            "INVALID_RESPONSE",
            f"Expected an object, got {type(page.data).__name__}",
            url=url,
        )
    return page.data


class ListingWalk:
    """
    Classification state of one walk over the pull request listing.

    The listing is sorted by last update, newest first, so the first closed
    pull request that closed at or before the cutoff ends the walk. Open pull
    requests never end it: an old one can still be open arbitrarily far back.
    """

    def __init__(self, since: datetime) -> None:
        self.since = ensure_aware(since)
        self.open: list[PullRequest] = []
        self.closed: list[PullRequest] = []
        self.total = 0
        self.pages = 0
        self.done = False

    def add_page(self, records: list[dict]) -> None:
        """
        Classify the records of one page, in order.

        Raises:
            FormatError: If a creation or close timestamp cannot be parsed
        """
        self.pages += 1
        self.total += len(records)
        for data in records:
            state = data.get("state")
            if state == "open":
                created_at = parse_timestamp(data.get("created_at"), "created_at")
                if created_at > self.since:
                    self.open.append(parse_pull_request(data))
            elif state == "closed":
                closed_at = parse_timestamp(data.get("closed_at"), "closed_at")
                if not closed_at > self.since:
                    self.done = True
                    break
                self.closed.append(parse_pull_request(data))

    def progress(self) -> ListProgress:
        return ListProgress(
            page=self.pages,
            open_count=len(self.open),
            closed_count=len(self.closed),
            total_count=self.total,
        )


class PullsClient:
    """Client for pull request operations."""

    def __init__(
        self,
        transport: "HTTPTransport",
        file_filter: FileFilter | None = None,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        """
        Initialize the pulls client.

        Args:
            transport: HTTP transport for making requests
            file_filter: Files to leave out of enriched pull requests
                (default: FileFilter with the default ignore patterns)
            per_page: Page size requested from list endpoints
        """
        self.transport = transport
        self.file_filter = file_filter or FileFilter()
        self.per_page = per_page

    def list_since(
        self,
        repo: str,
        since: datetime,
        on_page: ListObserver | None = log_list_progress,
    ) -> tuple[list[PullRequest], list[PullRequest]]:
        """
        List pull requests opened or closed after a cutoff.

        Args:
            repo: Repository in format owner/repo
            since: Cutoff; naive datetimes are taken as UTC
            on_page: Called after each page is classified (None to disable)

        Returns:
            (open, closed) pull requests in listing order, not yet enriched

        Raises:
            TransportError: If any page fetch fails
            FormatError: If a timestamp cannot be parsed
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
            page = self.transport.get(url, params=params)
            walk.add_page(expect_list(page, url))
            if on_page is not None:
                on_page(walk.progress())
            # Next links already carry the query string.
            url, params = page.next_url, None

        return walk.open, walk.closed

    def get(self, url: str) -> PullRequest:
        """
        Get full pull request information.

        Args:
            url: API URL of the pull request (``PullRequest.url``)

        Returns:
            PullRequest with detail-only fields (merged, comments, ...) set

        Raises:
            TransportError: If the fetch fails
        """
        page = self.transport.get(url)
        return parse_pull_request(expect_object(page, url))

    def list_files(self, url: str) -> list[File]:
        """
        List every file changed by a pull request, following pagination.

        Args:
            url: API URL of the pull request (``PullRequest.url``)

        Raises:
            TransportError: If any page fetch fails
        """
        files: list[File] = []
        next_url: str | None = f"{url}/files"
        params: dict[str, Any] | None = {"per_page": self.per_page}
        while next_url:
            page = self.transport.get(next_url, params=params)
            files.extend(parse_file(f) for f in expect_list(page, next_url))
            next_url, params = page.next_url, None
        return files

    def enrich(
        self,
        prs: Sequence[PullRequest],
        on_record: EnrichObserver | None = log_enrich_progress,
    ) -> list[PullRequest]:
        """
        Fetch details and changed files for each pull request, in order.

        The input records are left untouched; new records are returned with
        `files` set to the changed files that pass the file filter.

        Args:
            prs: Pull requests from list_since
            on_record: Called after each pull request is enriched (None to disable)

        Returns:
            Enriched pull requests, same order as `prs`

        Raises:
            TransportError: On the first failed fetch; later records are not fetched
        """
        logger.info("querying detailed info for each of %d pull requests", len(prs))
        enriched: list[PullRequest] = []
        for i, pr in enumerate(prs):
            detail = self.get(pr.url)
            files = self.list_files(pr.url)
            kept = self.file_filter.filter(files)
            if len(kept) != len(files):
                logger.debug(
                    "ignoring %d of %d files in #%d", len(files) - len(kept), len(files), pr.number
                )
            enriched.append(replace(detail, files=kept))
            if on_record is not None:
                on_record(EnrichProgress(done=i + 1, total=len(prs), number=pr.number))
        return enriched
