"""
Pytest fixtures and payload builders for prdigest testing.

The `create_mock_*_data` helpers build GitHub API JSON payloads; the
`create_mock_*` helpers build parsed model objects.
"""

from datetime import datetime, timezone
from typing import Any, Generator

import pytest

from prdigest.testing.mock import MockAsyncTransport, MockTransport
from prdigest.transport import DEFAULT_BASE_URL
from prdigest.types.pulls import File, PullRequest, User

MOCK_REPO = "octo/repo"


def make_iso_timestamp(dt: datetime) -> str:
    """Convert a datetime to the API's RFC 3339 format with Z suffix."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def _wire(value: datetime | str | None) -> str | None:
    if isinstance(value, datetime):
        return make_iso_timestamp(value)
    return value


def create_mock_user_data(login: str = "octocat", user_id: int = 1) -> dict[str, Any]:
    """Build a user payload."""
    return {
        "login": login,
        "id": user_id,
        "html_url": f"https://github.com/{login}",
        "type": "User",
        "site_admin": False,
    }


def create_mock_pull_request_data(
    number: int = 1,
    state: str = "open",
    created_at: datetime | str | None = "2024-06-01T00:00:00Z",
    closed_at: datetime | str | None = None,
    merged_at: datetime | str | None = None,
    repo: str = MOCK_REPO,
    **overrides: Any,
) -> dict[str, Any]:
    """
    Build a pull request payload as returned by the listing endpoint.

    Args:
        number: Pull request number
        state: "open" or "closed"
        created_at: Creation time (datetime or wire string)
        closed_at: Close time (datetime or wire string)
        merged_at: Merge time (datetime or wire string)
        repo: Repository in format owner/repo
        **overrides: Extra or replacement payload fields

    Example:
        ```python
        data = create_mock_pull_request_data(7, state="closed", closed_at=now, merged=True)
        ```
    """
    data: dict[str, Any] = {
        "url": f"{DEFAULT_BASE_URL}/repos/{repo}/pulls/{number}",
        "id": 1000 + number,
        "number": number,
        "state": state,
        "title": f"Pull request {number}",
        "html_url": f"https://github.com/{repo}/pull/{number}",
        "user": create_mock_user_data(),
        "body": None,
        "created_at": _wire(created_at),
        "updated_at": _wire(closed_at) or _wire(created_at),
        "closed_at": _wire(closed_at),
        "merged_at": _wire(merged_at),
        "merge_commit_sha": None,
    }
    data.update(overrides)
    return data


def create_mock_file_data(
    filename: str = "main.go",
    additions: int = 1,
    deletions: int = 0,
    status: str = "modified",
    changes: int | None = None,
) -> dict[str, Any]:
    """Build one entry of a pull request's files payload."""
    return {
        "sha": "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391",
        "filename": filename,
        "status": status,
        "additions": additions,
        "deletions": deletions,
        "changes": additions + deletions if changes is None else changes,
    }


def create_mock_file(
    filename: str = "main.go",
    additions: int = 1,
    deletions: int = 0,
    status: str = "modified",
    changes: int | None = None,
) -> File:
    """Build a File object."""
    return File(
        filename=filename,
        status=status,
        additions=additions,
        deletions=deletions,
        changes=additions + deletions if changes is None else changes,
    )


def create_mock_pull_request(
    number: int = 1,
    state: str = "open",
    files: list[File] | None = None,
    repo: str = MOCK_REPO,
    **kwargs: Any,
) -> PullRequest:
    """Build a PullRequest object; `kwargs` set any other field."""
    defaults: dict[str, Any] = {
        "title": f"Pull request {number}",
        "user": User(login="octocat", id=1),
        "created_at": "2024-06-01T00:00:00Z",
    }
    defaults.update(kwargs)
    return PullRequest(
        url=f"{DEFAULT_BASE_URL}/repos/{repo}/pulls/{number}",
        id=1000 + number,
        number=number,
        state=state,
        files=files or [],
        **defaults,
    )


# ============================================================================
# Mock Transport Fixtures
# ============================================================================


@pytest.fixture
def mock_transport() -> Generator[MockTransport, None, None]:
    """
    Provide a MockTransport for testing.

    Example:
        ```python
        def test_listing(mock_transport, mock_repo):
            mock_transport.configure_listing(mock_repo, [[...]])
            PullsClient(mock_transport).list_since(mock_repo, since)
        ```
    """
    transport = MockTransport()
    yield transport
    transport.reset()


@pytest.fixture
def mock_async_transport() -> Generator[MockAsyncTransport, None, None]:
    """Provide a MockAsyncTransport for testing."""
    transport = MockAsyncTransport()
    yield transport
    transport.reset()


@pytest.fixture
def mock_repo() -> str:
    """Provide a test repository name."""
    return MOCK_REPO


@pytest.fixture
def cutoff() -> datetime:
    """Provide a fixed cutoff instant."""
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_files() -> list[File]:
    """Provide changed files spread over three directories."""
    return [
        create_mock_file("pkg/sql/parser.go", additions=60, deletions=20),
        create_mock_file("pkg/sql/parser_test.go", additions=30, deletions=0),
        create_mock_file("pkg/kv/txn.go", additions=5, deletions=5),
        create_mock_file("README.md", additions=2, deletions=0),
    ]


@pytest.fixture
def sample_pull_request(sample_files: list[File]) -> PullRequest:
    """Provide an enriched closed PullRequest."""
    return create_mock_pull_request(
        number=42,
        state="closed",
        files=sample_files,
        created_at="2024-06-14T09:00:00Z",
        closed_at="2024-06-15T18:30:00Z",
        merged_at="2024-06-15T18:30:00Z",
        merged=True,
        additions=97,
        deletions=25,
        changed_files=4,
    )
