"""Pull request-related data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class User:
    """Account that opened a pull request."""

    login: str
    id: int
    html_url: str | None = None
    type: str = "User"  # "User", "Bot", "Organization"
    site_admin: bool = False


@dataclass
class File:
    """One file touched by a pull request."""

    filename: str
    status: str  # "added", "modified", "removed", "renamed", ...
    additions: int
    deletions: int
    changes: int
    sha: str | None = None
    previous_filename: str | None = None


@dataclass
class PullRequest:
    """
    Pull request as returned by the listing or detail endpoint.

    Timestamps are kept as the raw wire strings. `files` stays empty until
    the record has been enriched.
    """

    url: str
    id: int
    number: int
    state: str  # "open", "closed"
    title: str
    html_url: str | None = None
    user: User | None = None
    body: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    closed_at: str | None = None
    merged_at: str | None = None
    merge_commit_sha: str | None = None
    merged: bool = False
    mergeable: bool | None = None
    comments: int = 0
    review_comments: int = 0
    commits: int = 0
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0
    files: list[File] = field(default_factory=list)

    @property
    def author(self) -> str:
        return self.user.login if self.user else ""


@dataclass
class Subdirectory:
    """Directory of a pull request and the changed files it contains."""

    name: str
    files: list[File] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        """Total of additions and deletions made to files in the directory."""
        return sum(f.changes for f in self.files)


@dataclass
class QueryResult:
    """Enriched open and closed pull requests of a repository."""

    repo: str
    since: datetime
    open: list[PullRequest]
    closed: list[PullRequest]

    @property
    def total(self) -> int:
        return len(self.open) + len(self.closed)
