"""
Change statistics over enriched pull requests.

All functions are pure: they read ``PullRequest.files`` and never modify it.
Results are only meaningful after the pull request has been enriched.
"""

import posixpath
from collections.abc import Iterable
from enum import Enum

from prdigest.types.pulls import File, PullRequest, Subdirectory

# Upper bounds (exclusive) of additions plus deletions per size class.
TINY_PR = 20
SMALL_PR = 100
MEDIUM_PR = 500
LARGE_PR = 1000

# Share of all changes the returned subdirectories must exceed.
DEFAULT_SUBDIRECTORY_THRESHOLD = 0.80

# Group name for files at the repository root.
ROOT_DIRECTORY = "/"


class SizeClass(str, Enum):
    """Ordinal size bucket of a pull request."""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"


def total_changes(pr: PullRequest) -> int:
    """Total of additions and deletions over the retained files."""
    return sum(f.changes for f in pr.files)


def classify(changes: int) -> SizeClass:
    """Map a change count to its size class."""
    if changes < TINY_PR:
        return SizeClass.TINY
    elif changes < SMALL_PR:
        return SizeClass.SMALL
    elif changes < MEDIUM_PR:
        return SizeClass.MEDIUM
    elif changes < LARGE_PR:
        return SizeClass.LARGE
    return SizeClass.HUGE


def size_class(pr: PullRequest) -> SizeClass:
    """Size class of a pull request by its total changes."""
    return classify(total_changes(pr))


def group_by_directory(files: Iterable[File]) -> list[Subdirectory]:
    """Group files by containing directory, in order of first appearance."""
    groups: dict[str, Subdirectory] = {}
    for f in files:
        name = posixpath.dirname(f.filename) or ROOT_DIRECTORY
        if name not in groups:
            groups[name] = Subdirectory(name=name)
        groups[name].files.append(f)
    return list(groups.values())


def subdirectories(
    pr: PullRequest, threshold: float = DEFAULT_SUBDIRECTORY_THRESHOLD
) -> list[Subdirectory]:
    """
    Return the directories that account for most of a pull request's changes.

    Directories are sorted by total changes, largest first (ties keep their
    order of appearance), and cut after the first prefix whose share of all
    changes exceeds `threshold`.

    Args:
        pr: Enriched pull request
        threshold: Share of total changes to exceed (default: 0.8)

    Returns:
        List of Subdirectory, empty when the pull request has no changes
    """
    total = total_changes(pr)
    if total == 0:
        return []

    sds = sorted(group_by_directory(pr.files), key=lambda sd: sd.total_changes, reverse=True)
    count = 0
    for i, sd in enumerate(sds):
        count += sd.total_changes
        if count / total > threshold:
            return sds[: i + 1]
    return sds
