"""prdigest type definitions.

This module exports all data model types used by the package.
"""

from prdigest.types.progress import EnrichProgress, ListProgress
from prdigest.types.pulls import File, PullRequest, QueryResult, Subdirectory, User

__all__ = [
    # Pull request types
    "User",
    "File",
    "PullRequest",
    "Subdirectory",
    "QueryResult",
    # Progress types
    "ListProgress",
    "EnrichProgress",
]
