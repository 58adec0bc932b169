"""prdigest resource clients."""

from prdigest.clients.pulls import PullsClient

__all__ = [
    "PullsClient",
]
