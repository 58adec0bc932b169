"""prdigest async resource clients."""

from prdigest.async_clients.pulls import AsyncPullsClient

__all__ = [
    "AsyncPullsClient",
]
