"""
Pytest plugin for prdigest testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
discovered by pytest. To use them, add this to your conftest.py:

    pytest_plugins = ["prdigest.testing.conftest"]

Or import the fixtures directly:

    from prdigest.testing.fixtures import mock_transport, sample_pull_request
"""

# Re-export all fixtures for pytest discovery
from prdigest.testing.fixtures import (
    cutoff,
    mock_async_transport,
    mock_repo,
    mock_transport,
    sample_files,
    sample_pull_request,
)

__all__ = [
    "mock_transport",
    "mock_async_transport",
    "mock_repo",
    "cutoff",
    "sample_files",
    "sample_pull_request",
]
