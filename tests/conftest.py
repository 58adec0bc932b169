"""Shared fixtures for the prdigest test suite."""

from prdigest.testing.conftest import (  # noqa: F401
    cutoff,
    mock_async_transport,
    mock_repo,
    mock_transport,
    sample_files,
    sample_pull_request,
)
