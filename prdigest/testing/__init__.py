"""prdigest testing utilities.

Provides mock transports and payload builders for testing code that uses
prdigest without network access.
"""

from prdigest.testing.fixtures import (
    create_mock_file,
    create_mock_file_data,
    create_mock_pull_request,
    create_mock_pull_request_data,
    create_mock_user_data,
    make_iso_timestamp,
)
from prdigest.testing.mock import MockAsyncTransport, MockCall, MockResponse, MockTransport

__all__ = [
    # Mock transports
    "MockTransport",
    "MockAsyncTransport",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_pull_request_data",
    "create_mock_file_data",
    "create_mock_user_data",
    "create_mock_pull_request",
    "create_mock_file",
    "make_iso_timestamp",
]
