"""prdigest - recent pull requests of a GitHub repository and their change statistics."""

__version__ = "0.1.0"

from prdigest import stats, timestamps
from prdigest.async_client import AsyncPRDigestClient
from prdigest.client import PRDigestClient
from prdigest.config import ClientConfig
from prdigest.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    FormatError,
    NotFoundError,
    PRDigestError,
    RateLimitedError,
    ServerError,
    TransportError,
    ValidationError,
)
from prdigest.filters import DEFAULT_IGNORE_PATTERNS, FileFilter
from prdigest.logging import configure_logging, get_logger
from prdigest.stats import SizeClass
from prdigest.transport import HTTPTransport, Page
from prdigest.types import (
    EnrichProgress,
    File,
    ListProgress,
    PullRequest,
    QueryResult,
    Subdirectory,
    User,
)

__all__ = [
    "__version__",
    # Main Clients
    "PRDigestClient",
    "AsyncPRDigestClient",
    "ClientConfig",
    # Statistics
    "stats",
    "timestamps",
    "SizeClass",
    "FileFilter",
    "DEFAULT_IGNORE_PATTERNS",
    # Types
    "User",
    "File",
    "PullRequest",
    "Subdirectory",
    "QueryResult",
    "ListProgress",
    "EnrichProgress",
    # Exceptions
    "PRDigestError",
    "ConfigurationError",
    "FormatError",
    "TransportError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    # Transport
    "HTTPTransport",
    "Page",
    # Logging
    "configure_logging",
    "get_logger",
]
