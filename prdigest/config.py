"""
Client configuration.

Settings can be given explicitly or read from environment variables:

    GITHUB_TOKEN: API token (optional, public repositories work without one)
    PRDIGEST_BASE_URL: API root (default: https://api.github.com)
    PRDIGEST_TIMEOUT: Request timeout in seconds (default: 30)
    PRDIGEST_PER_PAGE: Listing page size, 1-100 (default: 100)
    PRDIGEST_LOOKBACK_HOURS: Default cutoff window in hours (default: 24)
    PRDIGEST_IGNORE_PATTERNS: File regexes to ignore, one per line
        (default: generated protocol buffer files and stylesheets). Lines
        are used since commas occur inside regexes (`a{1,3}`). Blank lines
        are skipped; an empty value disables filtering.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

from prdigest.clients.pulls import DEFAULT_PER_PAGE
from prdigest.exceptions import ConfigurationError
from prdigest.filters import DEFAULT_IGNORE_PATTERNS, FileFilter
from prdigest.transport import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

DEFAULT_LOOKBACK = timedelta(hours=24)


@dataclass
class ClientConfig:
    """Settings shared by the sync and async clients."""

    token: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    per_page: int = DEFAULT_PER_PAGE
    lookback: timedelta = DEFAULT_LOOKBACK
    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if not 1 <= self.per_page <= 100:
            raise ConfigurationError(f"per_page must be between 1 and 100, got {self.per_page}")
        if self.lookback <= timedelta(0):
            raise ConfigurationError(f"lookback must be positive, got {self.lookback}")

    def file_filter(self) -> FileFilter:
        """Build the file filter for the configured ignore patterns."""
        return FileFilter(self.ignore_patterns)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """
        Read configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            ClientConfig with defaults for unset variables

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        ignore_patterns = DEFAULT_IGNORE_PATTERNS
        raw_patterns = env.get("PRDIGEST_IGNORE_PATTERNS")
        if raw_patterns is not None:
            ignore_patterns = tuple(p.strip() for p in raw_patterns.splitlines() if p.strip())

        config = cls(
            token=env.get("GITHUB_TOKEN") or None,
            base_url=env.get("PRDIGEST_BASE_URL", DEFAULT_BASE_URL),
            timeout=_number(env, "PRDIGEST_TIMEOUT", float, DEFAULT_TIMEOUT),
            per_page=_number(env, "PRDIGEST_PER_PAGE", int, DEFAULT_PER_PAGE),
            lookback=timedelta(
                hours=_number(
                    env,
                    "PRDIGEST_LOOKBACK_HOURS",
                    float,
                    DEFAULT_LOOKBACK.total_seconds() / 3600,
                )
            ),
            ignore_patterns=ignore_patterns,
        )
        # Raises ConfigurationError on an invalid pattern.
        config.file_filter()
        return config


def _number(env: Mapping[str, str], name: str, kind: type, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {name}: {raw!r}") from e
