"""
prdigest logging utilities.

Provides configurable logging for HTTP requests/responses and fetch progress.
Ensures API tokens are never written to logs.
"""

import logging
import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from prdigest.types.progress import EnrichProgress, ListProgress

# Create package loggers
_sdk_logger = logging.getLogger("prdigest")
_http_logger = logging.getLogger("prdigest.http")
_progress_logger = logging.getLogger("prdigest.progress")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Authorization header values
    (re.compile(r"(Authorization['\"]?\s*[:=]\s*['\"]?)(Bearer|token)\s+[^\s'\"]+", re.IGNORECASE), r"\1\2 [REDACTED]"),
    # GitHub token formats (classic, fine-grained, app, oauth)
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9]{20,}\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = {"authorization", "token", "secret", "password", "api_key"}


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    progress_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure prdigest logging.

    Args:
        level: Default log level for all prdigest loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        progress_level: Log level for fetch progress (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from prdigest.logging import configure_logging

        # Show every request made against the API
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _progress_logger.setLevel(progress_level if progress_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a prdigest logger.

    Args:
        name: Logger name suffix (e.g., "http", "progress"). If None, returns the main logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"prdigest.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask API tokens and authorization headers in a string.

    Args:
        text: Text that may contain sensitive data

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: authorization, token, secret, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def format_count(n: int) -> str:
    """Format an integer with thousands separators (1234567 -> "1,234,567")."""
    return f"{n:,}"


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
) -> None:
    """
    Log an HTTP request at DEBUG level with sensitive data masked.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        headers: Request headers (optional)
        params: Query parameters (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {mask_sensitive_data(url)}"]

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    if params:
        log_parts.append(f"params={safe_log_dict(params)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
    next_url: str | None = None,
) -> None:
    """
    Log an HTTP response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL
        elapsed_ms: Request duration in milliseconds (optional)
        next_url: Pagination link to the next page (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {mask_sensitive_data(url)}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if next_url:
        log_parts.append(f"next={mask_sensitive_data(next_url)}")

    _http_logger.debug(" | ".join(log_parts))


def log_list_progress(progress: "ListProgress") -> None:
    """Default observer for the listing walk: one INFO line per page."""
    _progress_logger.info(
        "page %d: %s open %s closed %s total pull requests",
        progress.page,
        format_count(progress.open_count),
        format_count(progress.closed_count),
        format_count(progress.total_count),
    )


def log_enrich_progress(progress: "EnrichProgress") -> None:
    """Default observer for enrichment: one DEBUG line per pull request."""
    _progress_logger.debug(
        "detailed info for %s of %s pull requests (#%d)",
        format_count(progress.done),
        format_count(progress.total),
        progress.number,
    )


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "format_count",
    "log_http_request",
    "log_http_response",
    "log_list_progress",
    "log_enrich_progress",
]
