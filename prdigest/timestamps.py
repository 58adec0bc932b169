"""
Timestamp parsing and display formatting.

The API encodes every date-time as RFC 3339 (``2024-01-15T10:30:00Z``).
Parsing during the fetch walk is strict; formatting for display never fails.
"""

import re
from datetime import datetime, timezone, tzinfo
from typing import TYPE_CHECKING

from prdigest.exceptions import FormatError

if TYPE_CHECKING:
    from prdigest.types.pulls import PullRequest

_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def parse_timestamp(value: str | None, field: str = "timestamp") -> datetime:
    """
    Parse an RFC 3339 date-time into an aware datetime.

    Args:
        value: Wire value, e.g. "2024-01-15T10:30:00Z"
        field: Name of the field being parsed (used in the error)

    Returns:
        Timezone-aware datetime

    Raises:
        FormatError: If the value is missing, malformed or has no UTC offset
    """
    if not isinstance(value, str) or not value:
        raise FormatError(field, value)
    match = _RFC3339.fullmatch(value)
    if match is None:
        raise FormatError(field, value)
    date, clock, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    # fromisoformat on 3.10 only takes 3 or 6 fractional digits.
    fraction = f".{fraction[:6]:0<6}" if fraction else ""
    try:
        return datetime.fromisoformat(f"{date}T{clock}{fraction}{offset}")
    except ValueError as e:
        raise FormatError(field, value) from e


def ensure_aware(moment: datetime) -> datetime:
    """Interpret a naive datetime as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def format_timestamp(value: str | None, tz: tzinfo | None = None) -> str:
    """
    Render a wire timestamp as "Mon Jan  2 15:04:05".

    Converts to the local timezone unless `tz` is given. Falls back to the
    raw value when it cannot be parsed.
    """
    try:
        parsed = parse_timestamp(value)
    except FormatError:
        return value if isinstance(value, str) else ""
    local = parsed.astimezone(tz)
    return f"{local:%a %b} {local.day:2d} {local:%H:%M:%S}"


def created_at_str(pr: "PullRequest", tz: tzinfo | None = None) -> str:
    return format_timestamp(pr.created_at, tz)


def closed_at_str(pr: "PullRequest", tz: tzinfo | None = None) -> str:
    return format_timestamp(pr.closed_at, tz)


def merged_at_str(pr: "PullRequest", tz: tzinfo | None = None) -> str:
    return format_timestamp(pr.merged_at, tz)
