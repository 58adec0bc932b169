"""Ignore patterns for files excluded from change statistics."""

import re
from collections.abc import Iterable

from prdigest.exceptions import ConfigurationError
from prdigest.types.pulls import File

# Generated protocol buffer outputs and stylesheets.
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    r".*\.pb\.(go|cc|h)",
    r".*\.css",
)


class FileFilter:
    """
    Drops files whose path matches any of a set of regular expressions.

    Patterns are matched anywhere in the path (``re.search``).

    Example:
        ```python
        file_filter = FileFilter([r".*\\.pb\\.go", r"^vendor/"])
        kept = file_filter.filter(files)
        ```
    """

    def __init__(self, patterns: Iterable[str] | None = None) -> None:
        """
        Initialize the filter.

        Args:
            patterns: Regular expressions to ignore (default: DEFAULT_IGNORE_PATTERNS)

        Raises:
            ConfigurationError: If a pattern is not a valid regular expression
        """
        if patterns is None:
            patterns = DEFAULT_IGNORE_PATTERNS
        self.patterns = tuple(patterns)
        self._compiled: list[re.Pattern[str]] = []
        for pattern in self.patterns:
            try:
                self._compiled.append(re.compile(pattern))
            except re.error as e:
                raise ConfigurationError(f"Invalid ignore pattern {pattern!r}: {e}") from e

    def skip(self, filename: str) -> bool:
        """Return True if the file should be excluded."""
        return any(regex.search(filename) for regex in self._compiled)

    def filter(self, files: Iterable[File]) -> list[File]:
        """Return the files that match none of the patterns, order preserved."""
        return [f for f in files if not self.skip(f.filename)]
