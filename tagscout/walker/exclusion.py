"""Exclusion rules for the walker.

Patterns are shell globs matched with ``fnmatch`` against both the basename
and the full path of a candidate, the same way the indexer's file filter
matches ``--exclude`` patterns. Exception patterns re-admit paths that an
exclusion pattern would otherwise drop.
"""

import fnmatch
import os
from collections.abc import Iterable

from tagscout.utils.diagnostics import fatal

from .config import PATTERN_FILE_COMMENT, PATTERN_FILE_PREFIX


def _normalize(path: str) -> str:
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def _matches(path: str, patterns: list[str]) -> bool:
    if not patterns:
        return False
    normalized = _normalize(path)
    basename = os.path.basename(normalized.rstrip("/")) or normalized
    for pattern in patterns:
        if fnmatch.fnmatch(basename, pattern) or fnmatch.fnmatch(normalized, pattern):
            return True
    return False


def read_pattern_file(path: str) -> list[str]:
    """Read one pattern per line; blank lines and ``#`` comments are skipped.

    A pattern file that cannot be opened is fatal, like a missing list file.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            lines = f.read().splitlines()
    except OSError as e:
        fatal(f'cannot open "{path}" as pattern file', e)
    return [
        line.strip()
        for line in lines
        if line.strip() and not line.lstrip().startswith(PATTERN_FILE_COMMENT)
    ]


class ExclusionPolicy:
    """Decides whether a path is excluded from tagging."""

    def __init__(
        self,
        patterns: Iterable[str] | None = None,
        exceptions: Iterable[str] | None = None,
    ):
        self.patterns: list[str] = []
        self.exceptions: list[str] = []
        for pattern in patterns or ():
            self.add_pattern(pattern)
        for pattern in exceptions or ():
            self.add_exception(pattern)

    @staticmethod
    def _expand(value: str) -> list[str]:
        if value.startswith(PATTERN_FILE_PREFIX):
            return read_pattern_file(value[len(PATTERN_FILE_PREFIX):])
        return [value]

    def add_pattern(self, value: str) -> None:
        """Add an exclusion pattern; an empty value clears all of them."""
        if not value:
            self.patterns.clear()
            return
        self.patterns.extend(self._expand(value))

    def add_exception(self, value: str) -> None:
        """Add an exception pattern; an empty value clears all of them."""
        if not value:
            self.exceptions.clear()
            return
        self.exceptions.extend(self._expand(value))

    def is_excluded(self, path: str) -> bool:
        if not _matches(path, self.patterns):
            return False
        return not _matches(path, self.exceptions)

    def __repr__(self) -> str:
        return f"ExclusionPolicy(patterns={self.patterns!r}, exceptions={self.exceptions!r})"
