"""Path classification.

``classify`` is the walker's only filesystem probe. It never raises: a path
that cannot be stat'ed comes back as MISSING so the caller can warn and move
on to the next input.
"""

import os
import stat
from dataclasses import dataclass
from enum import Enum


class PathKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    SPECIAL = "special"
    MISSING = "missing"


@dataclass(frozen=True)
class PathEntry:
    """One classified input path.

    ``kind`` comes from lstat, so a symbolic link reports SYMLINK.
    ``target_kind`` comes from stat and describes what the link resolves to;
    for non-links both fields agree.
    """

    path: str
    kind: PathKind
    exists: bool
    target_kind: PathKind

    @property
    def is_symlink(self) -> bool:
        return self.kind is PathKind.SYMLINK

    @property
    def is_directory(self) -> bool:
        return self.exists and self.target_kind is PathKind.DIRECTORY

    @property
    def is_regular_file(self) -> bool:
        return self.exists and self.target_kind is PathKind.FILE


def _kind_from_mode(mode: int) -> PathKind:
    if stat.S_ISLNK(mode):
        return PathKind.SYMLINK
    if stat.S_ISDIR(mode):
        return PathKind.DIRECTORY
    if stat.S_ISREG(mode):
        return PathKind.FILE
    return PathKind.SPECIAL


def classify(path: str) -> PathEntry:
    """Stat ``path`` and classify it."""
    try:
        link_kind = _kind_from_mode(os.lstat(path).st_mode)
    except (OSError, ValueError):
        return PathEntry(path, PathKind.MISSING, False, PathKind.MISSING)

    if link_kind is not PathKind.SYMLINK:
        return PathEntry(path, link_kind, True, link_kind)

    try:
        target_kind = _kind_from_mode(os.stat(path).st_mode)
    except (OSError, ValueError):
        # Dangling link
        return PathEntry(path, PathKind.SYMLINK, False, PathKind.MISSING)
    return PathEntry(path, PathKind.SYMLINK, True, target_kind)
