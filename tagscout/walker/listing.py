"""Immediate-children listing for directories.

Two interchangeable strategies behind one interface: native directory
iteration, and pattern-based enumeration that globs ``<dir>/*``. The walker
only ever talks to ``DirectoryLister``; the strategy is chosen once from
configuration by ``select_lister``.
"""

import glob
import os
from abc import ABC, abstractmethod

from .config import (
    LISTER_AUTO,
    LISTER_GLOB,
    LISTER_SCANDIR,
    LISTING_WILDCARD,
    SELF_AND_PARENT,
)


class DirectoryLister(ABC):
    """Lists the names of a directory's immediate children.

    Implementations return bare names (never ``.`` or ``..``) in a stable
    order and raise ``OSError`` when the directory cannot be read.
    """

    name: str = ""

    @abstractmethod
    def list_children(self, directory: str) -> list[str]:
        ...


class ScandirLister(DirectoryLister):
    name = LISTER_SCANDIR

    def list_children(self, directory: str) -> list[str]:
        with os.scandir(directory) as it:
            names = [entry.name for entry in it if entry.name not in SELF_AND_PARENT]
        return sorted(names)


class GlobLister(DirectoryLister):
    """Pattern-based fallback for platforms without directory iteration."""

    name = LISTER_GLOB

    def list_children(self, directory: str) -> list[str]:
        if not os.path.isdir(directory):
            raise NotADirectoryError(20, os.strerror(20), directory)
        pattern = os.path.join(glob.escape(directory), LISTING_WILDCARD)
        names = [
            os.path.basename(match)
            for match in glob.glob(pattern, include_hidden=True)
        ]
        return sorted(name for name in names if name not in SELF_AND_PARENT)


_LISTERS: dict[str, type[DirectoryLister]] = {
    LISTER_SCANDIR: ScandirLister,
    LISTER_GLOB: GlobLister,
}


def select_lister(strategy: str = LISTER_AUTO) -> DirectoryLister:
    """Return the lister for ``strategy``; ``auto`` prefers native iteration."""
    if strategy == LISTER_AUTO:
        if hasattr(os, "scandir"):
            return ScandirLister()
        return GlobLister()
    try:
        return _LISTERS[strategy]()
    except KeyError:
        raise ValueError(
            f"unknown lister '{strategy}' (expected one of: "
            f"{', '.join([LISTER_AUTO, *_LISTERS])})"
        ) from None
