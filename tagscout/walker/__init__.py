"""tagscout walker package.

Resolves input paths into regular files for the tag engine:
- classify() probes and classifies one path
- ExclusionPolicy decides which paths are skipped
- DirectoryLister lists a directory's children (scandir or glob fallback)
- TreeWalker recurses with link, cycle and depth guards
"""

from .classify import PathEntry, PathKind, classify
from .core import RecursionContext, TreeWalker, is_recursive_link
from .exclusion import ExclusionPolicy
from .listing import DirectoryLister, GlobLister, ScandirLister, select_lister

__all__ = [
    "PathEntry",
    "PathKind",
    "classify",
    "RecursionContext",
    "TreeWalker",
    "is_recursive_link",
    "ExclusionPolicy",
    "DirectoryLister",
    "GlobLister",
    "ScandirLister",
    "select_lister",
]
