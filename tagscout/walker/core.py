"""Recursive expansion of input paths into tagged files.

This module contains the TreeWalker class, which resolves one input path
(file or directory) into calls to the per-file tag engine, applying the
exclusion policy, the symbolic link policy, a cycle guard and the maximum
recursion depth.
"""

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tagscout.engine import ScanTotals, TagEngine
from tagscout.utils.diagnostics import notice, warning

from .classify import classify
from .config import CURRENT_DIRECTORY
from .listing import DirectoryLister, select_lister

if TYPE_CHECKING:
    from tagscout.options import ScanOptions


@dataclass
class RecursionContext:
    """Recursion state shared by the nested calls of one top-level expansion.

    ``depth`` is incremented before a directory is examined and decremented
    after it returns. ``active`` holds the real paths of the directories
    currently being expanded.
    """

    depth: int = 0
    active: set[str] = field(default_factory=set)


def is_recursive_link(path: str) -> bool:
    """True when ``path`` is a symbolic link to its own directory or an ancestor."""
    if not os.path.islink(path):
        return False
    target = os.path.realpath(path)
    parent = os.path.realpath(os.path.dirname(os.path.abspath(path)))
    return parent == target or parent.startswith(target.rstrip(os.sep) + os.sep)


class TreeWalker:
    """Expands input paths and dispatches regular files to the engine.

    The walker reads ``options`` live, so inline option overrides applied
    between arguments take effect for the next expansion.
    """

    def __init__(
        self,
        options: "ScanOptions",
        engine: TagEngine,
        totals: ScanTotals | None = None,
        lister: DirectoryLister | None = None,
    ):
        self.options = options
        self.engine = engine
        self.totals = totals if totals is not None else ScanTotals()
        self.lister = lister or select_lister(options.lister)
        self.dispatched = 0

    def expand(self, path: str, context: RecursionContext | None = None) -> bool:
        """Resolve ``path`` and tag what it contains.

        Args:
            path: File or directory to expand
            context: Recursion state of the enclosing expansion, if any

        Returns:
            The resize signal: True if any dispatched file reported that the
            output artifact needs rewriting
        """
        if context is None:
            context = RecursionContext()

        entry = classify(path)

        if self.options.exclusion.is_excluded(path):
            notice(f'excluding "{path}"')
        elif entry.is_symlink and not self.options.follow_links:
            notice(f'ignoring "{path}" (symbolic link)')
        elif not entry.exists:
            warning(f'cannot open input file "{path}"')
        elif entry.is_directory:
            return self.recurse_into_directory(path, context)
        elif not entry.is_regular_file:
            notice(f'ignoring "{path}" (special file)')
        else:
            return self._dispatch(path)
        return False

    def recurse_into_directory(self, path: str, context: RecursionContext) -> bool:
        context.depth += 1
        try:
            if self._is_cycle(path, context):
                warning(f'ignoring "{path}" (recursive link)')
                return False
            if not self.options.recurse:
                notice(f'ignoring "{path}" (directory)')
                return False
            if context.depth > self.options.max_recursion_depth:
                notice(
                    f'not descending in directory "{path}" '
                    f"(depth {context.depth} > {self.options.max_recursion_depth})"
                )
                return False

            notice(f'RECURSING into directory "{path}"')
            real = os.path.realpath(path)
            context.active.add(real)
            try:
                return self._expand_children(path, context)
            finally:
                context.active.discard(real)
        finally:
            context.depth -= 1

    def _is_cycle(self, path: str, context: RecursionContext) -> bool:
        if os.path.realpath(path) in context.active:
            return True
        return is_recursive_link(path)

    def _expand_children(self, path: str, context: RecursionContext) -> bool:
        try:
            names = self.lister.list_children(path)
        except OSError as e:
            warning(f'cannot recurse into directory "{path}"', e)
            return False

        resize = False
        for name in names:
            child = name if path == CURRENT_DIRECTORY else os.path.join(path, name)
            # expand first: every child is visited regardless of the signal so far
            resize = self.expand(child, context) or resize
        return resize

    def _dispatch(self, path: str) -> bool:
        try:
            resize = self.engine.tag_file(path, self.totals)
        except OSError as e:
            warning(f'cannot open input file "{path}"', e)
            return False
        self.dispatched += 1
        return bool(resize)
