"""Batch orchestration.

One batch combines up to four input sources (positional arguments, a list
file, the filter stream and the bare recursive scan of the working
directory) into a single run bracketed by one open/close pair on the output
artifact.
"""

import io
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import IO

from tagscout.engine import ScanTotals, TagEngine, TagWriter
from tagscout.options import STDIN_SENTINEL, ArgCursor, ScanOptions, parse_inline_options
from tagscout.utils.constants import PROGRAM_NAME
from tagscout.utils.diagnostics import fatal, notice
from tagscout.utils.ui import print_stat
from tagscout.walker.config import CURRENT_DIRECTORY
from tagscout.walker.core import TreeWalker
from tagscout.walker.listing import DirectoryLister


def plural(value: int) -> str:
    return "" if value == 1 else "s"


def tolerant_input(stream: IO[str]) -> IO[str]:
    """Let undecodable bytes in file names through as surrogate escapes.

    Named list files are opened the same way. A name that is not valid
    UTF-8 reaches the walker intact instead of ending the batch.
    """
    if isinstance(stream, io.TextIOWrapper) and stream.errors != "surrogateescape":
        stream.reconfigure(errors="surrogateescape")
    return stream


@dataclass
class RunState:
    """Per-batch state, discarded once statistics are reported."""

    needs_rewrite: bool = False
    totals: ScanTotals = field(default_factory=ScanTotals)
    # scan start, scan end, sort end
    timestamps: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])

    def merge(self, resize: bool) -> None:
        """Fold one resize signal in; once set, ``needs_rewrite`` stays set."""
        self.needs_rewrite = self.needs_rewrite or bool(resize)


class RunOrchestrator:
    """Drives one batch across all configured input sources."""

    def __init__(
        self,
        engine: TagEngine,
        writer: TagWriter,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
        clock: Callable[[], float] | None = time.perf_counter,
        lister: DirectoryLister | None = None,
    ):
        self.engine = engine
        self.writer = writer
        self._stdin = stdin
        self._stdout = stdout
        self.clock = clock
        self.lister = lister

    @property
    def stdin(self) -> IO[str]:
        return tolerant_input(self._stdin if self._stdin is not None else sys.stdin)

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    def run_batch(self, arguments: Sequence[str], options: ScanOptions) -> RunState | None:
        """Run one batch.

        Args:
            arguments: Positional arguments, possibly interleaved with
                inline option overrides
            options: Run options; overrides found in the inputs mutate it

        Returns:
            The finished RunState, or None when there was nothing to do
        """
        cursor = ArgCursor(arguments)
        has_files = not cursor.is_off or options.file_list is not None or options.filter

        if not has_files:
            if options.requires_files():
                fatal(f'No files specified. Try "{PROGRAM_NAME} scan --help".')
            elif not options.recurse:
                return None

        state = RunState()
        walker = TreeWalker(options, self.engine, state.totals, self.lister)
        manages_writer = not options.filter and not options.print_language

        if manages_writer:
            self.writer.open()
        try:
            self._stamp(state, 0, options)
            self._scan_sources(cursor, has_files, walker, state, options)
            self._stamp(state, 1, options)
        finally:
            if manages_writer:
                self.writer.close(state.needs_rewrite)
        self._stamp(state, 2, options)

        if options.print_totals:
            self.print_totals(state, options)
        return state

    def _scan_sources(
        self,
        cursor: ArgCursor,
        has_files: bool,
        walker: TreeWalker,
        state: RunState,
        options: ScanOptions,
    ) -> None:
        if not cursor.is_off:
            notice("Reading command line arguments")
            self.tags_for_cursor(cursor, walker, state, options)
        if options.file_list is not None:
            notice("Reading list file")
            self.tags_from_list_file(options.file_list, walker, state, options)
        if options.filter:
            notice("Reading filter input")
            self.tags_for_cursor(
                ArgCursor.from_lines(self.stdin), walker, state, options, filter_mode=True
            )
        if not has_files and options.recurse:
            state.merge(walker.expand(CURRENT_DIRECTORY))

    def tags_for_cursor(
        self,
        cursor: ArgCursor,
        walker: TreeWalker,
        state: RunState,
        options: ScanOptions,
        filter_mode: bool = False,
    ) -> None:
        parse_inline_options(cursor, options)
        while not cursor.is_off:
            state.merge(walker.expand(cursor.item))
            if filter_mode:
                if options.filter_terminator:
                    self.stdout.write(options.filter_terminator)
                self.stdout.flush()
            cursor.forth()
            parse_inline_options(cursor, options)

    def tags_from_list_file(
        self,
        file_name: str,
        walker: TreeWalker,
        state: RunState,
        options: ScanOptions,
    ) -> None:
        if file_name == STDIN_SENTINEL:
            self.tags_for_cursor(ArgCursor.from_lines(self.stdin), walker, state, options)
            return
        try:
            stream = open(file_name, encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            fatal(f'cannot open list file "{file_name}"', e)
        with stream:
            self.tags_for_cursor(ArgCursor.from_lines(stream), walker, state, options)

    def _stamp(self, state: RunState, index: int, options: ScanOptions) -> None:
        if options.print_totals and self.clock is not None:
            state.timestamps[index] = self.clock()

    def print_totals(self, state: RunState, options: ScanOptions) -> None:
        """Report file/line/byte totals, throughput, tag counts and sort time."""
        totals = state.totals
        line = (
            f"{totals.files} file{plural(totals.files)}, "
            f"{totals.lines} line{plural(totals.lines)} "
            f"({totals.bytes // 1024} kB) scanned"
        )
        if self.clock is not None:
            interval = state.timestamps[1] - state.timestamps[0]
            line += f" in {interval:.1f} seconds"
            if interval > 0:
                line += f" ({int(totals.bytes / interval) // 1024} kB/s)"
        print_stat(line)

        if options.filter or options.print_language:
            return

        added = self.writer.tags_added
        total = self.writer.tags_total
        line = f"{added} tag{plural(added)} added to tag file"
        if options.append:
            line += f" (now {total} tags)"
        print_stat(line)

        if total > 0 and self.writer.sorted:
            line = f"{total} tag{plural(total)} sorted"
            if self.clock is not None:
                line += f" in {state.timestamps[2] - state.timestamps[1]:.2f} seconds"
            print_stat(line)
