"""Per-file tag engine and output artifact writer.

The walker and the run loops depend only on the ``TagEngine`` and
``TagWriter`` protocols. Language parsers plug in behind ``TagEngine``;
the implementations here cover what the core needs on its own: counting
scanned input, probing languages, and a line-oriented tag file.
"""

import os
import sys
from dataclasses import dataclass
from typing import IO, Protocol

from tagscout.languages import guess_language


@dataclass
class ScanTotals:
    """Cumulative input totals for one batch."""

    files: int = 0
    lines: int = 0
    bytes: int = 0

    def add(self, files: int, lines: int, nbytes: int) -> None:
        self.files += files
        self.lines += lines
        self.bytes += nbytes


class TagEngine(Protocol):
    """Extracts tags from one input; returns the resize signal.

    A language engine holds its own ``TagWriter`` and calls ``add`` for each
    tag it extracts. The engines in this module never add entries, so with
    them a run leaves the tag file empty and reports zero tags.
    """

    def tag_file(self, path: str, totals: ScanTotals) -> bool:
        ...

    def tag_buffer(self, filename: str, data: bytes, totals: ScanTotals) -> bool:
        ...


class TagWriter(Protocol):
    """Output artifact with a strict open / operate / close protocol."""

    tags_added: int
    tags_total: int
    sorted: bool

    def open(self) -> None:
        ...

    def add(self, entry: str) -> None:
        ...

    def close(self, resize: bool) -> None:
        ...


def count_lines(data: bytes) -> int:
    """Number of lines in ``data``; a final unterminated line counts."""
    if not data:
        return 0
    lines = data.count(b"\n")
    if not data.endswith(b"\n"):
        lines += 1
    return lines


def read_file_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def printable(text: str) -> str:
    """Escape surrogates left by undecodable file names for strict streams."""
    return text.encode("utf-8", errors="backslashreplace").decode("utf-8")


class LineCountEngine:
    """Default engine: accounts for scanned input, emits no tags."""

    def tag_file(self, path: str, totals: ScanTotals) -> bool:
        return self.tag_buffer(path, read_file_bytes(path), totals)

    def tag_buffer(self, filename: str, data: bytes, totals: ScanTotals) -> bool:
        totals.add(1, count_lines(data), len(data))
        return False


class LanguageProbe:
    """Engine for the print-language mode.

    Prints ``path: Language`` (or ``path: NONE``) to standard output and
    remembers whether every input was recognized.
    """

    def __init__(self, stdout: IO[str] | None = None):
        self.unrecognized: list[str] = []
        self._stdout = stdout

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def all_recognized(self) -> bool:
        return not self.unrecognized

    def tag_file(self, path: str, totals: ScanTotals) -> bool:
        with open(path, "rb") as f:
            head = f.readline(256)
        return self._report(path, head, totals)

    def tag_buffer(self, filename: str, data: bytes, totals: ScanTotals) -> bool:
        return self._report(filename, data.split(b"\n", 1)[0], totals)

    def _report(self, path: str, first_line: bytes, totals: ScanTotals) -> bool:
        language = guess_language(path, first_line.decode("utf-8", errors="replace"))
        if language is None:
            self.unrecognized.append(path)
        self.stdout.write(printable(f"{path}: {language or 'NONE'}\n"))
        self.stdout.flush()
        totals.add(1, 0, 0)
        return False


STDOUT_TAG_FILE = "-"


class TagFileWriter:
    """Line-oriented tag file.

    Entries are buffered while the file is open and written on ``close``.
    ``-`` sends them to standard output. With ``append`` the existing lines
    are kept and counted in ``tags_total``. ``close(resize=True)`` and
    sorted output both trigger a rewrite pass over the whole file.
    """

    def __init__(self, path: str = "tags", append: bool = False, sort: bool = True):
        self.path = path
        self.append = append
        self.sorted = sort
        self.tags_added = 0
        self.tags_total = 0
        self.is_open = False
        self.open_count = 0
        self._entries: list[str] = []
        self._existing = 0

    @property
    def to_stdout(self) -> bool:
        return self.path in (STDOUT_TAG_FILE, "/dev/stdout")

    def open(self) -> None:
        if self.is_open:
            raise RuntimeError(f"tag file {self.path} is already open")
        self.is_open = True
        self.open_count += 1
        self._entries = []
        self.tags_added = 0
        self._existing = 0
        if self.append and not self.to_stdout and os.path.exists(self.path):
            with open(self.path, encoding="utf-8", errors="replace") as f:
                self._existing = sum(1 for _ in f)

    def add(self, entry: str) -> None:
        if not self.is_open:
            raise RuntimeError(f"tag file {self.path} is not open")
        self._entries.append(entry.rstrip("\n"))
        self.tags_added += 1

    def close(self, resize: bool) -> None:
        if not self.is_open:
            raise RuntimeError(f"tag file {self.path} is not open")
        try:
            if self.to_stdout:
                entries = sorted(self._entries) if self.sorted else self._entries
                for entry in entries:
                    sys.stdout.write(entry + "\n")
                sys.stdout.flush()
            else:
                mode = "a" if self.append else "w"
                with open(self.path, mode, encoding="utf-8") as f:
                    for entry in self._entries:
                        f.write(entry + "\n")
                if resize or (self.sorted and self._entries):
                    self._rewrite()
            self.tags_total = self._existing + self.tags_added
        finally:
            self.is_open = False
            self._entries = []

    def _rewrite(self) -> None:
        with open(self.path, encoding="utf-8", errors="replace") as f:
            lines = f.read().splitlines()
        if self.sorted:
            lines.sort()
        with open(self.path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
