"""Run options and inline option overrides.

Arguments and list-file lines may be interleaved with option overrides
(``--exclude=*.min.js src/ --recurse=no vendor/lib.c``). An override applies
from the point it appears onwards. ``--`` ends override processing; every
later item is a path even when it starts with a dash.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import IO, Any

from tagscout.config_runtime import parse_bool
from tagscout.utils.constants import DEFAULT_TAG_FILE
from tagscout.utils.diagnostics import fatal
from tagscout.utils.logging import set_console_level
from tagscout.walker.config import DEFAULT_MAX_RECURSION_DEPTH, LISTER_AUTO
from tagscout.walker.exclusion import ExclusionPolicy

END_OF_OPTIONS = "--"
STDIN_SENTINEL = "-"


@dataclass
class ScanOptions:
    """Mutable configuration for one run."""

    recurse: bool = False
    follow_links: bool = True
    max_recursion_depth: int = DEFAULT_MAX_RECURSION_DEPTH
    exclusion: ExclusionPolicy = field(default_factory=ExclusionPolicy)
    file_list: str | None = None
    filter: bool = False
    filter_terminator: str | None = None
    print_totals: bool = False
    print_language: bool = False
    append: bool = False
    sorted: bool = True
    files_required: bool = True
    tag_file: str = DEFAULT_TAG_FILE
    lister: str = LISTER_AUTO
    verbose: bool = False

    @classmethod
    def from_config(cls, cfg: dict[str, Any]) -> "ScanOptions":
        """Build options from a ``load_runtime_config`` result."""
        scan = cfg["scan"]
        return cls(
            recurse=scan["recurse"],
            follow_links=scan["follow_links"],
            max_recursion_depth=scan["max_recursion_depth"],
            exclusion=ExclusionPolicy(scan["exclude"], scan["exclude_exception"]),
            filter_terminator=scan["filter_terminator"] or None,
            print_totals=scan["print_totals"],
            append=scan["append"],
            sorted=scan["sorted"],
            files_required=scan["files_required"],
            tag_file=cfg["paths"]["tag_file"],
            lister=scan["lister"],
        )

    def requires_files(self) -> bool:
        """True when running without any input is an error."""
        return self.files_required and not self.recurse


class ArgCursor:
    """Forward-only cursor over arguments, with one item of lookahead.

    The source is consumed lazily, so a cursor over standard input hands out
    each line as soon as it is read.
    """

    def __init__(self, source: Iterable[str]):
        self._source: Iterator[str] = iter(source)
        self._current: str | None = None
        self.options_ended = False
        self.forth()

    @classmethod
    def from_lines(cls, stream: IO[str]) -> "ArgCursor":
        """One entry per line; line endings stripped, blank lines skipped."""
        return cls(line.rstrip("\r\n") for line in stream if line.strip())

    @property
    def is_off(self) -> bool:
        return self._current is None

    @property
    def item(self) -> str:
        if self._current is None:
            raise IndexError("cursor is exhausted")
        return self._current

    def forth(self) -> None:
        self._current = next(self._source, None)


def _split(token: str) -> tuple[str, str | None]:
    name, sep, value = token.partition("=")
    return name, (value if sep else None)


def _flag(name: str, value: str | None) -> bool:
    if value is None:
        return True
    try:
        return parse_bool(value)
    except ValueError:
        fatal(f'invalid value for "{name}" option: {value}')


def apply_override(token: str, options: ScanOptions) -> None:
    """Apply one ``--name[=value]`` (or short) option to ``options``."""
    name, value = _split(token)

    if name in ("--recurse", "-R"):
        options.recurse = _flag(name, value)
    elif name == "--links":
        options.follow_links = _flag(name, value)
    elif name == "--exclude":
        options.exclusion.add_pattern(value or "")
    elif name == "--exclude-exception":
        options.exclusion.add_exception(value or "")
    elif name == "--maxdepth":
        try:
            depth = int(value or "")
        except ValueError:
            depth = -1
        if depth < 1:
            fatal(f'invalid value for "{name}" option: {value}')
        options.max_recursion_depth = depth
    elif name in ("--verbose", "-V"):
        options.verbose = _flag(name, value)
        set_console_level("INFO" if options.verbose else "WARNING")
    else:
        fatal(f'unknown option "{token}"')


def parse_inline_options(cursor: ArgCursor, options: ScanOptions) -> None:
    """Consume option overrides at the cursor until the next path."""
    while not cursor.is_off and not cursor.options_ended:
        token = cursor.item
        if token == END_OF_OPTIONS:
            cursor.options_ended = True
            cursor.forth()
            break
        if not token.startswith("-") or token == STDIN_SENTINEL:
            break
        apply_override(token, options)
        cursor.forth()
