"""Interactive mode: line-delimited JSON requests on standard input.

Protocol:
    -> {"_type": "program", "name": "tagscout", "version": "..."}   (banner)
    <- {"command": "generate-tags", "filename": "a.c"}               (from disk)
    <- {"command": "generate-tags", "filename": "x", "size": 5}      (5 raw bytes follow)
    -> {"_type": "completed", "command": "generate-tags"}

Each request opens and closes the output artifact once. The first malformed
request ends the session with a ProtocolError.
"""

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO, Any, BinaryIO

from tagscout import __version__
from tagscout.engine import ScanTotals, TagEngine, TagWriter
from tagscout.options import ScanOptions
from tagscout.utils.constants import PROGRAM_NAME
from tagscout.utils.errors import ProtocolError
from tagscout.utils.logging import logger
from tagscout.walker.core import TreeWalker
from tagscout.walker.listing import DirectoryLister

GENERATE_TAGS = "generate-tags"


@dataclass(frozen=True)
class Request:
    """One parsed request line."""

    command: str
    filename: str | None = None
    size: int | None = None

    @classmethod
    def parse(cls, line: bytes) -> "Request":
        try:
            payload = json.loads(line)
        except (ValueError, UnicodeDecodeError) as e:
            raise ProtocolError("invalid json") from e
        if not isinstance(payload, dict):
            raise ProtocolError("invalid json")

        command = payload.get("command")
        if not isinstance(command, str):
            raise ProtocolError("command name not found")

        if command != GENERATE_TAGS:
            return cls(command)

        filename = payload.get("filename")
        if not isinstance(filename, str):
            raise ProtocolError(f"invalid {GENERATE_TAGS} request")

        size = payload.get("size")
        if size is not None and (
            isinstance(size, bool) or not isinstance(size, int) or size < 0
        ):
            raise ProtocolError(f"invalid {GENERATE_TAGS} request")

        return cls(command, filename, size)


class InteractiveServer:
    """Serves requests until end of input."""

    def __init__(
        self,
        options: ScanOptions,
        engine: TagEngine,
        writer: TagWriter,
        stdin: BinaryIO | None = None,
        stdout: IO[str] | None = None,
        lister: DirectoryLister | None = None,
    ):
        self.options = options
        self.engine = engine
        self.writer = writer
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout
        self.lister = lister
        self.requests_served = 0

    def _emit(self, message: dict[str, Any]) -> None:
        self.stdout.write(json.dumps(message) + "\n")
        self.stdout.flush()

    def serve(self) -> int:
        """Run the request loop; returns the number of requests served."""
        self._emit({"_type": "program", "name": PROGRAM_NAME, "version": __version__})

        for line in iter(self.stdin.readline, b""):
            if not line.strip():
                continue
            self.dispatch(Request.parse(line))
            self.requests_served += 1
        return self.requests_served

    def dispatch(self, request: Request) -> None:
        if request.command != GENERATE_TAGS:
            raise ProtocolError("unknown command name")
        self.generate_tags(request)

    @contextmanager
    def _artifact(self) -> Iterator[None]:
        self.writer.open()
        try:
            yield
        finally:
            self.writer.close(False)

    def generate_tags(self, request: Request) -> None:
        totals = ScanTotals()
        with self._artifact():
            if request.size is None:
                logger.debug(f"generate-tags from disk: {request.filename}")
                walker = TreeWalker(self.options, self.engine, totals, self.lister)
                walker.expand(request.filename)
            else:
                data = self.stdin.read(request.size)
                if len(data) < request.size:
                    logger.debug(
                        f"short read for {request.filename}: {len(data)} of {request.size} bytes"
                    )
                self.engine.tag_buffer(request.filename, data, totals)
        self._emit({"_type": "completed", "command": GENERATE_TAGS})
