"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

from tagscout.options import ScanOptions
from tagscout.utils.logging import logger


class RecordingEngine:
    """Tag engine double: records every dispatch.

    Files whose basename is in ``resize_for`` report a resize signal.
    """

    def __init__(self, resize_for=()):
        self.files = []
        self.buffers = []
        self.resize_for = set(resize_for)

    def tag_file(self, path, totals):
        with open(path, "rb") as f:
            data = f.read()
        self.files.append(path)
        totals.add(1, data.count(b"\n"), len(data))
        return os.path.basename(path) in self.resize_for

    def tag_buffer(self, filename, data, totals):
        self.buffers.append((filename, data))
        totals.add(1, data.count(b"\n"), len(data))
        return False


class RecordingWriter:
    """Tag writer double enforcing the open/close protocol."""

    def __init__(self):
        self.is_open = False
        self.opened = 0
        self.closes = []
        self.tags_added = 0
        self.tags_total = 0
        self.sorted = True

    def open(self):
        if self.is_open:
            raise RuntimeError("already open")
        self.is_open = True
        self.opened += 1

    def add(self, entry):
        self.tags_added += 1

    def close(self, resize):
        if not self.is_open:
            raise RuntimeError("not open")
        self.is_open = False
        self.closes.append(resize)
        self.tags_total += self.tags_added


@pytest.fixture
def make_engine():
    return RecordingEngine


@pytest.fixture
def engine():
    return RecordingEngine()


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
def options():
    """Recursive scan options with no limits or exclusions."""
    return ScanOptions(recurse=True)


@pytest.fixture
def log_messages():
    """Capture loguru output as 'LEVEL: message' strings."""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(
            f"{message.record['level'].name}: {message.record['message']}"
        ),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def source_tree(tmp_path):
    """Small project:

    project/
      main.c
      util.h
      .hidden.c
      src/
        a.c
        nested/
          b.py
      vendor/
        lib.min.js
    """
    root = tmp_path / "project"
    (root / "src" / "nested").mkdir(parents=True)
    (root / "vendor").mkdir()
    (root / "main.c").write_text("int main(void)\n{\n  return 0;\n}\n")
    (root / "util.h").write_text("#define UTIL 1\n")
    (root / ".hidden.c").write_text("static int h;\n")
    (root / "src" / "a.c").write_text("void a(void) {}\n")
    (root / "src" / "nested" / "b.py").write_text("def b():\n    pass\n")
    (root / "vendor" / "lib.min.js").write_text("var x=1;\n")
    return root


def relative_names(paths, root: Path):
    """Dispatched paths as sorted POSIX paths relative to ``root``."""
    return sorted(Path(p).resolve().relative_to(root.resolve()).as_posix() for p in paths)


@pytest.fixture
def rel():
    return relative_names
