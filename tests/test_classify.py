"""Tests for path classification."""

import os

import pytest

from tagscout.walker.classify import PathKind, classify


class TestClassify:
    def test_regular_file(self, tmp_path):
        target = tmp_path / "a.c"
        target.write_text("int a;\n")

        entry = classify(str(target))

        assert entry.kind is PathKind.FILE
        assert entry.exists
        assert entry.is_regular_file
        assert not entry.is_symlink

    def test_directory(self, tmp_path):
        entry = classify(str(tmp_path))

        assert entry.kind is PathKind.DIRECTORY
        assert entry.is_directory

    def test_missing_path_does_not_raise(self, tmp_path):
        entry = classify(str(tmp_path / "nope.c"))

        assert entry.kind is PathKind.MISSING
        assert not entry.exists
        assert not entry.is_regular_file
        assert not entry.is_directory

    def test_embedded_nul_is_missing(self):
        entry = classify("bad\0name")

        assert entry.kind is PathKind.MISSING
        assert not entry.exists

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlink_to_file_keeps_target_kind(self, tmp_path):
        (tmp_path / "real.c").write_text("int r;\n")
        link = tmp_path / "link.c"
        link.symlink_to(tmp_path / "real.c")

        entry = classify(str(link))

        assert entry.kind is PathKind.SYMLINK
        assert entry.is_symlink
        assert entry.exists
        assert entry.target_kind is PathKind.FILE
        assert entry.is_regular_file

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_dangling_symlink_is_not_existing(self, tmp_path):
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "gone")

        entry = classify(str(link))

        assert entry.is_symlink
        assert not entry.exists
        assert entry.target_kind is PathKind.MISSING

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="fifos unavailable")
    def test_fifo_is_special(self, tmp_path):
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)

        entry = classify(str(fifo))

        assert entry.kind is PathKind.SPECIAL
        assert entry.exists
        assert not entry.is_regular_file
        assert not entry.is_directory
