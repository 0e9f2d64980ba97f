"""Tests for run options, the argument cursor and inline overrides."""

import io

import pytest

from tagscout.config_runtime import DEFAULTS, load_runtime_config
from tagscout.options import ArgCursor, ScanOptions, apply_override, parse_inline_options
from tagscout.utils.errors import FatalError
from tagscout.walker.config import DEFAULT_MAX_RECURSION_DEPTH


class TestArgCursor:
    def test_walks_items_in_order(self):
        cursor = ArgCursor(["a", "b"])
        seen = []
        while not cursor.is_off:
            seen.append(cursor.item)
            cursor.forth()

        assert seen == ["a", "b"]

    def test_empty_source(self):
        cursor = ArgCursor([])

        assert cursor.is_off
        with pytest.raises(IndexError):
            cursor.item

    def test_from_lines_strips_line_endings_and_blank_lines(self):
        cursor = ArgCursor.from_lines(io.StringIO("a.c\r\n\n  \nname with spaces.c\n"))
        seen = []
        while not cursor.is_off:
            seen.append(cursor.item)
            cursor.forth()

        assert seen == ["a.c", "name with spaces.c"]

    def test_source_consumed_lazily(self):
        pulled = []

        def source():
            for item in ("a", "b", "c"):
                pulled.append(item)
                yield item

        cursor = ArgCursor(source())
        assert pulled == ["a"]
        cursor.forth()
        assert pulled == ["a", "b"]


class TestInlineOverrides:
    def test_overrides_consumed_until_first_path(self):
        options = ScanOptions()
        cursor = ArgCursor(["--recurse", "--exclude=*.o", "src", "--links=no"])

        parse_inline_options(cursor, options)

        assert cursor.item == "src"
        assert options.recurse is True
        assert options.exclusion.patterns == ["*.o"]
        assert options.follow_links is True

    def test_double_dash_ends_option_processing(self):
        options = ScanOptions()
        cursor = ArgCursor(["--", "--recurse", "-x.c"])

        parse_inline_options(cursor, options)
        assert cursor.item == "--recurse"
        cursor.forth()
        parse_inline_options(cursor, options)

        assert cursor.item == "-x.c"
        assert options.recurse is False

    def test_single_dash_is_a_path(self):
        cursor = ArgCursor(["-"])

        parse_inline_options(cursor, ScanOptions())

        assert cursor.item == "-"

    @pytest.mark.parametrize(
        "token, field, expected",
        [
            ("--recurse", "recurse", True),
            ("-R", "recurse", True),
            ("--recurse=no", "recurse", False),
            ("--recurse=yes", "recurse", True),
            ("--links=no", "follow_links", False),
            ("--links", "follow_links", True),
            ("--maxdepth=3", "max_recursion_depth", 3),
        ],
    )
    def test_apply_override(self, token, field, expected):
        options = ScanOptions()

        apply_override(token, options)

        assert getattr(options, field) == expected

    def test_exclude_and_exception(self):
        options = ScanOptions()
        apply_override("--exclude=*.js", options)
        apply_override("--exclude-exception=keep.js", options)

        assert options.exclusion.is_excluded("a.js")
        assert not options.exclusion.is_excluded("keep.js")

        apply_override("--exclude=", options)
        assert not options.exclusion.is_excluded("a.js")

    def test_verbose_switches_console_level(self):
        from tagscout.utils.logging import get_console_level

        options = ScanOptions()
        apply_override("--verbose", options)
        assert get_console_level() == "INFO"
        apply_override("--verbose=no", options)
        assert get_console_level() == "WARNING"
        assert options.verbose is False

    @pytest.mark.parametrize(
        "token",
        ["--bogus", "-z", "--maxdepth=0", "--maxdepth=deep", "--maxdepth", "--recurse=maybe"],
    )
    def test_invalid_overrides_are_fatal(self, token):
        with pytest.raises(FatalError):
            apply_override(token, ScanOptions())


class TestScanOptions:
    def test_defaults(self):
        options = ScanOptions()

        assert options.recurse is False
        assert options.follow_links is True
        assert options.max_recursion_depth == DEFAULT_MAX_RECURSION_DEPTH
        assert options.requires_files()

    def test_recursion_lifts_files_requirement(self):
        assert not ScanOptions(recurse=True).requires_files()
        assert not ScanOptions(files_required=False).requires_files()

    def test_from_default_config(self):
        options = ScanOptions.from_config(DEFAULTS)

        assert options.tag_file == "tags"
        assert options.filter_terminator is None
        assert options.lister == "auto"

    def test_from_project_config(self, tmp_path):
        config_dir = tmp_path / ".tagscout"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(
            '{"scan": {"recurse": true, "exclude": ["*.min.js"], "max_recursion_depth": 4},'
            ' "paths": {"tag_file": "TAGS"}}'
        )

        options = ScanOptions.from_config(load_runtime_config(str(tmp_path)))

        assert options.recurse is True
        assert options.max_recursion_depth == 4
        assert options.tag_file == "TAGS"
        assert options.exclusion.is_excluded("web/app.min.js")
