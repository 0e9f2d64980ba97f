"""Centralized exit codes for the tagscout CLI."""


class ExitCodes:
    """Standard exit codes for tagscout CLI commands."""

    SUCCESS = 0

    # print-language probe: at least one file had no recognized language
    LANGUAGE_UNKNOWN = 1

    FATAL = 2

