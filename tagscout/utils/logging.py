"""Centralized logging configuration using Loguru.

Every diagnostic tagscout emits goes through this logger. Standard output is
reserved for tag output, the filter terminator and the interactive protocol,
so all sinks configured here write to standard error or to a file.

Usage:
    from tagscout.utils.logging import logger
    logger.warning("cannot open input file")
    logger.info("excluding")  # Only shows with --verbose or TAGSCOUT_LOG_LEVEL=INFO

Environment Variables:
    TAGSCOUT_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: WARNING)
    TAGSCOUT_LOG_JSON: 0|1 (default: 0, human-readable)
    TAGSCOUT_LOG_FILE: path to log file (optional)
"""

import json
import os
import sys

from loguru import logger

from .constants import ENV_LOG_FILE, ENV_LOG_JSON, ENV_LOG_LEVEL

# Remove default handler
logger.remove()

# Pino-compatible numeric levels
PINO_LEVELS = {
    "TRACE": 10,
    "DEBUG": 20,
    "INFO": 30,
    "WARNING": 40,
    "ERROR": 50,
    "CRITICAL": 60,
}

_log_level = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()
_json_mode = os.environ.get(ENV_LOG_JSON, "0") == "1"
_log_file = os.environ.get(ENV_LOG_FILE)


def _pino_record(message) -> str:
    """Render a loguru message as one Pino-compatible NDJSON line."""
    record = message.record

    pino_log = {
        "level": PINO_LEVELS.get(record["level"].name, 30),
        "time": int(record["time"].timestamp() * 1000),
        "msg": record["message"],
        "pid": record["process"].id,
    }

    for key, value in record["extra"].items():
        pino_log[key] = value

    if record["exception"]:
        pino_log["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    return json.dumps(pino_log, default=str) + "\n"


def pino_compatible_sink(message):
    """Write Pino-format records to stderr.

    CRITICAL: Never call logger.* inside a sink - causes infinite recursion
    """
    sys.stderr.write(_pino_record(message))
    sys.stderr.flush()


# Human-readable format (no emojis - Windows CP1252 compatibility)
_human_format = "<level>{level: <8}</level> | <level>{message}</level>"

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")
logger.level("CRITICAL", color="<red><bold>")

# Track the console handler so --verbose can swap its level
_console_handler_id: int | None = None


def _add_console_handler(level: str) -> int:
    if _json_mode:
        return logger.add(pino_compatible_sink, level=level, colorize=False)
    return logger.add(
        sys.stderr,
        level=level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )


_console_handler_id = _add_console_handler(_log_level)

if _log_file:
    def _file_pino_sink(message):
        """Write Pino-format JSON to the configured log file."""
        with open(_log_file, "a", encoding="utf-8") as f:
            f.write(_pino_record(message))

    logger.add(
        _file_pino_sink,
        level="DEBUG",  # File always captures everything
    )


def set_console_level(level: str) -> None:
    """Replace the console handler with one filtering at ``level``.

    Used by ``--verbose`` to surface informational notices (excluded paths,
    skipped links, directories entered) without touching the file sink.
    """
    global _console_handler_id, _log_level

    _log_level = level.upper()
    if _console_handler_id is not None:
        try:
            logger.remove(_console_handler_id)
        except ValueError:
            pass  # Already removed
    _console_handler_id = _add_console_handler(_log_level)


def get_console_level() -> str:
    """Return the level the console handler currently filters at."""
    return _log_level


__all__ = [
    "logger",
    "set_console_level",
    "get_console_level",
]
