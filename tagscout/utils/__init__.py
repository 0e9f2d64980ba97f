"""tagscout utilities package."""

from .constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_TAG_FILE,
    PROGRAM_NAME,
)
from .diagnostics import fatal, notice, warning
from .error_handler import handle_exceptions
from .errors import FatalError, ProtocolError
from .exit_codes import ExitCodes
from .logging import logger, set_console_level

__all__ = [
    "PROGRAM_NAME",
    "CONFIG_DIR_NAME",
    "CONFIG_FILE_NAME",
    "DEFAULT_TAG_FILE",
    "notice",
    "warning",
    "fatal",
    "handle_exceptions",
    "FatalError",
    "ProtocolError",
    "ExitCodes",
    "logger",
    "set_console_level",
]
