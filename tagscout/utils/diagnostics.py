"""Single diagnostic channel, categorized by severity.

Components never raise across their boundaries for recoverable problems.
They call ``notice`` or ``warning`` and carry on; ``fatal`` is the only
severity that changes control flow.
"""

from .errors import FatalError
from .exit_codes import ExitCodes
from .logging import logger


def _with_cause(message: str, cause: OSError | None) -> str:
    if cause is not None and cause.strerror:
        return f"{message}: {cause.strerror}"
    return message


def notice(message: str) -> None:
    """Informational notice; shown with --verbose only."""
    logger.info(message)


def warning(message: str, cause: OSError | None = None) -> None:
    """Recoverable problem. Goes to stderr, never affects the exit code."""
    logger.warning(_with_cause(message, cause))


def fatal(message: str, cause: OSError | None = None, exit_code: int = ExitCodes.FATAL):
    """Abort the current batch or session."""
    raise FatalError(_with_cause(message, cause), exit_code=exit_code)
