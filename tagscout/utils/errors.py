"""Exceptions that terminate a run.

Recoverable conditions never raise; they are reported through
``tagscout.utils.diagnostics`` and the run continues. Only the fatal
severity unwinds control flow, and it does so with these classes.
"""

from .exit_codes import ExitCodes


class FatalError(Exception):
    """Raised for conditions that abort the whole batch or session.

    Attributes:
        message: Human-readable diagnostic
        exit_code: Process exit status the CLI should use
    """

    def __init__(self, message: str, exit_code: int = ExitCodes.FATAL):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ProtocolError(FatalError):
    """Malformed interactive request; ends the interactive session."""
