"""Centralized error handler for tagscout commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from .errors import FatalError
from .logging import logger
from .ui import print_error


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator mapping run-ending exceptions onto click's exit protocol.

    ``FatalError`` is an expected outcome (missing list file, malformed
    interactive request) and is reported as a one-line diagnostic with the
    error's exit code. Anything else is a bug and is logged with its
    traceback before being surfaced as a ``ClickException``.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FatalError as e:
            print_error(e.message)
            raise click.exceptions.Exit(e.exit_code) from e
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as e:
            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=str(e),
            )
            raise click.ClickException(f"{type(e).__name__}: {e}") from e

    return wrapper
