"""Central UI handler for tagscout.

Single source of truth for Rich console styling. The console is bound to
standard error: standard output carries tags, filter terminators and the
interactive protocol, so nothing decorative may land there.

Usage:
    from tagscout.utils.ui import console, print_error

    console.print("[path]src/main.c[/path]")
    print_error("cannot open list file")
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

TAGSCOUT_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "cmd": "bold magenta",
    "path": "bold cyan",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=TAGSCOUT_THEME,
    stderr=True,
    force_terminal=sys.stderr.isatty(),
    highlight=False,
)


def print_error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[error]ERROR:[/error] {escape(msg)}", soft_wrap=True)


def print_stat(msg: str) -> None:
    """Print one statistics line without markup interpretation."""
    console.print(msg, markup=False, soft_wrap=True)
