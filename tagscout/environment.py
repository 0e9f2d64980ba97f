"""Environment sanitization.

Runs once at startup, before anything can spawn a subprocess. Inherited
variables whose value is an exported shell function (``() { ...``) are a
code-injection vector for any shell we start; they are reset to the empty
string unless the name is a known, benign function export.
"""

import os
from collections.abc import MutableMapping

from tagscout.utils.diagnostics import warning

SHELL_FUNCTION_MARKER = "() {"

# Environment-modules and software-collections shell integration.
# Current bash spells exported functions BASH_FUNC_<name>%%, older bash BASH_FUNC_<name>().
SAFE_FUNCTION_EXPORTS = frozenset({
    "BASH_FUNC_module()",
    "BASH_FUNC_module%%",
    "BASH_FUNC_scl()",
    "BASH_FUNC_scl%%",
})


def is_safe_export(name: str) -> bool:
    return name in SAFE_FUNCTION_EXPORTS


def sanitize_environment(environ: MutableMapping[str, str] | None = None) -> list[str]:
    """Neutralize shell-function exports in ``environ``.

    Args:
        environ: Mapping to clean in place (default: os.environ)

    Returns:
        Names of the variables that were reset
    """
    if environ is None:
        environ = os.environ

    reset = []
    for name, value in list(environ.items()):
        if not value.startswith(SHELL_FUNCTION_MARKER):
            continue
        if is_safe_export(name):
            continue
        warning(f"reset environment: {name}={value}")
        environ[name] = ""
        reset.append(name)
    return reset
