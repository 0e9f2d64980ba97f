"""Language detection for the print-language probe.

Detection looks at the file extension first, then at a ``#!`` interpreter
line. Returns None for unsupported inputs.
"""

import os
import re

EXTENSION_LANGUAGES = {
    ".c": "C",
    ".h": "C",
    ".cc": "C++",
    ".cpp": "C++",
    ".cxx": "C++",
    ".hh": "C++",
    ".hpp": "C++",
    ".cs": "C#",
    ".go": "Go",
    ".java": "Java",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".py": "Python",
    ".pyi": "Python",
    ".rb": "Ruby",
    ".rs": "Rust",
    ".sh": "Sh",
    ".bash": "Sh",
    ".pl": "Perl",
    ".pm": "Perl",
    ".lua": "Lua",
    ".php": "PHP",
    ".tf": "HCL",
    ".tfvars": "HCL",
    ".sql": "SQL",
    ".md": "Markdown",
}

FILENAME_LANGUAGES = {
    "Makefile": "Make",
    "GNUmakefile": "Make",
    "makefile": "Make",
    "Dockerfile": "Dockerfile",
    "CMakeLists.txt": "CMake",
}

INTERPRETER_LANGUAGES = {
    "python": "Python",
    "python3": "Python",
    "sh": "Sh",
    "bash": "Sh",
    "zsh": "Zsh",
    "perl": "Perl",
    "ruby": "Ruby",
    "node": "JavaScript",
    "lua": "Lua",
}

# "#!/usr/bin/env -S python3 -u" -> python3
_SHEBANG = re.compile(r"^#!\s*(?:\S*/)?(?:env\s+(?:-\S+\s+)*)?([A-Za-z][\w.+-]*)")
_VERSION_SUFFIX = re.compile(r"[\d.]+$")


def guess_language(path: str, first_line: str = "") -> str | None:
    """Guess the language of ``path``."""
    name = os.path.basename(path)
    if name in FILENAME_LANGUAGES:
        return FILENAME_LANGUAGES[name]

    _, ext = os.path.splitext(name)
    if ext.lower() in EXTENSION_LANGUAGES:
        return EXTENSION_LANGUAGES[ext.lower()]

    match = _SHEBANG.match(first_line)
    if match:
        interpreter = match.group(1)
        if interpreter in INTERPRETER_LANGUAGES:
            return INTERPRETER_LANGUAGES[interpreter]
        return INTERPRETER_LANGUAGES.get(_VERSION_SUFFIX.sub("", interpreter))
    return None
