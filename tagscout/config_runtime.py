"""Runtime configuration for tagscout - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from tagscout.utils.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_TAG_FILE,
    ENV_PREFIX,
)
from tagscout.utils.logging import logger
from tagscout.walker.config import DEFAULT_MAX_RECURSION_DEPTH

DEFAULTS = {
    "scan": {
        "recurse": False,
        "follow_links": True,
        "max_recursion_depth": DEFAULT_MAX_RECURSION_DEPTH,
        "exclude": [],
        "exclude_exception": [],
        "files_required": True,
        "filter_terminator": "",
        "print_totals": False,
        "append": False,
        "sorted": True,
        "lister": "auto",
    },
    "paths": {
        "tag_file": DEFAULT_TAG_FILE,
    },
}

_TRUE = {"1", "yes", "true", "on"}
_FALSE = {"0", "no", "false", "off"}


def parse_bool(value: str) -> bool:
    """Parse a yes/no style flag value."""
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"expected one of {sorted(_TRUE | _FALSE)}")


def _coerce(default_value: Any, value: str) -> Any:
    # bool before int: bool is an int subclass
    if isinstance(default_value, bool):
        return parse_bool(value)
    if isinstance(default_value, int):
        return int(value)
    if isinstance(default_value, float):
        return float(value)
    if isinstance(default_value, list):
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .tagscout/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (TAGSCOUT_<SECTION>_<KEY>)
    2. .tagscout/config.json file
    3. Built-in defaults

    Values whose type does not match the default are ignored with a warning.

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
                            else:
                                logger.warning(
                                    f"Ignoring config entry {section}.{key} in {path}"
                                )
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    cfg[section][key] = _coerce(cfg[section][key], value)
                except ValueError as e:
                    logger.warning(
                        f"Invalid value for environment variable {env_var}: '{value}' - {e}"
                    )

    return cfg
