"""Centralized constants for the tagscout utils package.

This module provides a single source of truth for paths, file names and
environment variable names used across modules.
"""

# ============================================================================
# PROGRAM IDENTITY
# ============================================================================

PROGRAM_NAME = "tagscout"

# ============================================================================
# CONFIGURATION FILES
# ============================================================================

# Per-project configuration directory (looked up under the scan root)
CONFIG_DIR_NAME = ".tagscout"
CONFIG_FILE_NAME = "config.json"

# Default output artifact
DEFAULT_TAG_FILE = "tags"

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

# Prefix for TAGSCOUT_<SECTION>_<KEY> configuration overrides
ENV_PREFIX = "TAGSCOUT"

ENV_LOG_LEVEL = "TAGSCOUT_LOG_LEVEL"
ENV_LOG_JSON = "TAGSCOUT_LOG_JSON"
ENV_LOG_FILE = "TAGSCOUT_LOG_FILE"
