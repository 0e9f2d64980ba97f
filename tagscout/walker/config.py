"""Walker configuration - constants only.

CRITICAL: This file should contain ONLY configuration constants.
NO business logic.
"""

# =============================================================================
# RECURSION LIMITS
# =============================================================================

# Effectively unlimited unless --maxdepth is given
DEFAULT_MAX_RECURSION_DEPTH = 0xFFFFFFFF

# Directory entries never expanded as children
SELF_AND_PARENT = frozenset({".", ".."})

# Directory the bare recursive scan starts from
CURRENT_DIRECTORY = "."

# =============================================================================
# DIRECTORY LISTING
# =============================================================================

# Wildcard appended to a directory by the pattern-based lister
LISTING_WILDCARD = "*"

# Accepted values for scan.lister
LISTER_AUTO = "auto"
LISTER_SCANDIR = "scandir"
LISTER_GLOB = "glob"

# =============================================================================
# EXCLUSION PATTERNS
# =============================================================================

# --exclude=@FILE reads one pattern per line from FILE
PATTERN_FILE_PREFIX = "@"

# Lines starting with this are comments inside a pattern file
PATTERN_FILE_COMMENT = "#"
