"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# UI defaults
# ============================================================================

THEME_DEFAULT: Final = "textual-dark"
TICK_RATE_MS_DEFAULT: Final = 250
POLL_RATE_MS_DEFAULT: Final = 5000

# ============================================================================
# Scope defaults
# ============================================================================

ALL_NAMESPACES: Final = "all"

# ============================================================================
# Refresh defaults
# ============================================================================

MAX_CONCURRENT_FETCHES_DEFAULT: Final = 4
AUTH_DENIAL_THRESHOLD_DEFAULT: Final = 3

__all__ = [
    "ALL_NAMESPACES",
    "AUTH_DENIAL_THRESHOLD_DEFAULT",
    "MAX_CONCURRENT_FETCHES_DEFAULT",
    "POLL_RATE_MS_DEFAULT",
    "THEME_DEFAULT",
    "TICK_RATE_MS_DEFAULT",
]
