"""Limit and threshold constants for the TUI.

All limit values, thresholds, and validation ranges.
"""

from typing import Final

# ============================================================================
# Display limits
# ============================================================================

MAX_ROWS_DISPLAY: Final = 1000
MAX_ERROR_MESSAGE_LENGTH: Final = 160

# ============================================================================
# Validation limits
# ============================================================================

TICK_RATE_MS_MAX: Final = 1000
POLL_RATE_MS_MIN: Final = 250
# Poll intervals offered by the slower / faster keys.
POLL_INTERVAL_STEPS_MS: Final = (1000, 2000, 5000, 10000, 30000, 60000)
MAX_CONCURRENT_FETCHES_MIN: Final = 1
MAX_CONCURRENT_FETCHES_MAX: Final = 16
AUTH_DENIAL_THRESHOLD_MIN: Final = 1

__all__ = [
    "AUTH_DENIAL_THRESHOLD_MIN",
    "MAX_CONCURRENT_FETCHES_MAX",
    "MAX_CONCURRENT_FETCHES_MIN",
    "MAX_ERROR_MESSAGE_LENGTH",
    "MAX_ROWS_DISPLAY",
    "POLL_INTERVAL_STEPS_MS",
    "POLL_RATE_MS_MIN",
    "TICK_RATE_MS_MAX",
]
