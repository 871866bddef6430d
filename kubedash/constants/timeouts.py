"""Timeout constants for the TUI.

All timeout and interval values for API requests, async operations, and refresh cycles.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "20s"

# Process-level command timeouts (must be greater than request timeout)
KUBECTL_COMMAND_TIMEOUT: Final = 30
CLI_VERSION_TIMEOUT: Final = 5

# ============================================================================
# Async operation timeouts (float, in seconds)
# ============================================================================

FETCH_TIMEOUT_DEFAULT: Final = 25.0
CONTEXT_RESOLVE_TIMEOUT: Final = 10.0

__all__ = [
    "CLI_VERSION_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    "CONTEXT_RESOLVE_TIMEOUT",
    "FETCH_TIMEOUT_DEFAULT",
    "KUBECTL_COMMAND_TIMEOUT",
]
