"""Constants module for KubeDash TUI.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- resources.py: Per-kind static metadata
- values.py: Scalar constants (strings, numbers with Final)
- timeouts.py: Timeout values (seconds)
- limits.py: Limit values (max/min)
- defaults.py: Default values for settings

Note: Keyboard bindings are defined in kubedash.keyboard module.
"""

from kubedash.constants.defaults import (
    ALL_NAMESPACES,
    AUTH_DENIAL_THRESHOLD_DEFAULT,
    MAX_CONCURRENT_FETCHES_DEFAULT,
    POLL_RATE_MS_DEFAULT,
    THEME_DEFAULT,
    TICK_RATE_MS_DEFAULT,
)
from kubedash.constants.enums import (
    FetchErrorKind,
    FetchState,
    NavKey,
    OverlayKind,
    PaneKind,
    ResourceKind,
    SchedulerState,
)
from kubedash.constants.limits import (
    MAX_ROWS_DISPLAY,
    TICK_RATE_MS_MAX,
)
from kubedash.constants.resources import KIND_SPECS, TAB_KINDS, KindSpec, kind_spec
from kubedash.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    FETCH_TIMEOUT_DEFAULT,
)
from kubedash.constants.values import (
    APP_TITLE,
    APP_VERSION,
)

__all__ = [
    "ALL_NAMESPACES",
    # Application
    "APP_TITLE",
    "APP_VERSION",
    # Defaults
    "AUTH_DENIAL_THRESHOLD_DEFAULT",
    # Timeouts
    "CLUSTER_REQUEST_TIMEOUT",
    "FETCH_TIMEOUT_DEFAULT",
    # Resources
    "KIND_SPECS",
    "MAX_CONCURRENT_FETCHES_DEFAULT",
    # Limits
    "MAX_ROWS_DISPLAY",
    "POLL_RATE_MS_DEFAULT",
    "TAB_KINDS",
    "THEME_DEFAULT",
    "TICK_RATE_MS_DEFAULT",
    "TICK_RATE_MS_MAX",
    # Enums
    "FetchErrorKind",
    "FetchState",
    "KindSpec",
    "NavKey",
    "OverlayKind",
    "PaneKind",
    "ResourceKind",
    "SchedulerState",
    "kind_spec",
]
