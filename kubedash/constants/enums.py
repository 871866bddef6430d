"""All enum definitions for the TUI.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Resource Enums
# =============================================================================

class ResourceKind(Enum):
    """Closed set of resource kinds the dashboard knows how to fetch."""

    PODS = "pods"
    NODES = "nodes"
    NAMESPACES = "namespaces"
    DEPLOYMENTS = "deployments"
    SERVICES = "services"
    CONFIGMAPS = "configmaps"
    SECRETS = "secrets"
    REPLICA_SETS = "replica-sets"
    STATEFUL_SETS = "stateful-sets"
    DAEMON_SETS = "daemon-sets"
    JOBS = "jobs"
    CRON_JOBS = "cron-jobs"
    EVENTS = "events"
    CONTEXTS = "contexts"
    NODE_METRICS = "node-metrics"


class NodeStatus(Enum):
    """Node status values from Kubernetes API."""

    READY = "Ready"
    NOT_READY = "NotReady"
    UNKNOWN = "Unknown"


# =============================================================================
# Fetch Enums
# =============================================================================

class FetchErrorKind(Enum):
    """Categories of fetch failures, used to pick retry vs. disable policy."""

    CONNECTION = "connection"
    TIMEOUT = "timeout"
    AUTH_DENIED = "auth-denied"
    NOT_SERVED = "not-served"
    NOT_FOUND = "not-found"
    SERVER = "server"


class FetchState(Enum):
    """Per-kind fetch state values shown in the status line."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
    DISABLED = "disabled"


class SchedulerState(Enum):
    """Refresh scheduler lifecycle states."""

    IDLE = "idle"
    REFRESHING = "refreshing"
    PAUSED = "paused"


# =============================================================================
# Navigation Enums
# =============================================================================

class NavKey(Enum):
    """Fixed key vocabulary understood by the navigation state machine."""

    UP = "up"
    DOWN = "down"
    SELECT = "select"
    BACK = "back"
    SWITCH_TAB = "switch-tab"
    SWITCH_NAMESPACE = "switch-namespace"
    SWITCH_CONTEXT = "switch-context"
    DELETE = "delete"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    QUIT = "quit"
    PAUSE_TOGGLE = "pause-toggle"
    REFRESH = "refresh"
    HELP = "help"
    SLOWER = "slower"
    FASTER = "faster"


class OverlayKind(Enum):
    """Overlay shown above the active view."""

    NONE = "none"
    ERROR_BANNER = "error-banner"
    CONFIRM_DIALOG = "confirm-dialog"
    HELP = "help"


class PaneKind(Enum):
    """Shapes a rendered pane can take."""

    TABLE = "table"
    DETAIL = "detail"
    ERROR = "error"
    EMPTY = "empty"
    LOADING = "loading"


__all__ = [
    "FetchErrorKind",
    "FetchState",
    "NavKey",
    "NodeStatus",
    "OverlayKind",
    "PaneKind",
    "ResourceKind",
    "SchedulerState",
]
