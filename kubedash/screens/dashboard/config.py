"""Dashboard screen configuration - column definitions, widget IDs and help text."""

from __future__ import annotations

from kubedash.constants.enums import ResourceKind

# =============================================================================
# Table Column Definitions: list[tuple[str, int]] = [(name, width), ...]
# =============================================================================

TABLE_COLUMNS: dict[ResourceKind, list[tuple[str, int]]] = {
    ResourceKind.PODS: [
        ("Namespace", 18),
        ("Name", 40),
        ("Ready", 7),
        ("Status", 18),
        ("Restarts", 9),
        ("Node", 28),
        ("Age", 8),
    ],
    ResourceKind.SERVICES: [
        ("Namespace", 18),
        ("Name", 32),
        ("Type", 13),
        ("Cluster IP", 16),
        ("External IP", 20),
        ("Ports", 24),
        ("Age", 8),
    ],
    ResourceKind.NODES: [
        ("Name", 36),
        ("Status", 16),
        ("Roles", 16),
        ("Version", 12),
        ("CPU", 8),
        ("Memory", 10),
        ("Age", 8),
    ],
    ResourceKind.NAMESPACES: [
        ("Name", 36),
        ("Status", 12),
        ("Age", 8),
    ],
    ResourceKind.DEPLOYMENTS: [
        ("Namespace", 18),
        ("Name", 36),
        ("Ready", 8),
        ("Up-to-date", 11),
        ("Available", 10),
        ("Age", 8),
    ],
    ResourceKind.REPLICA_SETS: [
        ("Namespace", 18),
        ("Name", 40),
        ("Desired", 8),
        ("Current", 8),
        ("Ready", 8),
        ("Age", 8),
    ],
    ResourceKind.STATEFUL_SETS: [
        ("Namespace", 18),
        ("Name", 36),
        ("Ready", 8),
        ("Service", 24),
        ("Age", 8),
    ],
    ResourceKind.DAEMON_SETS: [
        ("Namespace", 18),
        ("Name", 32),
        ("Desired", 8),
        ("Current", 8),
        ("Ready", 8),
        ("Up-to-date", 11),
        ("Available", 10),
        ("Age", 8),
    ],
    ResourceKind.JOBS: [
        ("Namespace", 18),
        ("Name", 36),
        ("Completions", 12),
        ("Duration", 10),
        ("Status", 10),
        ("Age", 8),
    ],
    ResourceKind.CRON_JOBS: [
        ("Namespace", 18),
        ("Name", 32),
        ("Schedule", 16),
        ("Suspend", 8),
        ("Active", 7),
        ("Age", 8),
    ],
    ResourceKind.CONFIGMAPS: [
        ("Namespace", 18),
        ("Name", 40),
        ("Data", 6),
        ("Age", 8),
    ],
    ResourceKind.SECRETS: [
        ("Namespace", 18),
        ("Name", 40),
        ("Type", 36),
        ("Data", 6),
        ("Age", 8),
    ],
    ResourceKind.EVENTS: [
        ("Namespace", 18),
        ("Type", 9),
        ("Reason", 20),
        ("Object", 32),
        ("Count", 6),
        ("Message", 80),
    ],
    ResourceKind.CONTEXTS: [
        ("Name", 32),
        ("Cluster", 32),
        ("User", 32),
        ("Namespace", 18),
        ("Current", 8),
    ],
    ResourceKind.NODE_METRICS: [
        ("Name", 36),
        ("CPU (cores)", 12),
        ("Memory", 10),
    ],
}

# =============================================================================
# Widget IDs
# =============================================================================

ID_CONTEXT_PANEL = "dashboard-context"
ID_CLI_PANEL = "dashboard-cli"
ID_UTILIZATION_PANEL = "dashboard-utilization"
ID_TABS = "dashboard-tabs"
ID_PANE_TITLE = "dashboard-pane-title"
ID_TABLE = "dashboard-table"
ID_MESSAGE = "dashboard-message"
ID_OVERLAY = "dashboard-overlay"
ID_FOOTER = "dashboard-footer"

# =============================================================================
# Help / footer text
# =============================================================================

HELP_LINES: tuple[tuple[str, str], ...] = (
    ("up / k", "Select previous row"),
    ("down / j", "Select next row"),
    ("enter", "Open detail or drill into namespace"),
    ("esc", "Back"),
    ("tab / 1-9", "Next tab / jump to tab"),
    ("n", "Cycle namespace"),
    ("c", "Cycle context"),
    ("d", "Delete selected resource"),
    ("y / n", "Confirm / cancel dialog"),
    ("p", "Pause or resume refresh"),
    ("r", "Refresh now"),
    ("+ / -", "Slower / faster refresh interval"),
    ("?", "Help"),
    ("q", "Quit"),
)

FOOTER_HINTS = "tab: next view | enter: open | esc: back | d: delete | p: pause | ?: help | q: quit"
CONFIRM_HINTS = "y: confirm | n / esc: cancel"

__all__ = [
    "CONFIRM_HINTS",
    "FOOTER_HINTS",
    "HELP_LINES",
    "ID_CLI_PANEL",
    "ID_CONTEXT_PANEL",
    "ID_FOOTER",
    "ID_MESSAGE",
    "ID_OVERLAY",
    "ID_PANE_TITLE",
    "ID_TABLE",
    "ID_TABS",
    "ID_UTILIZATION_PANEL",
    "TABLE_COLUMNS",
]
