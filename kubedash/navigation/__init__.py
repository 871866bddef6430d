"""Navigation state machine: events, commands and the pure transition function.

The event loop lives in ``kubedash.navigation.event_loop`` and is imported
directly by the app.
"""

from kubedash.navigation.events import (
    Command,
    DeleteResource,
    ErrorBanner,
    Event,
    KeyPress,
    PauseRefresh,
    RefreshNow,
    Resize,
    ResumeRefresh,
    SchedulerStatus,
    SetPollInterval,
    Shutdown,
    SnapshotUpdated,
    SwitchContext,
    SwitchNamespace,
    Tick,
)
from kubedash.navigation.state_machine import transition

__all__ = [
    "Command",
    "DeleteResource",
    "ErrorBanner",
    "Event",
    "KeyPress",
    "PauseRefresh",
    "RefreshNow",
    "Resize",
    "ResumeRefresh",
    "SchedulerStatus",
    "SetPollInterval",
    "Shutdown",
    "SnapshotUpdated",
    "SwitchContext",
    "SwitchNamespace",
    "Tick",
    "transition",
]
