"""Events consumed and commands produced by the navigation state machine."""

from __future__ import annotations

from dataclasses import dataclass

from kubedash.constants.enums import NavKey, SchedulerState
from kubedash.models.core.resource_record import ResourceRef
from kubedash.models.snapshot.cluster_snapshot import ClusterSnapshot

# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class KeyPress:
    """A key from the fixed navigation vocabulary.

    ``argument`` carries the tab index for ``switch-tab`` (None = next tab).
    """

    key: NavKey
    argument: int | None = None


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Tick:
    """UI timer tick; advances the refresh indicator and re-renders ages."""


@dataclass(frozen=True)
class SnapshotUpdated:
    snapshot: ClusterSnapshot


@dataclass(frozen=True)
class ErrorBanner:
    text: str
    blocking: bool = False


@dataclass(frozen=True)
class SchedulerStatus:
    state: SchedulerState


Event = KeyPress | Resize | Tick | SnapshotUpdated | ErrorBanner | SchedulerStatus


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class DeleteResource:
    """Delete ``ref`` in the context that was active when it was confirmed."""

    ref: ResourceRef
    context: str | None = None


@dataclass(frozen=True)
class SwitchContext:
    name: str


@dataclass(frozen=True)
class SwitchNamespace:
    namespace: str


@dataclass(frozen=True)
class PauseRefresh:
    pass


@dataclass(frozen=True)
class ResumeRefresh:
    pass


@dataclass(frozen=True)
class RefreshNow:
    pass


@dataclass(frozen=True)
class SetPollInterval:
    milliseconds: int


@dataclass(frozen=True)
class Shutdown:
    pass


Command = (
    DeleteResource
    | SwitchContext
    | SwitchNamespace
    | PauseRefresh
    | ResumeRefresh
    | RefreshNow
    | SetPollInterval
    | Shutdown
)


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
]
