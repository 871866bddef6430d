"""Navigation state owned by the event loop.

All values here are frozen; the transition function builds a new state for
every event instead of mutating the previous one.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from kubedash.constants.defaults import ALL_NAMESPACES, POLL_RATE_MS_DEFAULT
from kubedash.constants.enums import OverlayKind, ResourceKind, SchedulerState
from kubedash.constants.resources import kind_spec
from kubedash.models.core.resource_record import ResourceRecord, ResourceRef
from kubedash.models.snapshot.cluster_snapshot import ClusterSnapshot

if TYPE_CHECKING:
    from kubedash.navigation.events import DeleteResource

SelectionKey = tuple[ResourceKind, str]


def scope_for(kind: ResourceKind, namespace: str) -> str:
    """Namespace scope that applies to ``kind`` (cluster-scoped kinds ignore it)."""
    if not kind_spec(kind).namespaced:
        return ALL_NAMESPACES
    return namespace


def visible_records(
    snapshot: ClusterSnapshot,
    kind: ResourceKind,
    namespace: str,
) -> tuple[ResourceRecord, ...]:
    """Records of ``kind`` shown under the namespace filter, in API order."""
    records = snapshot.records(kind)
    scope = scope_for(kind, namespace)
    if scope == ALL_NAMESPACES:
        return records
    return tuple(record for record in records if record.namespace == scope)


def snapshot_for(state: NavigationState, snapshot: ClusterSnapshot) -> ClusterSnapshot:
    """Return ``snapshot``, or an empty one when it belongs to another context.

    After a context switch the store keeps the old context's snapshot until
    the scheduler publishes its purge, so keys and rendering must not act on it.
    """
    if state.context is None or snapshot.context in (None, state.context):
        return snapshot
    return ClusterSnapshot.empty(
        sequence=snapshot.sequence,
        context=state.context,
        namespace=snapshot.namespace,
    )


@dataclass(frozen=True)
class ViewFrame:
    """One entry of the drill-down stack."""

    kind: ResourceKind
    namespace: str
    selection: int | None
    detail: ResourceRef | None = None


@dataclass(frozen=True)
class Overlay:
    """Overlay shown above the active view."""

    kind: OverlayKind = OverlayKind.NONE
    text: str = ""
    blocking: bool = False
    action: DeleteResource | None = None

    @classmethod
    def banner(cls, text: str, *, blocking: bool = False) -> Overlay:
        return cls(kind=OverlayKind.ERROR_BANNER, text=text, blocking=blocking)

    @classmethod
    def confirm(cls, action: DeleteResource, text: str) -> Overlay:
        return cls(kind=OverlayKind.CONFIRM_DIALOG, text=text, action=action)

    @property
    def visible(self) -> bool:
        return self.kind is not OverlayKind.NONE


NO_OVERLAY = Overlay()


@dataclass(frozen=True)
class NavigationState:
    """Active view, selections, drill-down stack and overlay."""

    kind: ResourceKind = ResourceKind.PODS
    namespace: str = ALL_NAMESPACES
    context: str | None = None
    selections: Mapping[SelectionKey, int | None] = field(default_factory=dict)
    stack: tuple[ViewFrame, ...] = ()
    detail: ResourceRef | None = None
    overlay: Overlay = NO_OVERLAY
    paused: bool = False
    poll_interval_ms: int = POLL_RATE_MS_DEFAULT
    scheduler: SchedulerState = SchedulerState.IDLE
    tick: int = 0
    snapshot_sequence: int = 0
    quitting: bool = False

    @property
    def selection_key(self) -> SelectionKey:
        return (self.kind, scope_for(self.kind, self.namespace))

    @property
    def selection(self) -> int | None:
        return self.selections.get(self.selection_key)

    @property
    def in_detail(self) -> bool:
        return self.detail is not None

    def frame(self) -> ViewFrame:
        return ViewFrame(
            kind=self.kind,
            namespace=self.namespace,
            selection=self.selection,
            detail=self.detail,
        )


__all__ = [
    "NO_OVERLAY",
    "NavigationState",
    "Overlay",
    "SelectionKey",
    "ViewFrame",
    "scope_for",
    "snapshot_for",
    "visible_records",
]
