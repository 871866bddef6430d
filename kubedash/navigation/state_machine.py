"""Pure navigation transition function.

``transition(state, event, snapshot)`` returns the next NavigationState and at
most one command for the event loop to execute. It never mutates its inputs
and performs no I/O. ``snapshot`` is the store's current snapshot, read by
the event loop for this single step; key handling uses it to resolve the
selected record, and ``SnapshotUpdated`` events carry their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType

from kubedash.constants.defaults import ALL_NAMESPACES
from kubedash.constants.enums import NavKey, OverlayKind, ResourceKind
from kubedash.constants.limits import POLL_INTERVAL_STEPS_MS
from kubedash.constants.resources import TAB_KINDS, kind_spec
from kubedash.models.core.resource_record import ResourceRecord
from kubedash.models.snapshot.cluster_snapshot import ClusterSnapshot
from kubedash.models.state.navigation_state import (
    NO_OVERLAY,
    NavigationState,
    Overlay,
    SelectionKey,
    ViewFrame,
    scope_for,
    snapshot_for,
    visible_records,
)
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

Transition = tuple[NavigationState, Command | None]

_EMPTY_SNAPSHOT = ClusterSnapshot.empty()


def transition(
    state: NavigationState,
    event: Event,
    snapshot: ClusterSnapshot | None = None,
) -> Transition:
    """Apply ``event`` to ``state``."""
    if state.quitting:
        return state, None
    if isinstance(event, SnapshotUpdated):
        return _on_snapshot(state, event.snapshot), None
    if isinstance(event, Tick):
        return replace(state, tick=state.tick + 1), None
    if isinstance(event, SchedulerStatus):
        return replace(state, scheduler=event.state), None
    if isinstance(event, Resize):
        # Layout is owned by the terminal; a resize only triggers a redraw.
        return state, None
    if isinstance(event, ErrorBanner):
        return _on_error_banner(state, event), None
    if isinstance(event, KeyPress):
        return _on_key(state, event, snapshot_for(state, snapshot or _EMPTY_SNAPSHOT))
    return state, None


# =============================================================================
# Selection helpers
# =============================================================================


def clamp_selection(selection: int | None, count: int) -> int | None:
    """Clamp ``selection`` into ``[0, count)``; None when there are no rows."""
    if count <= 0:
        return None
    if selection is None:
        return 0
    return max(0, min(selection, count - 1))


def _with_selection(
    selections: Mapping[SelectionKey, int | None],
    key: SelectionKey,
    value: int | None,
) -> Mapping[SelectionKey, int | None]:
    updated = dict(selections)
    updated[key] = value
    return MappingProxyType(updated)


def _select_view(
    state: NavigationState,
    snapshot: ClusterSnapshot,
    *,
    kind: ResourceKind,
    namespace: str,
    selection: int | None = None,
    keep_stored: bool = True,
) -> NavigationState:
    """Activate (kind, namespace) and clamp its selection against ``snapshot``."""
    key = (kind, scope_for(kind, namespace))
    if keep_stored and selection is None:
        selection = state.selections.get(key)
    count = len(visible_records(snapshot, kind, namespace))
    return replace(
        state,
        kind=kind,
        namespace=namespace,
        selections=_with_selection(state.selections, key, clamp_selection(selection, count)),
    )


def selected_record(
    state: NavigationState,
    snapshot: ClusterSnapshot,
) -> ResourceRecord | None:
    """Record under the cursor in the active list view."""
    records = visible_records(snapshot, state.kind, state.namespace)
    index = clamp_selection(state.selection, len(records))
    if index is None:
        return None
    return records[index]


# =============================================================================
# Non-key events
# =============================================================================


def _on_snapshot(state: NavigationState, snapshot: ClusterSnapshot) -> NavigationState:
    if snapshot.context is not None and snapshot.context != state.context:
        if state.context is not None:
            # Queued before the last context switch; superseded by its purge.
            return state
        state = _reset_for_context(state, snapshot.context)

    keys = set(state.selections) | {state.selection_key}
    clamped: dict[SelectionKey, int | None] = {}
    for kind, scope in keys:
        count = len(visible_records(snapshot, kind, scope))
        clamped[(kind, scope)] = clamp_selection(state.selections.get((kind, scope)), count)
    return replace(
        state,
        selections=MappingProxyType(clamped),
        snapshot_sequence=snapshot.sequence,
    )


def _on_error_banner(state: NavigationState, event: ErrorBanner) -> NavigationState:
    current = state.overlay
    if current.kind is OverlayKind.ERROR_BANNER and current.blocking and not event.blocking:
        return state
    return replace(state, overlay=Overlay.banner(event.text, blocking=event.blocking))


def _reset_for_context(state: NavigationState, context: str) -> NavigationState:
    return replace(
        state,
        context=context,
        selections=MappingProxyType({}),
        stack=(),
        detail=None,
        overlay=NO_OVERLAY,
    )


# =============================================================================
# Keys
# =============================================================================


def _on_key(state: NavigationState, event: KeyPress, snapshot: ClusterSnapshot) -> Transition:
    key = event.key
    if key is NavKey.QUIT:
        return replace(state, quitting=True, overlay=NO_OVERLAY), Shutdown()

    overlay = state.overlay
    if overlay.kind is OverlayKind.CONFIRM_DIALOG:
        dismissed = replace(state, overlay=NO_OVERLAY)
        if key is NavKey.CONFIRM and overlay.action is not None:
            return dismissed, overlay.action
        return dismissed, None
    if overlay.kind is OverlayKind.HELP:
        return replace(state, overlay=NO_OVERLAY), None
    if overlay.kind is OverlayKind.ERROR_BANNER and not overlay.blocking:
        return replace(state, overlay=NO_OVERLAY), None

    handler = _KEY_HANDLERS.get(key)
    if handler is None:
        return state, None
    return handler(state, event, snapshot)


def _move(state: NavigationState, snapshot: ClusterSnapshot, step: int) -> Transition:
    if state.in_detail:
        return state, None
    count = len(visible_records(snapshot, state.kind, state.namespace))
    current = clamp_selection(state.selection, count)
    if current is None:
        return replace(
            state,
            selections=_with_selection(state.selections, state.selection_key, None),
        ), None
    target = clamp_selection(current + step, count)
    return replace(
        state,
        selections=_with_selection(state.selections, state.selection_key, target),
    ), None


def _key_up(state: NavigationState, _event: KeyPress, snapshot: ClusterSnapshot) -> Transition:
    return _move(state, snapshot, -1)


def _key_down(state: NavigationState, _event: KeyPress, snapshot: ClusterSnapshot) -> Transition:
    return _move(state, snapshot, 1)


def _key_select(
    state: NavigationState,
    _event: KeyPress,
    snapshot: ClusterSnapshot,
) -> Transition:
    if state.in_detail:
        return state, None
    record = selected_record(state, snapshot)
    if record is None:
        return state, None

    if record.kind is ResourceKind.CONTEXTS:
        if record.name == state.context:
            return state, None
        return _reset_for_context(state, record.name), SwitchContext(record.name)

    pushed = replace(state, stack=(*state.stack, state.frame()))
    if record.kind is ResourceKind.NAMESPACES:
        drilled = _select_view(
            pushed,
            snapshot,
            kind=ResourceKind.PODS,
            namespace=record.name,
        )
        return drilled, _namespace_command(state.namespace, record.name)
    return replace(pushed, detail=record.ref), None


def _key_back(state: NavigationState, _event: KeyPress, snapshot: ClusterSnapshot) -> Transition:
    if not state.stack:
        if state.in_detail:
            return replace(state, detail=None), None
        return state, None
    frame: ViewFrame = state.stack[-1]
    popped = replace(state, stack=state.stack[:-1], detail=frame.detail)
    restored = _select_view(
        popped,
        snapshot,
        kind=frame.kind,
        namespace=frame.namespace,
        selection=frame.selection,
        keep_stored=False,
    )
    return restored, _namespace_command(state.namespace, frame.namespace)


def _key_switch_tab(
    state: NavigationState,
    event: KeyPress,
    snapshot: ClusterSnapshot,
) -> Transition:
    if event.argument is not None:
        if not 0 <= event.argument < len(TAB_KINDS):
            return state, None
        kind = TAB_KINDS[event.argument]
    elif state.kind in TAB_KINDS:
        kind = TAB_KINDS[(TAB_KINDS.index(state.kind) + 1) % len(TAB_KINDS)]
    else:
        kind = TAB_KINDS[0]
    cleared = replace(state, stack=(), detail=None)
    return _select_view(cleared, snapshot, kind=kind, namespace=state.namespace), None


def _key_switch_namespace(
    state: NavigationState,
    _event: KeyPress,
    snapshot: ClusterSnapshot,
) -> Transition:
    choices = [ALL_NAMESPACES]
    choices.extend(record.name for record in snapshot.records(ResourceKind.NAMESPACES))
    if state.namespace in choices:
        namespace = choices[(choices.index(state.namespace) + 1) % len(choices)]
    else:
        namespace = ALL_NAMESPACES
    if namespace == state.namespace:
        return state, None
    cleared = replace(state, stack=(), detail=None)
    switched = _select_view(cleared, snapshot, kind=state.kind, namespace=namespace)
    return switched, SwitchNamespace(namespace)


def _key_switch_context(
    state: NavigationState,
    _event: KeyPress,
    snapshot: ClusterSnapshot,
) -> Transition:
    names = [record.name for record in snapshot.records(ResourceKind.CONTEXTS)]
    if not names:
        return state, None
    if state.context in names:
        name = names[(names.index(state.context) + 1) % len(names)]
    else:
        name = names[0]
    if name == state.context:
        return state, None
    return _reset_for_context(state, name), SwitchContext(name)


def _key_delete(
    state: NavigationState,
    _event: KeyPress,
    snapshot: ClusterSnapshot,
) -> Transition:
    if state.in_detail:
        ref = state.detail
    else:
        record = selected_record(state, snapshot)
        ref = record.ref if record is not None else None
    if ref is None:
        return state, None
    spec = kind_spec(ref.kind)
    if not spec.deletable:
        return replace(
            state,
            overlay=Overlay.banner(f"{spec.label} cannot be deleted"),
        ), None
    prompt = f"Delete {ref.display_name()}? (y = confirm, n = cancel)"
    action = DeleteResource(ref, state.context)
    return replace(state, overlay=Overlay.confirm(action, prompt)), None


def _key_pause_toggle(
    state: NavigationState,
    _event: KeyPress,
    _snapshot: ClusterSnapshot,
) -> Transition:
    if state.paused:
        return replace(state, paused=False), ResumeRefresh()
    return replace(state, paused=True), PauseRefresh()


def _key_refresh(
    state: NavigationState,
    _event: KeyPress,
    _snapshot: ClusterSnapshot,
) -> Transition:
    return state, RefreshNow()


def _step_interval(state: NavigationState, slower: bool) -> Transition:
    current = state.poll_interval_ms
    if slower:
        steps = [ms for ms in POLL_INTERVAL_STEPS_MS if ms > current]
        target = steps[0] if steps else None
    else:
        steps = [ms for ms in POLL_INTERVAL_STEPS_MS if ms < current]
        target = steps[-1] if steps else None
    if target is None:
        return state, None
    return replace(state, poll_interval_ms=target), SetPollInterval(target)


def _key_slower(
    state: NavigationState,
    _event: KeyPress,
    _snapshot: ClusterSnapshot,
) -> Transition:
    return _step_interval(state, slower=True)


def _key_faster(
    state: NavigationState,
    _event: KeyPress,
    _snapshot: ClusterSnapshot,
) -> Transition:
    return _step_interval(state, slower=False)


def _key_help(
    state: NavigationState,
    _event: KeyPress,
    _snapshot: ClusterSnapshot,
) -> Transition:
    return replace(state, overlay=Overlay(kind=OverlayKind.HELP)), None


def _namespace_command(previous: str, current: str) -> Command | None:
    if previous == current:
        return None
    return SwitchNamespace(current)


_KEY_HANDLERS = {
    NavKey.UP: _key_up,
    NavKey.DOWN: _key_down,
    NavKey.SELECT: _key_select,
    NavKey.BACK: _key_back,
    NavKey.SWITCH_TAB: _key_switch_tab,
    NavKey.SWITCH_NAMESPACE: _key_switch_namespace,
    NavKey.SWITCH_CONTEXT: _key_switch_context,
    NavKey.DELETE: _key_delete,
    NavKey.PAUSE_TOGGLE: _key_pause_toggle,
    NavKey.REFRESH: _key_refresh,
    NavKey.HELP: _key_help,
    NavKey.SLOWER: _key_slower,
    NavKey.FASTER: _key_faster,
}


__all__ = [
    "Transition",
    "clamp_selection",
    "selected_record",
    "transition",
]
