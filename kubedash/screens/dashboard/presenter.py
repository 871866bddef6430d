"""Dashboard presenter - pure rendering of navigation state and snapshot.

:func:`render` maps (NavigationState, ClusterSnapshot, now) to a Frame. It
reads nothing else and draws nothing; the dashboard screen turns the Frame
into widget updates. Error and empty outcomes are two more pane shapes, so
callers never special-case them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from kubedash.constants.defaults import ALL_NAMESPACES
from kubedash.constants.enums import (
    FetchErrorKind,
    OverlayKind,
    PaneKind,
    ResourceKind,
    SchedulerState,
)
from kubedash.constants.limits import MAX_ROWS_DISPLAY
from kubedash.constants.resources import TAB_KINDS, kind_spec
from kubedash.constants.values import (
    ACCESS_DENIED_MESSAGE,
    DISABLED_SUFFIX,
    EMPTY_PANE_MESSAGE,
    LAST_SUCCESS_PREFIX,
    LOADING_PANE_MESSAGE,
    MISSING_DETAIL_MESSAGE,
    NO_CONTEXT_MESSAGE,
    SPINNER_FRAMES,
    STATUS_LIVE,
    STATUS_LOADING,
    STATUS_PAUSED,
    STATUS_REFRESHING,
)
from kubedash.models.cache.snapshot_store import KindStatus
from kubedash.models.core.resource_record import ResourceRecord, ResourceRef
from kubedash.models.snapshot.cluster_snapshot import ClusterSnapshot, FetchOutcome
from kubedash.models.state.navigation_state import (
    NavigationState,
    snapshot_for,
    visible_records,
)
from kubedash.navigation.state_machine import clamp_selection
from kubedash.screens.dashboard.config import (
    CONFIRM_HINTS,
    FOOTER_HINTS,
    HELP_LINES,
    TABLE_COLUMNS,
)
from kubedash.utils.resource_parser import format_age, format_bytes

# =============================================================================
# Frame description
# =============================================================================


@dataclass(frozen=True)
class HeaderInfo:
    context: str
    cluster: str
    user: str
    namespace: str
    status: str
    sequence: int
    refresh_every: str = ""


@dataclass(frozen=True)
class TabInfo:
    kind: ResourceKind
    label: str
    active: bool
    marker: str = ""


@dataclass(frozen=True)
class UtilizationInfo:
    """Average node CPU / memory usage; ``message`` is set when unavailable."""

    cpu_percent: float | None = None
    memory_percent: float | None = None
    message: str = ""


@dataclass(frozen=True)
class Pane:
    kind: PaneKind
    title: str
    columns: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()
    selected: int | None = None
    message: str = ""
    detail_lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class Frame:
    header: HeaderInfo
    tabs: tuple[TabInfo, ...]
    pane: Pane
    utilization: UtilizationInfo
    overlay_kind: OverlayKind = OverlayKind.NONE
    overlay_text: str = ""
    footer: str = FOOTER_HINTS
    blocking: bool = False


# =============================================================================
# Row builders, one per kind
# =============================================================================

RowBuilder = Callable[[ResourceRecord, datetime], tuple[str, ...]]


def _age(record: ResourceRecord, now: datetime) -> str:
    return format_age(record.age_seconds(now))


def _ns(record: ResourceRecord) -> str:
    return record.namespace or ""


_ROW_BUILDERS: dict[ResourceKind, RowBuilder] = {
    ResourceKind.PODS: lambda r, now: (
        _ns(r), r.name, str(r.field("ready")), r.status,
        str(r.field("restarts", 0)), str(r.field("node")), _age(r, now),
    ),
    ResourceKind.SERVICES: lambda r, now: (
        _ns(r), r.name, str(r.field("type")), str(r.field("cluster_ip")),
        str(r.field("external_ip")), str(r.field("ports")), _age(r, now),
    ),
    ResourceKind.NODES: lambda r, now: (
        r.name, r.status, str(r.field("roles")), str(r.field("version")),
        f"{r.field('cpu_allocatable', 0):g}",
        format_bytes(r.field("memory_allocatable", 0)), _age(r, now),
    ),
    ResourceKind.NAMESPACES: lambda r, now: (r.name, r.status, _age(r, now)),
    ResourceKind.DEPLOYMENTS: lambda r, now: (
        _ns(r), r.name, str(r.field("ready")), str(r.field("up_to_date", 0)),
        str(r.field("available", 0)), _age(r, now),
    ),
    ResourceKind.REPLICA_SETS: lambda r, now: (
        _ns(r), r.name, str(r.field("desired", 0)), str(r.field("current", 0)),
        str(r.field("ready", 0)), _age(r, now),
    ),
    ResourceKind.STATEFUL_SETS: lambda r, now: (
        _ns(r), r.name, str(r.field("ready")), str(r.field("service")), _age(r, now),
    ),
    ResourceKind.DAEMON_SETS: lambda r, now: (
        _ns(r), r.name, str(r.field("desired", 0)), str(r.field("current", 0)),
        str(r.field("ready", 0)), str(r.field("up_to_date", 0)),
        str(r.field("available", 0)), _age(r, now),
    ),
    ResourceKind.JOBS: lambda r, now: (
        _ns(r), r.name, str(r.field("completions")), str(r.field("duration")),
        r.status, _age(r, now),
    ),
    ResourceKind.CRON_JOBS: lambda r, now: (
        _ns(r), r.name, str(r.field("schedule")),
        "True" if r.field("suspend", False) else "False",
        str(r.field("active", 0)), _age(r, now),
    ),
    ResourceKind.CONFIGMAPS: lambda r, now: (
        _ns(r), r.name, str(r.field("data", 0)), _age(r, now),
    ),
    ResourceKind.SECRETS: lambda r, now: (
        _ns(r), r.name, str(r.field("type")), str(r.field("data", 0)), _age(r, now),
    ),
    ResourceKind.EVENTS: lambda r, now: (
        _ns(r), r.status, str(r.field("reason")), str(r.field("object")),
        str(r.field("count", 1)), str(r.field("message")),
    ),
    ResourceKind.CONTEXTS: lambda r, now: (
        r.name, str(r.field("cluster")), str(r.field("user")),
        str(r.field("namespace")), "*" if r.status == "current" else "",
    ),
    ResourceKind.NODE_METRICS: lambda r, now: (
        r.name, f"{r.field('cpu_usage', 0):.2f}", format_bytes(r.field("memory_usage", 0)),
    ),
}


# =============================================================================
# render()
# =============================================================================


def render(
    state: NavigationState,
    snapshot: ClusterSnapshot,
    now: datetime | None = None,
    statuses: Mapping[ResourceKind, KindStatus] | None = None,
) -> Frame:
    """Describe the frame for ``state`` over ``snapshot``.

    ``statuses`` is the store's per-kind metadata for ``snapshot``; it adds the
    age of the last successful fetch to error panes.
    """
    now = now or datetime.now(timezone.utc)
    current = snapshot_for(state, snapshot)
    if current is not snapshot:
        snapshot, statuses = current, None
    overlay = state.overlay
    overlay_text = overlay.text
    if overlay.kind is OverlayKind.HELP:
        overlay_text = "\n".join(f"{keys:<12} {text}" for keys, text in HELP_LINES)
    footer = CONFIRM_HINTS if overlay.kind is OverlayKind.CONFIRM_DIALOG else FOOTER_HINTS

    return Frame(
        header=_header(state, snapshot),
        tabs=_tabs(state, snapshot),
        pane=_pane(state, snapshot, now, statuses or {}),
        utilization=summarize_utilization(snapshot),
        overlay_kind=overlay.kind,
        overlay_text=overlay_text,
        footer=footer,
        blocking=overlay.blocking,
    )


def _header(state: NavigationState, snapshot: ClusterSnapshot) -> HeaderInfo:
    context = state.context or snapshot.context
    cluster = user = ""
    for record in snapshot.records(ResourceKind.CONTEXTS):
        if record.name == context:
            cluster = str(record.field("cluster"))
            user = str(record.field("user"))
            break

    if state.paused or state.scheduler is SchedulerState.PAUSED:
        status = STATUS_PAUSED
    elif state.scheduler is SchedulerState.REFRESHING:
        status = f"{STATUS_REFRESHING} {SPINNER_FRAMES[state.tick % len(SPINNER_FRAMES)]}"
    elif snapshot.outcome(state.kind) is None:
        status = STATUS_LOADING
    else:
        status = STATUS_LIVE
    return HeaderInfo(
        context=context or NO_CONTEXT_MESSAGE,
        cluster=cluster,
        user=user,
        namespace=state.namespace or ALL_NAMESPACES,
        status=status,
        sequence=snapshot.sequence,
        refresh_every=_interval_text(state.poll_interval_ms),
    )


def _interval_text(milliseconds: int) -> str:
    if milliseconds < 1000:
        return f"{milliseconds}ms"
    return format_age(milliseconds / 1000)


def _tabs(state: NavigationState, snapshot: ClusterSnapshot) -> tuple[TabInfo, ...]:
    tabs = []
    for kind in TAB_KINDS:
        outcome = snapshot.outcome(kind)
        marker = ""
        if outcome is not None and outcome.disabled:
            marker = "x"
        elif outcome is not None and not outcome.ok:
            marker = "!"
        tabs.append(
            TabInfo(
                kind=kind,
                label=kind_spec(kind).label,
                active=kind is state.kind,
                marker=marker,
            )
        )
    return tuple(tabs)


def error_message(outcome: FetchOutcome) -> str:
    """Inline error marker text for a failed outcome."""
    error = outcome.error
    if error is None:
        return ""
    if error.kind is FetchErrorKind.AUTH_DENIED:
        text = f"{ACCESS_DENIED_MESSAGE}: {error.message}"
    else:
        text = f"{error.kind.value}: {error.message}"
    if outcome.disabled:
        text = f"{text} {DISABLED_SUFFIX}"
    return text


def _pane(
    state: NavigationState,
    snapshot: ClusterSnapshot,
    now: datetime,
    statuses: Mapping[ResourceKind, KindStatus],
) -> Pane:
    spec = kind_spec(state.kind)
    title = spec.label
    if spec.namespaced:
        title = f"{title} (ns: {state.namespace})"

    if state.detail is not None:
        return _detail_pane(state.detail, snapshot, now)

    outcome = snapshot.outcome(state.kind)
    if outcome is None:
        return Pane(kind=PaneKind.LOADING, title=title, message=LOADING_PANE_MESSAGE)
    if not outcome.ok:
        message = error_message(outcome)
        status = statuses.get(state.kind)
        if status is not None and status.last_success_at is not None:
            age = format_age((now - status.last_success_at).total_seconds())
            message = f"{message} ({LAST_SUCCESS_PREFIX} {age} ago)"
        return Pane(kind=PaneKind.ERROR, title=title, message=message)

    records = visible_records(snapshot, state.kind, state.namespace)
    if not records:
        return Pane(kind=PaneKind.EMPTY, title=title, message=EMPTY_PANE_MESSAGE)

    builder = _ROW_BUILDERS[state.kind]
    shown = records[:MAX_ROWS_DISPLAY]
    selected = clamp_selection(state.selection, len(shown))
    return Pane(
        kind=PaneKind.TABLE,
        title=f"{title} [{len(records)}]",
        columns=tuple(name for name, _ in TABLE_COLUMNS[state.kind]),
        rows=tuple(builder(record, now) for record in shown),
        selected=selected,
    )


def _detail_pane(ref: ResourceRef, snapshot: ClusterSnapshot, now: datetime) -> Pane:
    title = f"{kind_spec(ref.kind).label}: {ref.name}"
    record = snapshot.find(ref)
    if record is None:
        return Pane(kind=PaneKind.DETAIL, title=title, message=MISSING_DETAIL_MESSAGE)

    lines = [
        f"Name:       {record.name}",
        f"Namespace:  {record.namespace or '-'}",
        f"Status:     {record.status or '-'}",
        f"Age:        {format_age(record.age_seconds(now))}",
    ]
    if record.labels:
        lines.append("Labels:")
        lines.extend(f"  {key}={value}" for key, value in sorted(record.labels.items()))
    if record.fields:
        lines.append("Fields:")
        for key, value in record.fields.items():
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(item) for item in value) or "-"
            lines.append(f"  {key}: {value}")
    return Pane(kind=PaneKind.DETAIL, title=title, detail_lines=tuple(lines))


def summarize_utilization(snapshot: ClusterSnapshot) -> UtilizationInfo:
    """Average CPU and memory usage across nodes that report metrics."""
    metrics = snapshot.outcome(ResourceKind.NODE_METRICS)
    if metrics is None:
        return UtilizationInfo(message=LOADING_PANE_MESSAGE)
    if not metrics.ok:
        return UtilizationInfo(message=error_message(metrics))

    allocatable = {
        record.name: record for record in snapshot.records(ResourceKind.NODES)
    }
    cpu_used = cpu_total = mem_used = mem_total = 0.0
    for usage in metrics.records:
        node = allocatable.get(usage.name)
        if node is None:
            continue
        cpu_used += float(usage.field("cpu_usage", 0))
        mem_used += float(usage.field("memory_usage", 0))
        cpu_total += float(node.field("cpu_allocatable", 0))
        mem_total += float(node.field("memory_allocatable", 0))

    if cpu_total <= 0 or mem_total <= 0:
        return UtilizationInfo(message="No node metrics available")
    return UtilizationInfo(
        cpu_percent=min(100.0, cpu_used / cpu_total * 100),
        memory_percent=min(100.0, mem_used / mem_total * 100),
    )


__all__ = [
    "Frame",
    "HeaderInfo",
    "Pane",
    "TabInfo",
    "UtilizationInfo",
    "error_message",
    "render",
    "summarize_utilization",
]
