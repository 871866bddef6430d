"""Static metadata for every ResourceKind.

The kind set is closed, so per-kind behaviour (kubectl resource name, scope,
whether it may be deleted, tab label) is looked up by tag in one table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from kubedash.constants.enums import ResourceKind


@dataclass(frozen=True)
class KindSpec:
    """Metadata describing one resource kind."""

    kind: ResourceKind
    label: str
    kubectl_resource: str
    namespaced: bool
    deletable: bool = True
    shown_as_tab: bool = True


KIND_SPECS: Final[dict[ResourceKind, KindSpec]] = {
    spec.kind: spec
    for spec in (
        KindSpec(ResourceKind.PODS, "Pods", "pods", namespaced=True),
        KindSpec(ResourceKind.SERVICES, "Services", "services", namespaced=True),
        KindSpec(ResourceKind.NODES, "Nodes", "nodes", namespaced=False),
        KindSpec(ResourceKind.NAMESPACES, "Namespaces", "namespaces", namespaced=False),
        KindSpec(
            ResourceKind.DEPLOYMENTS, "Deployments", "deployments.apps", namespaced=True
        ),
        KindSpec(
            ResourceKind.REPLICA_SETS, "ReplicaSets", "replicasets.apps", namespaced=True
        ),
        KindSpec(
            ResourceKind.STATEFUL_SETS,
            "StatefulSets",
            "statefulsets.apps",
            namespaced=True,
        ),
        KindSpec(
            ResourceKind.DAEMON_SETS, "DaemonSets", "daemonsets.apps", namespaced=True
        ),
        KindSpec(ResourceKind.JOBS, "Jobs", "jobs.batch", namespaced=True),
        KindSpec(ResourceKind.CRON_JOBS, "CronJobs", "cronjobs.batch", namespaced=True),
        KindSpec(ResourceKind.CONFIGMAPS, "ConfigMaps", "configmaps", namespaced=True),
        KindSpec(ResourceKind.SECRETS, "Secrets", "secrets", namespaced=True),
        KindSpec(
            ResourceKind.EVENTS, "Events", "events", namespaced=True, deletable=False
        ),
        KindSpec(
            ResourceKind.CONTEXTS, "Contexts", "", namespaced=False, deletable=False
        ),
        KindSpec(
            ResourceKind.NODE_METRICS,
            "Node Metrics",
            "nodes",
            namespaced=False,
            deletable=False,
            shown_as_tab=False,
        ),
    )
}

TAB_KINDS: Final[tuple[ResourceKind, ...]] = tuple(
    kind for kind, spec in KIND_SPECS.items() if spec.shown_as_tab
)


def kind_spec(kind: ResourceKind) -> KindSpec:
    """Return the metadata for ``kind``."""
    return KIND_SPECS[kind]


__all__ = [
    "KIND_SPECS",
    "TAB_KINDS",
    "KindSpec",
    "kind_spec",
]
